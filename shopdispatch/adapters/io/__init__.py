"""I/O adapters - Text input and output of a simulation.

Available implementations:
- LineProtocolReader: Parses the line-oriented simulation format
- StreamResultWriter: Writes outcomes to output and error streams
"""

from .text_reader import LineProtocolReader, read_simulation_input
from .text_writer import StreamResultWriter

__all__ = ["LineProtocolReader", "StreamResultWriter", "read_simulation_input"]
