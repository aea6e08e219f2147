"""I/O ports - How simulation input arrives and results leave.

Reading the line protocol and formatting console output are kept out
of the services; they only exchange domain records with these ports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Protocol

if TYPE_CHECKING:
    from ..domain.models import DispatchOutcome, Policy, SimulationInput


class SimulationReaderPort(Protocol):
    """Port producing a validated SimulationInput.

    Implementation: adapters/io/text_reader.py
    """

    def read(self, lines: Iterable[str], policy: Policy) -> SimulationInput:
        """Parse the whole input for the given policy.

        Raises:
            MalformedInputError: If a count or cost is not an integer, or
                the input ends early. The error carries the partial input.
        """
        ...


class ResultWriterPort(Protocol):
    """Port consuming dispatch outcomes for display.

    Implementation: adapters/io/text_writer.py
    """

    def write_outcome(self, outcome: DispatchOutcome) -> None:
        """Emit the lines for one request."""
        ...

    def write_input_error(self, message: str) -> None:
        """Emit a message about unreadable input."""
        ...
