"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the dispatch services and the
adapters that store the graph, compute shortest paths, cache runs and
exchange text with the outside world.
"""

from .cache import CachePort
from .graph import GraphStorePort, ShortestPathEnginePort
from .io import ResultWriterPort, SimulationReaderPort

__all__ = [
    # Graph
    "GraphStorePort",
    "ShortestPathEnginePort",
    # Cache
    "CachePort",
    # I/O
    "SimulationReaderPort",
    "ResultWriterPort",
]
