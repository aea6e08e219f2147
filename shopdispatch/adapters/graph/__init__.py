"""Graph adapters - Implementations of graph-related ports.

Available implementations:
- InMemoryGraphStore: Append-only weighted directed graph
- DijkstraEngine: Single-source shortest paths with tie counting
"""

from .dijkstra_engine import DijkstraEngine
from .memory_store import InMemoryGraphStore

__all__ = ["InMemoryGraphStore", "DijkstraEngine"]
