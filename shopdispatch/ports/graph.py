"""Graph ports - Abstractions for graph storage and shortest paths.

These protocols define the contracts between the dispatch services and
the concrete graph store and engine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import EdgeRecord, ShortestPathTree, Vertex


class GraphStorePort(Protocol):
    """Port for the weighted directed graph.

    Implementation: adapters/graph/memory_store.py

    The store owns vertices and edges. Structure is append-only: nothing
    is removed, and every change bumps ``revision``.
    """

    @property
    def graph_id(self) -> str:
        """Identifier unique to this store for the life of the process."""
        ...

    @property
    def revision(self) -> int:
        """Counter incremented on every structural change."""
        ...

    def add_edge(self, source_name: str, dest_name: str, cost: float) -> None:
        """Add a directed edge, creating both vertices if needed.

        Args:
            source_name: Name of the edge's source vertex.
            dest_name: Name of the edge's destination vertex.
            cost: Edge cost. The sign is not checked here.
        """
        ...

    def add_edges(self, records: Iterable[EdgeRecord]) -> None:
        """Add every edge record in order."""
        ...

    def get_or_create_vertex(self, name: str) -> Vertex:
        """Return the vertex called ``name``, creating it if absent."""
        ...

    def get_vertex(self, name: str) -> Vertex:
        """Return the vertex called ``name``.

        Raises:
            VertexNotFoundError: If no such vertex exists.
        """
        ...

    def all_vertices(self) -> Sequence[Vertex]:
        """Return every vertex currently known."""
        ...

    def __contains__(self, name: object) -> bool: ...

    def __len__(self) -> int: ...


class ShortestPathEnginePort(Protocol):
    """Port for single-source shortest-path computation.

    Implementation: adapters/graph/dijkstra_engine.py
    """

    def compute_shortest_paths(
        self, graph: GraphStorePort, source_name: str
    ) -> ShortestPathTree:
        """Compute distances, predecessors and tie counts from a source.

        Args:
            graph: The graph to traverse.
            source_name: Name of the source vertex.

        Returns:
            The shortest-path tree rooted at ``source_name``.

        Raises:
            VertexNotFoundError: If the source is not in the graph.
            NegativeEdgeError: If a reachable edge has a negative cost.
        """
        ...
