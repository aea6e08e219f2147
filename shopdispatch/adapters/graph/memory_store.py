"""In-memory graph store adapter.

Holds the weighted directed graph as a mapping from vertex name to
Vertex. Vertices appear the first time a name is referenced and are
never removed; edges are only appended.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, Iterable, Sequence

from ...domain.errors import VertexNotFoundError
from ...domain.models import Edge, EdgeRecord, Vertex


@dataclass
class InMemoryGraphStore:
    """Graph store kept entirely in process memory.

    This adapter implements GraphStorePort.
    """

    _graph_id: str = field(default_factory=lambda: uuid.uuid4().hex, repr=False)
    _vertices: Dict[str, Vertex] = field(default_factory=dict, repr=False)
    _revision: int = field(default=0, repr=False)
    _edge_count: int = field(default=0, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_edges(cls, records: Iterable[EdgeRecord]) -> InMemoryGraphStore:
        """Build a store holding every record, in order."""
        store = cls()
        store.add_edges(records)
        return store

    @property
    def graph_id(self) -> str:
        return self._graph_id

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def edge_count(self) -> int:
        return self._edge_count

    def add_edge(self, source_name: str, dest_name: str, cost: float) -> None:
        """Append the directed edge ``source_name -> dest_name``.

        Parallel edges are kept; the cost sign is checked at traversal
        time, not here.
        """
        source = self.get_or_create_vertex(source_name)
        self.get_or_create_vertex(dest_name)
        source.edges.append(Edge(destination=dest_name, cost=float(cost)))
        self._edge_count += 1
        self._revision += 1

    def add_edges(self, records: Iterable[EdgeRecord]) -> None:
        added = 0
        for record in records:
            self.add_edge(record.source, record.destination, record.cost)
            added += 1
        self._logger.debug(
            "Edges added",
            extra={"edges": added, "vertices": len(self._vertices)},
        )

    def get_or_create_vertex(self, name: str) -> Vertex:
        vertex = self._vertices.get(name)
        if vertex is None:
            vertex = Vertex(name=name)
            self._vertices[name] = vertex
            self._revision += 1
        return vertex

    def get_vertex(self, name: str) -> Vertex:
        vertex = self._vertices.get(name)
        if vertex is None:
            raise VertexNotFoundError(
                f"Vertex not found: {name}",
                vertex_name=name,
            )
        return vertex

    def all_vertices(self) -> Sequence[Vertex]:
        return list(self._vertices.values())

    def __contains__(self, name: object) -> bool:
        return name in self._vertices

    def __len__(self) -> int:
        return len(self._vertices)
