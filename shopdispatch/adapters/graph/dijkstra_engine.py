"""Dijkstra shortest-path engine adapter.

Computes, from one source vertex, the distance, predecessor and number
of tied shortest paths of every reachable vertex. All per-run state is
allocated inside the call, so a graph can be shared between runs (and
threads) without resetting anything on the vertices.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ...domain.errors import NegativeEdgeError, VertexNotFoundError
from ...domain.models import UNREACHABLE, ShortestPathTree
from ...ports.cache import CachePort
from ...ports.graph import GraphStorePort


@dataclass
class DijkstraEngine:
    """Single-source shortest paths with tie counting.

    This adapter implements ShortestPathEnginePort.

    Attributes:
        cache: Optional memo of trees keyed by graph id, revision and source
    """

    cache: Optional[CachePort[ShortestPathTree]] = None
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def compute_shortest_paths(
        self, graph: GraphStorePort, source_name: str
    ) -> ShortestPathTree:
        """Run Dijkstra from ``source_name``.

        Args:
            graph: The graph to traverse.
            source_name: Name of the source vertex.

        Returns:
            ShortestPathTree rooted at ``source_name``.

        Raises:
            VertexNotFoundError: If the source is not in the graph.
            NegativeEdgeError: If a negative edge is reached. The whole
                run is discarded; no partial tree is returned or cached.
        """
        if source_name not in graph:
            raise VertexNotFoundError(
                "Start vertex not found",
                vertex_name=source_name,
                role="start",
            )

        if self.cache is None:
            return self._dijkstra(graph, source_name)

        key = f"{graph.graph_id}:{graph.revision}:{source_name}"
        return self.cache.get_or_compute(
            key, lambda: self._dijkstra(graph, source_name)
        )

    def _dijkstra(self, graph: GraphStorePort, start: str) -> ShortestPathTree:
        """Core relaxation loop.

        The heap may hold several entries for one vertex; entries whose
        vertex is already settled are skipped when popped.
        """
        vertex_names = frozenset(vertex.name for vertex in graph.all_vertices())
        total = len(vertex_names)

        distances: Dict[str, float] = {start: 0.0}
        previous: Dict[str, str] = {}
        counts: Dict[str, int] = {start: 1}

        heap: List[Tuple[float, str]] = [(0.0, start)]
        visited: Set[str] = set()

        while heap and len(visited) < total:
            _, u = heapq.heappop(heap)

            if u in visited:
                continue

            visited.add(u)
            current_distance = distances[u]

            for edge in graph.get_vertex(u).edges:
                v = edge.destination
                if edge.cost < 0:
                    self._logger.warning(
                        "Negative edge reached",
                        extra={
                            "source": u,
                            "destination": v,
                            "cost": edge.cost,
                            "start": start,
                        },
                    )
                    raise NegativeEdgeError(
                        "Graph has negative edges",
                        source=u,
                        destination=v,
                        cost=edge.cost,
                    )

                new_distance = current_distance + edge.cost
                known = distances.get(v, UNREACHABLE)
                if new_distance < known:
                    distances[v] = new_distance
                    previous[v] = u
                    counts[v] = counts[u]
                    heapq.heappush(heap, (new_distance, v))
                elif new_distance == known and v not in visited:
                    # A settled vertex already passed its count on.
                    counts[v] += counts[u]

        self._logger.debug(
            "Shortest paths computed",
            extra={
                "start": start,
                "settled": len(visited),
                "reachable": len(distances),
                "vertices": total,
            },
        )

        return ShortestPathTree(
            source=start,
            distances=distances,
            predecessors=previous,
            path_counts=counts,
            settled=frozenset(visited),
            vertex_names=vertex_names,
        )
