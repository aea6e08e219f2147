"""Path reporter - distances, tie counts and rendered paths.

Sits between the dispatch policies and the engine: it runs the engine
for a source, reads back what the policies need about one destination,
and turns a predecessor chain into the text shown to the user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from ..domain.models import CandidateReport, PathSummary, ShortestPathTree
from ..ports.graph import GraphStorePort, ShortestPathEnginePort


@dataclass
class PathReporter:
    """Query and render shortest paths over one graph.

    Attributes:
        graph: The graph every query runs against
        engine: Shortest-path engine
    """

    graph: GraphStorePort
    engine: ShortestPathEnginePort

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def for_graph(self, graph: GraphStorePort) -> PathReporter:
        """Return a reporter with the same engine, querying ``graph``."""
        return replace(self, graph=graph)

    def shortest_paths_from(self, source_name: str) -> ShortestPathTree:
        return self.engine.compute_shortest_paths(self.graph, source_name)

    def distance_and_count(self, source_name: str, dest_name: str) -> PathSummary:
        """Run the engine from ``source_name`` and summarise ``dest_name``.

        Args:
            source_name: Start vertex.
            dest_name: Destination vertex.

        Returns:
            PathSummary with the tie count and distance; UNREACHABLE and
            a count of 0 when no path exists.

        Raises:
            VertexNotFoundError: If either name is unknown.
            NegativeEdgeError: If the run reaches a negative edge.
        """
        tree = self.shortest_paths_from(source_name)
        return _summarise(tree, dest_name)

    def render_path(self, tree: ShortestPathTree, dest_name: str) -> str:
        """Render the recorded path to ``dest_name``.

        Returns:
            Vertex names from the run's source to ``dest_name`` separated
            by single spaces, or "<dest_name> is unreachable".

        Raises:
            VertexNotFoundError: If ``dest_name`` is unknown.
        """
        path = tree.path_to(dest_name)
        if not path:
            return f"{dest_name} is unreachable"
        return " ".join(path)

    def describe(
        self, role: str, name: str, source_name: str, dest_name: str
    ) -> CandidateReport:
        """Build the report for one matched candidate.

        The path is rendered only when it is unique; with several tied
        paths the report carries the tie count and cost instead.

        Args:
            role: Output label ("taxi", "shop").
            name: Candidate shown in the report header.
            source_name: Start of the reported route.
            dest_name: End of the reported route.
        """
        tree = self.shortest_paths_from(source_name)
        summary = _summarise(tree, dest_name)
        rendered = "" if summary.is_ambiguous else self.render_path(tree, dest_name)

        self._logger.debug(
            "Candidate described",
            extra={
                "role": role,
                "candidate": name,
                "source": source_name,
                "destination": dest_name,
                "path_count": summary.path_count,
                "distance": summary.distance,
            },
        )
        return CandidateReport(
            role=role,
            name=name,
            summary=summary,
            rendered_path=rendered,
        )


def _summarise(tree: ShortestPathTree, dest_name: str) -> PathSummary:
    return PathSummary(
        source=tree.source,
        destination=dest_name,
        path_count=tree.path_count(dest_name),
        distance=tree.distance_to(dest_name),
        path=tree.path_to(dest_name),
    )
