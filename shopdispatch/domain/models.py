"""Domain models for the dispatch simulator.

Result and record types are frozen dataclasses with slots. The only
mutable structure is the graph itself (vertices and their outgoing
edges), which is append-only while it is being built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Mapping, Optional

from .errors import DispatchError, VertexNotFoundError

# Distance of every vertex that no path reaches.
UNREACHABLE: float = float("inf")


class Policy(Enum):
    """Matching policy of a simulation run."""

    SHOPS = "shops"
    TAXIS = "taxis"


class OutcomeStatus(Enum):
    """How a single dispatch request ended."""

    HELPED = auto()
    CANNOT_BE_HELPED = auto()
    NEGATIVE_EDGE = auto()


@dataclass(frozen=True, slots=True)
class Edge:
    """A directed edge, owned by its source vertex."""

    destination: str
    cost: float


@dataclass(slots=True)
class Vertex:
    """A named vertex and its outgoing edges.

    Only structure lives here. Distances, predecessors and path counts
    belong to a single run and are kept in a ShortestPathTree instead.
    """

    name: str
    edges: List[Edge] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class EdgeRecord:
    """An edge as supplied by an input reader, before it joins a graph."""

    source: str
    destination: str
    cost: float


@dataclass(frozen=True, slots=True)
class ShortestPathTree:
    """Result of one single-source shortest-path run.

    Attributes:
        source: Name of the run's source vertex
        distances: Final distance of every reachable vertex
        predecessors: Previous vertex on the recorded shortest path
        path_counts: Number of tied minimum-cost paths per reachable vertex
        settled: Vertices that were popped and finalized during the run
        vertex_names: Every vertex the graph knew when the run started
    """

    source: str
    distances: Mapping[str, float]
    predecessors: Mapping[str, str]
    path_counts: Mapping[str, int]
    settled: frozenset[str] = field(default_factory=frozenset)
    vertex_names: frozenset[str] = field(default_factory=frozenset)

    def _require(self, name: str) -> None:
        if name not in self.vertex_names:
            raise VertexNotFoundError(
                "Destination vertex not found",
                vertex_name=name,
                role="destination",
            )

    def distance_to(self, name: str) -> float:
        """Return the shortest distance to ``name``, or UNREACHABLE."""
        self._require(name)
        return self.distances.get(name, UNREACHABLE)

    def path_count(self, name: str) -> int:
        """Return how many tied shortest paths reach ``name`` (0 if none)."""
        self._require(name)
        return self.path_counts.get(name, 0)

    def is_reachable(self, name: str) -> bool:
        return self.distance_to(name) != UNREACHABLE

    def path_to(self, name: str) -> tuple[str, ...]:
        """Walk predecessor links back to the source.

        Returns:
            Vertex names from the source to ``name`` inclusive, or an
            empty tuple when ``name`` is unreachable.
        """
        if not self.is_reachable(name):
            return ()

        path: List[str] = [name]
        current = name
        while current != self.source:
            current = self.predecessors[current]
            path.append(current)

        path.reverse()
        return tuple(path)


@dataclass(frozen=True, slots=True)
class PathSummary:
    """Distance and tie count between two named vertices.

    Attributes:
        source: Start of the query
        destination: End of the query
        path_count: Number of tied shortest paths (0 when unreachable)
        distance: Shortest distance, or UNREACHABLE
        path: Recorded shortest path, empty when unreachable
    """

    source: str
    destination: str
    path_count: int
    distance: float
    path: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_reachable(self) -> bool:
        return self.distance != UNREACHABLE

    @property
    def is_ambiguous(self) -> bool:
        """Check if more than one shortest path reaches the destination."""
        return self.path_count > 1


@dataclass(frozen=True, slots=True)
class CandidateReport:
    """One matched candidate of a dispatch answer.

    Attributes:
        role: Output label of the candidate ("taxi", "shop")
        name: Candidate vertex name
        summary: The route the candidate stands for
        rendered_path: Space-separated path, or "<name> is unreachable"
    """

    role: str
    name: str
    summary: PathSummary
    rendered_path: str = ""

    @property
    def is_ambiguous(self) -> bool:
        return self.summary.is_ambiguous

    def lines(self) -> tuple[str, ...]:
        """Return the output lines describing this candidate."""
        header = f"{self.role} {self.name}"
        if self.is_ambiguous:
            return (header, f"multiple solutions cost {int(self.summary.distance)}")
        return (header, self.rendered_path)


@dataclass(frozen=True, slots=True)
class ClientReport:
    """Successful dispatch answer for one client."""

    client: str
    candidates: tuple[CandidateReport, ...] = field(default_factory=tuple)

    def lines(self) -> tuple[str, ...]:
        result = [f"client {self.client}"]
        for candidate in self.candidates:
            result.extend(candidate.lines())
        return tuple(result)


@dataclass(frozen=True, slots=True)
class DispatchRequest:
    """A client asking to be served.

    Attributes:
        client: Client vertex name
        shop: Fixed destination shop (taxi policy only)
    """

    client: str
    shop: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DispatchOutcome:
    """Result value of a dispatch request, successful or not."""

    request: DispatchRequest
    status: OutcomeStatus
    report: Optional[ClientReport] = None
    error: Optional[DispatchError] = None

    @property
    def is_helped(self) -> bool:
        return self.status is OutcomeStatus.HELPED


@dataclass(frozen=True, slots=True)
class SimulationInput:
    """Everything an input reader produces for one simulation."""

    edges: tuple[EdgeRecord, ...] = field(default_factory=tuple)
    shops: tuple[str, ...] = field(default_factory=tuple)
    taxis: tuple[str, ...] = field(default_factory=tuple)
    requests: tuple[DispatchRequest, ...] = field(default_factory=tuple)
