"""Domain layer - Core models and errors.

This module contains the graph records, per-run results and typed
errors used throughout the application. No external dependencies.
"""

from .errors import (
    DispatchError,
    MalformedInputError,
    NegativeEdgeError,
    NoCandidateError,
    NotFoundError,
    VertexNotFoundError,
)
from .models import (
    UNREACHABLE,
    CandidateReport,
    ClientReport,
    DispatchOutcome,
    DispatchRequest,
    Edge,
    EdgeRecord,
    OutcomeStatus,
    PathSummary,
    Policy,
    ShortestPathTree,
    SimulationInput,
    Vertex,
)

__all__ = [
    # Models
    "UNREACHABLE",
    "Edge",
    "Vertex",
    "EdgeRecord",
    "ShortestPathTree",
    "PathSummary",
    "CandidateReport",
    "ClientReport",
    "DispatchRequest",
    "DispatchOutcome",
    "OutcomeStatus",
    "Policy",
    "SimulationInput",
    # Errors
    "DispatchError",
    "NotFoundError",
    "VertexNotFoundError",
    "NoCandidateError",
    "NegativeEdgeError",
    "MalformedInputError",
]
