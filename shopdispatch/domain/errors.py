"""Typed domain errors for the dispatch simulator.

Every failure the engine, the path reporter or the dispatch services can
produce is one of these types, so each layer can decide whether to
recover (skip one client) or propagate (abort the batch).

All errors inherit from DispatchError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import SimulationInput


@dataclass
class DispatchError(Exception):
    """Base error for the dispatch domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class NotFoundError(DispatchError):
    """A request needs something the graph cannot provide.

    Recovered at the request boundary: the client is reported as
    "cannot be helped" and the batch moves on.
    """


@dataclass
class VertexNotFoundError(NotFoundError):
    """A vertex name is not present in the graph.

    Attributes:
        vertex_name: The name that was looked up
        role: Which end of the query it was ("start", "destination", "vertex")
    """

    vertex_name: str = ""
    role: str = "vertex"


@dataclass
class NoCandidateError(NotFoundError):
    """No candidate of the pool is at a finite distance from the client.

    Attributes:
        client: The client being dispatched
        pool: Kind of pool that was searched ("shops" or "taxis")
    """

    client: str = ""
    pool: str = ""


@dataclass
class NegativeEdgeError(DispatchError):
    """An edge with a negative cost was reached during relaxation.

    Attributes:
        source: Name of the edge's source vertex
        destination: Name of the edge's destination vertex
        cost: The offending cost
    """

    source: str = ""
    destination: str = ""
    cost: float = 0.0


@dataclass
class MalformedInputError(DispatchError):
    """The line-oriented input could not be parsed.

    Attributes:
        line_number: 1-based line where parsing failed (0 at end of input)
        line: Raw text of that line
        partial: Everything parsed before the failure
    """

    line_number: int = 0
    line: str = ""
    partial: Optional[SimulationInput] = field(default=None, repr=False)
