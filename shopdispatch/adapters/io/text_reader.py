"""Line-protocol reader.

Parses the whitespace-separated text format of a simulation:

    N
    source dest cost [dest cost ...]      (N lines)
    shop count
    shop names
    taxi count                            (taxi policy only)
    taxi names                            (taxi policy only)
    client count
    clients                               (shop policy: names;
                                           taxi policy: "client shop" lines)

Costs and counts are integers. Blank lines are ignored. Shop and taxi
names sit on exactly one line whose token count must match its count.
Shop-policy clients may be one per line or several to a line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from ...domain.errors import MalformedInputError
from ...domain.models import DispatchRequest, EdgeRecord, Policy, SimulationInput


@dataclass
class _Cursor:
    """Walks non-blank lines, remembering where it is."""

    lines: Iterator[Tuple[int, str]]
    line_number: int = 0
    line: str = ""

    def next_line(self) -> str:
        for number, raw in self.lines:
            text = raw.strip()
            if text:
                self.line_number = number
                self.line = text
                return text
        self.line_number = 0
        self.line = ""
        raise MalformedInputError("Unexpected end of input")

    def error(self, message: str, cause: Optional[Exception] = None) -> MalformedInputError:
        return MalformedInputError(
            message,
            cause=cause,
            line_number=self.line_number,
            line=self.line,
        )

    def next_int(self) -> int:
        text = self.next_line()
        try:
            return int(text)
        except ValueError as e:
            raise self.error("Expected an integer count", cause=e)


@dataclass
class LineProtocolReader:
    """Reads a SimulationInput from lines of text.

    This adapter implements SimulationReaderPort.
    """

    _edges: List[EdgeRecord] = field(default_factory=list, repr=False)
    _shops: List[str] = field(default_factory=list, repr=False)
    _taxis: List[str] = field(default_factory=list, repr=False)
    _requests: List[DispatchRequest] = field(default_factory=list, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def read(self, lines: Iterable[str], policy: Policy) -> SimulationInput:
        """Parse the whole input for ``policy``.

        Raises:
            MalformedInputError: With ``partial`` set to everything read
                before the failing line.
        """
        self._edges, self._shops, self._taxis, self._requests = [], [], [], []
        cursor = _Cursor(lines=iter(enumerate(lines, start=1)))

        try:
            self._read_edges(cursor)
            self._shops = self._read_names(cursor)
            if policy is Policy.TAXIS:
                self._taxis = self._read_names(cursor)
            self._read_requests(cursor, policy)
        except MalformedInputError as e:
            e.partial = self._snapshot()
            self._logger.warning(
                "Malformed input",
                extra={"line_number": e.line_number, "line": e.line, "error": e.message},
            )
            raise

        result = self._snapshot()
        self._logger.info(
            "Input read",
            extra={
                "policy": policy.value,
                "edges": len(result.edges),
                "shops": len(result.shops),
                "taxis": len(result.taxis),
                "requests": len(result.requests),
            },
        )
        return result

    def _snapshot(self) -> SimulationInput:
        return SimulationInput(
            edges=tuple(self._edges),
            shops=tuple(self._shops),
            taxis=tuple(self._taxis),
            requests=tuple(self._requests),
        )

    def _read_edges(self, cursor: _Cursor) -> None:
        for _ in range(cursor.next_int()):
            tokens = cursor.next_line().split()
            source, pairs = tokens[0], tokens[1:]
            if len(pairs) % 2 != 0:
                raise cursor.error("Expected destination and cost pairs")

            for dest, cost_text in zip(pairs[::2], pairs[1::2]):
                try:
                    cost = int(cost_text)
                except ValueError as e:
                    raise cursor.error(f"Edge cost is not an integer: {cost_text}", cause=e)
                self._edges.append(EdgeRecord(source=source, destination=dest, cost=float(cost)))

    def _read_names(self, cursor: _Cursor) -> List[str]:
        count = cursor.next_int()
        if count == 0:
            return []
        names = cursor.next_line().split()
        if len(names) != count:
            raise cursor.error(f"Expected {count} names, got {len(names)}")
        return names

    def _read_requests(self, cursor: _Cursor, policy: Policy) -> None:
        count = cursor.next_int()
        if policy is Policy.SHOPS:
            read = 0
            while read < count:
                clients = cursor.next_line().split()
                if read + len(clients) > count:
                    raise cursor.error(f"More than {count} clients")
                for client in clients:
                    self._requests.append(DispatchRequest(client=client))
                read += len(clients)
            return

        for _ in range(count):
            tokens = cursor.next_line().split()
            if len(tokens) < 2:
                raise cursor.error("Expected a client and a shop")
            self._requests.append(DispatchRequest(client=tokens[0], shop=tokens[1]))


def read_simulation_input(lines: Iterable[str], policy: Policy) -> SimulationInput:
    """Parse ``lines`` with a fresh LineProtocolReader."""
    return LineProtocolReader().read(lines, policy)
