"""Text writer for dispatch outcomes.

Helped clients are written to the output stream. Unhelped clients get
their "client" line on the output stream and the failure on the error
stream, as do negative-edge failures.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Iterable, TextIO

from ...domain.models import DispatchOutcome, OutcomeStatus

CANNOT_BE_HELPED = "cannot be helped"
NEGATIVE_EDGES = "graph has negative edges"
INCORRECT_INPUT = "Incorrect input was entered, please try again"


@dataclass
class StreamResultWriter:
    """Writes outcomes as plain text lines.

    This adapter implements ResultWriterPort.

    Attributes:
        out: Stream for results
        err: Stream for per-client failures
    """

    out: TextIO = field(default_factory=lambda: sys.stdout)
    err: TextIO = field(default_factory=lambda: sys.stderr)

    def write_outcome(self, outcome: DispatchOutcome) -> None:
        if outcome.status is OutcomeStatus.HELPED and outcome.report is not None:
            self._emit(self.out, outcome.report.lines())
        elif outcome.status is OutcomeStatus.NEGATIVE_EDGE:
            self._emit(self.err, (NEGATIVE_EDGES,))
        else:
            self._emit(self.out, (f"client {outcome.request.client}",))
            self._emit(self.err, (CANNOT_BE_HELPED,))

    def write_input_error(self, message: str = INCORRECT_INPUT) -> None:
        self._emit(self.out, (message,))

    @staticmethod
    def _emit(stream: TextIO, lines: Iterable[str]) -> None:
        for line in lines:
            stream.write(f"{line}\n")
        stream.flush()
