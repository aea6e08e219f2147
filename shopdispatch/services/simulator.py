"""Simulation runner - builds a graph per run and serves every request.

Requests are independent: each goes through its policy's
``dispatch_safe`` boundary, so a client that cannot be helped (or whose
routes reach a negative edge) is reported and the next one is served.
Outcomes are written in input order, including when several worker
threads share the graph.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator, List

from ..domain.errors import MalformedInputError
from ..domain.models import DispatchOutcome, DispatchRequest, Policy, SimulationInput
from ..ports.graph import GraphStorePort
from ..ports.io import ResultWriterPort, SimulationReaderPort
from .dispatch import ShopDispatchService, TaxiDispatchService


@dataclass
class SimulationRunner:
    """Runs simulations, each against a graph of its own.

    Attributes:
        graph_factory: Builds the empty graph a run loads its edges into
        shop_dispatch: Shop-selection policy, rebound to each run's graph
        taxi_dispatch: Taxi-to-fixed-shop policy, rebound likewise
        reader: Parses the text input
        writer: Receives every outcome
        max_workers: Number of threads serving requests (1 = sequential)
    """

    graph_factory: Callable[[], GraphStorePort]
    shop_dispatch: ShopDispatchService
    taxi_dispatch: TaxiDispatchService
    reader: SimulationReaderPort
    writer: ResultWriterPort
    max_workers: int = 1

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def run_lines(self, lines: Iterable[str], policy: Policy) -> List[DispatchOutcome]:
        """Parse ``lines`` and run the simulation.

        With the taxi policy, malformed input is reported and whatever
        was parsed before the error is still served.

        Raises:
            MalformedInputError: With the shop policy, on malformed input.
        """
        try:
            simulation = self.reader.read(lines, policy)
        except MalformedInputError as e:
            if policy is not Policy.TAXIS or e.partial is None:
                raise
            self.writer.write_input_error()
            simulation = e.partial

        return self.run(simulation, policy)

    def run(self, simulation: SimulationInput, policy: Policy) -> List[DispatchOutcome]:
        """Load the simulation's edges into a new graph and serve its requests."""
        graph = self.graph_factory()
        graph.add_edges(simulation.edges)
        serve = self._server_for(graph, simulation, policy)

        outcomes: List[DispatchOutcome] = []
        for outcome in self._serve_all(serve, simulation.requests):
            self.writer.write_outcome(outcome)
            outcomes.append(outcome)

        helped = sum(1 for outcome in outcomes if outcome.is_helped)
        self._logger.info(
            "Simulation finished",
            extra={
                "policy": policy.value,
                "requests": len(outcomes),
                "helped": helped,
                "unhelped": len(outcomes) - helped,
            },
        )
        return outcomes

    def _server_for(
        self, graph: GraphStorePort, simulation: SimulationInput, policy: Policy
    ) -> Callable[[DispatchRequest], DispatchOutcome]:
        if policy is Policy.TAXIS:
            taxi_dispatch = self.taxi_dispatch.for_graph(graph)
            taxis = simulation.taxis
            return lambda request: taxi_dispatch.dispatch_safe(request, taxis)
        shop_dispatch = self.shop_dispatch.for_graph(graph)
        shops = simulation.shops
        return lambda request: shop_dispatch.dispatch_safe(request, shops)

    def _serve_all(
        self,
        serve: Callable[[DispatchRequest], DispatchOutcome],
        requests: Iterable[DispatchRequest],
    ) -> Iterator[DispatchOutcome]:
        if self.max_workers <= 1:
            for request in requests:
                yield serve(request)
            return

        with ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix="dispatch",
        ) as executor:
            yield from executor.map(serve, requests)
