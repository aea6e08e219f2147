"""Dispatch services - match a client to its nearest candidates.

Two policies share the same selection rule: scan a pool, keep the
smallest finite distance seen so far and every candidate tied with it
(a strictly smaller distance restarts the set).

- ShopDispatchService: nearest shop to pick the client up and nearest
  shop to drop the client off, from one shop pool.
- TaxiDispatchService: nearest taxi to the client, then the route from
  the client to a fixed shop.

``dispatch`` raises typed errors; ``dispatch_safe`` is the request
boundary that turns them into a DispatchOutcome so one client's failure
never stops the batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Callable, List, Sequence

from ..domain.errors import (
    NegativeEdgeError,
    NoCandidateError,
    NotFoundError,
    VertexNotFoundError,
)
from ..domain.models import (
    UNREACHABLE,
    CandidateReport,
    ClientReport,
    DispatchOutcome,
    DispatchRequest,
    OutcomeStatus,
)
from ..ports.graph import GraphStorePort
from .path_reporter import PathReporter


@dataclass
class NearestCandidates:
    """Running minimum over a candidate pool, keeping ties."""

    distance: float = UNREACHABLE
    names: List[str] = field(default_factory=list)

    def offer(self, name: str, distance: float) -> None:
        if distance == UNREACHABLE:
            return
        if distance < self.distance:
            self.distance = distance
            self.names = [name]
        elif distance == self.distance:
            self.names.append(name)

    def __bool__(self) -> bool:
        return bool(self.names)


@dataclass
class ShopDispatchService:
    """Shop-selection policy.

    Attributes:
        reporter: Path reporter bound to the simulation graph
        pickup_label: Role printed for shops sent to the client
        dropoff_label: Role printed for shops the client is taken to
    """

    reporter: PathReporter
    pickup_label: str = "taxi"
    dropoff_label: str = "shop"

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def for_graph(self, graph: GraphStorePort) -> ShopDispatchService:
        return replace(self, reporter=self.reporter.for_graph(graph))

    def dispatch(self, client: str, shops: Sequence[str]) -> ClientReport:
        """Find the nearest shops in both directions for ``client``.

        Args:
            client: Client vertex name.
            shops: Shop pool, scanned in order.

        Returns:
            ClientReport listing every nearest pickup shop (route shop to
            client) then every nearest drop-off shop (route client to shop).

        Raises:
            NoCandidateError: If no shop is reachable in one direction.
            VertexNotFoundError: If the client or a shop is unknown.
            NegativeEdgeError: If a run reaches a negative edge.
        """
        from_shop = NearestCandidates()
        to_shop = NearestCandidates()

        for shop in shops:
            from_shop.offer(shop, self.reporter.distance_and_count(shop, client).distance)
            to_shop.offer(shop, self.reporter.distance_and_count(client, shop).distance)

        if not from_shop or not to_shop:
            raise NoCandidateError(
                "Cannot be helped",
                client=client,
                pool="shops",
            )

        candidates: List[CandidateReport] = []
        for shop in from_shop.names:
            candidates.append(
                self.reporter.describe(self.pickup_label, shop, shop, client)
            )
        for shop in to_shop.names:
            candidates.append(
                self.reporter.describe(self.dropoff_label, shop, client, shop)
            )

        self._logger.info(
            "Client dispatched",
            extra={
                "client": client,
                "pickup": list(from_shop.names),
                "pickup_distance": from_shop.distance,
                "dropoff": list(to_shop.names),
                "dropoff_distance": to_shop.distance,
            },
        )
        return ClientReport(client=client, candidates=tuple(candidates))

    def dispatch_safe(
        self, request: DispatchRequest, shops: Sequence[str]
    ) -> DispatchOutcome:
        """Dispatch one request, returning failures as an outcome."""
        return _run_safely(
            self._logger, request, lambda: self.dispatch(request.client, shops)
        )


@dataclass
class TaxiDispatchService:
    """Taxi-to-fixed-shop policy.

    Attributes:
        reporter: Path reporter bound to the simulation graph
        pickup_label: Role printed for taxis sent to the client
        dropoff_label: Role printed for the requested shop
    """

    reporter: PathReporter
    pickup_label: str = "taxi"
    dropoff_label: str = "shop"

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def for_graph(self, graph: GraphStorePort) -> TaxiDispatchService:
        return replace(self, reporter=self.reporter.for_graph(graph))

    def dispatch(self, client: str, shop: str, taxis: Sequence[str]) -> ClientReport:
        """Find the nearest taxis for ``client`` and the route to ``shop``.

        Args:
            client: Client vertex name.
            shop: Shop the client wants to reach.
            taxis: Taxi pool, scanned in order.

        Returns:
            ClientReport listing every nearest taxi (route taxi to client)
            followed by the route from the client to ``shop``, which may
            render as unreachable.

        Raises:
            NoCandidateError: If no taxi reaches the client.
            VertexNotFoundError: If the client, shop or a taxi is unknown.
            NegativeEdgeError: If a run reaches a negative edge.
        """
        nearest = NearestCandidates()

        for taxi in taxis:
            nearest.offer(taxi, self.reporter.distance_and_count(taxi, client).distance)
            # Checks the shop exists; the route itself is reported below.
            self.reporter.distance_and_count(client, shop)

        if not nearest:
            raise NoCandidateError(
                "Cannot be helped",
                client=client,
                pool="taxis",
            )

        candidates: List[CandidateReport] = [
            self.reporter.describe(self.pickup_label, taxi, taxi, client)
            for taxi in nearest.names
        ]
        candidates.append(self.reporter.describe(self.dropoff_label, shop, client, shop))

        self._logger.info(
            "Client dispatched",
            extra={
                "client": client,
                "shop": shop,
                "taxis": list(nearest.names),
                "taxi_distance": nearest.distance,
            },
        )
        return ClientReport(client=client, candidates=tuple(candidates))

    def dispatch_safe(
        self, request: DispatchRequest, taxis: Sequence[str]
    ) -> DispatchOutcome:
        """Dispatch one request, returning failures as an outcome."""
        return _run_safely(
            self._logger, request, lambda: self._dispatch_request(request, taxis)
        )

    def _dispatch_request(
        self, request: DispatchRequest, taxis: Sequence[str]
    ) -> ClientReport:
        if request.shop is None:
            raise VertexNotFoundError(
                "No shop requested",
                vertex_name="",
                role="destination",
            )
        return self.dispatch(request.client, request.shop, taxis)


def _run_safely(
    logger: logging.Logger,
    request: DispatchRequest,
    call: Callable[[], ClientReport],
) -> DispatchOutcome:
    try:
        report = call()
    except NotFoundError as e:
        logger.warning(
            "Client cannot be helped",
            extra={"client": request.client, "error": str(e)},
        )
        return DispatchOutcome(
            request=request,
            status=OutcomeStatus.CANNOT_BE_HELPED,
            error=e,
        )
    except NegativeEdgeError as e:
        logger.warning(
            "Request abandoned on negative edge",
            extra={
                "client": request.client,
                "source": e.source,
                "destination": e.destination,
                "cost": e.cost,
            },
        )
        return DispatchOutcome(
            request=request,
            status=OutcomeStatus.NEGATIVE_EDGE,
            error=e,
        )
    return DispatchOutcome(request=request, status=OutcomeStatus.HELPED, report=report)
