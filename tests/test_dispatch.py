"""Tests for the shop and taxi dispatch policies."""

import pytest

from shopdispatch.domain.errors import NoCandidateError, VertexNotFoundError
from shopdispatch.domain.models import DispatchRequest, OutcomeStatus
from shopdispatch.services import (
    NearestCandidates,
    ShopDispatchService,
    TaxiDispatchService,
)


class TestNearestCandidates:
    """Running minimum with ties."""

    def test_ties_are_kept_in_order(self):
        nearest = NearestCandidates()
        nearest.offer("S1", 3)
        nearest.offer("S2", 3)

        assert nearest.names == ["S1", "S2"]
        assert nearest.distance == 3

    def test_smaller_distance_resets(self):
        nearest = NearestCandidates()
        nearest.offer("S1", 3)
        nearest.offer("S2", 3)
        nearest.offer("S3", 1)

        assert nearest.names == ["S3"]

    def test_unreachable_never_enters(self):
        nearest = NearestCandidates()
        nearest.offer("S1", float("inf"))

        assert not nearest
        assert nearest.names == []


class TestShopDispatchService:
    """Shop-selection policy."""

    def test_unreachable_shop_is_ignored(self, make_reporter):
        reporter = make_reporter(
            [
                ("C", "S2", 1),
                ("S2", "C", 2),
                ("S1", "X", 1),
            ]
        )
        service = ShopDispatchService(reporter=reporter)

        report = service.dispatch("C", ["S1", "S2"])

        assert report.lines() == ("client C", "taxi S2", "S2 C", "shop S2", "C S2")

    def test_directions_are_chosen_independently(self, make_reporter):
        reporter = make_reporter(
            [
                ("S1", "C", 1),
                ("C", "S1", 5),
                ("S2", "C", 4),
                ("C", "S2", 2),
            ]
        )
        service = ShopDispatchService(reporter=reporter)

        report = service.dispatch("C", ["S1", "S2"])

        assert [(c.role, c.name) for c in report.candidates] == [("taxi", "S1"), ("shop", "S2")]

    def test_tied_shops_are_all_reported(self, make_reporter):
        reporter = make_reporter(
            [
                ("S1", "C", 2),
                ("S2", "C", 2),
                ("C", "S1", 1),
                ("C", "S2", 3),
            ]
        )
        service = ShopDispatchService(reporter=reporter)

        report = service.dispatch("C", ["S1", "S2"])

        assert report.lines() == (
            "client C",
            "taxi S1",
            "S1 C",
            "taxi S2",
            "S2 C",
            "shop S1",
            "C S1",
        )

    def test_multiple_shortest_paths_report_cost(self, make_reporter):
        reporter = make_reporter(
            [
                ("S", "B", 1),
                ("S", "X", 1),
                ("B", "D", 1),
                ("X", "D", 1),
                ("D", "S", 3),
            ]
        )
        service = ShopDispatchService(reporter=reporter)

        report = service.dispatch("D", ["S"])

        assert report.lines() == (
            "client D",
            "taxi S",
            "multiple solutions cost 2",
            "shop S",
            "D S",
        )

    def test_no_reachable_shop_cannot_be_helped(self, make_reporter):
        reporter = make_reporter([("S1", "X", 1), ("C", "Y", 1)])
        service = ShopDispatchService(reporter=reporter)

        with pytest.raises(NoCandidateError) as excinfo:
            service.dispatch("C", ["S1"])

        assert excinfo.value.client == "C"

    def test_one_direction_missing_cannot_be_helped(self, make_reporter):
        reporter = make_reporter([("S1", "C", 1)])
        service = ShopDispatchService(reporter=reporter)

        with pytest.raises(NoCandidateError):
            service.dispatch("C", ["S1"])

    def test_empty_pool_cannot_be_helped(self, make_reporter):
        service = ShopDispatchService(reporter=make_reporter([("C", "S", 1)]))

        with pytest.raises(NoCandidateError):
            service.dispatch("C", [])

    def test_custom_labels(self, make_reporter):
        reporter = make_reporter([("S", "C", 1), ("C", "S", 1)])
        service = ShopDispatchService(
            reporter=reporter, pickup_label="pickup", dropoff_label="dropoff"
        )

        report = service.dispatch("C", ["S"])

        assert report.lines()[1] == "pickup S"
        assert report.lines()[3] == "dropoff S"

    def test_dispatch_safe_unknown_client(self, make_reporter):
        service = ShopDispatchService(reporter=make_reporter([("S", "A", 1)]))

        outcome = service.dispatch_safe(DispatchRequest(client="ghost"), ["S"])

        assert outcome.status is OutcomeStatus.CANNOT_BE_HELPED
        assert isinstance(outcome.error, VertexNotFoundError)
        assert outcome.report is None

    def test_dispatch_safe_negative_edge(self, make_reporter):
        service = ShopDispatchService(reporter=make_reporter([("S", "C", -1), ("C", "S", 1)]))

        outcome = service.dispatch_safe(DispatchRequest(client="C"), ["S"])

        assert outcome.status is OutcomeStatus.NEGATIVE_EDGE

    def test_dispatch_safe_success(self, make_reporter):
        service = ShopDispatchService(reporter=make_reporter([("S", "C", 1), ("C", "S", 1)]))

        outcome = service.dispatch_safe(DispatchRequest(client="C"), ["S"])

        assert outcome.is_helped
        assert outcome.report.client == "C"


class TestTaxiDispatchService:
    """Taxi-to-fixed-shop policy."""

    def test_nearest_taxi_then_route_to_shop(self, make_reporter):
        reporter = make_reporter(
            [
                ("T1", "C", 2),
                ("T2", "C", 3),
                ("C", "S", 4),
            ]
        )
        service = TaxiDispatchService(reporter=reporter)

        report = service.dispatch("C", "S", ["T1", "T2"])

        assert report.lines() == ("client C", "taxi T1", "T1 C", "shop S", "C S")

    def test_tied_taxis_are_all_reported(self, make_reporter):
        reporter = make_reporter(
            [
                ("T1", "C", 2),
                ("T2", "M", 1),
                ("M", "C", 1),
                ("C", "S", 4),
            ]
        )
        service = TaxiDispatchService(reporter=reporter)

        report = service.dispatch("C", "S", ["T1", "T2"])

        assert [c.name for c in report.candidates] == ["T1", "T2", "S"]
        assert report.lines()[4] == "T2 M C"

    def test_unreachable_shop_is_rendered(self, make_reporter):
        reporter = make_reporter([("T1", "C", 2), ("S", "T1", 1)])
        service = TaxiDispatchService(reporter=reporter)

        report = service.dispatch("C", "S", ["T1"])

        assert report.lines() == ("client C", "taxi T1", "T1 C", "shop S", "S is unreachable")

    def test_no_taxi_reaches_client(self, make_reporter):
        reporter = make_reporter([("C", "T1", 1), ("C", "S", 1)])
        service = TaxiDispatchService(reporter=reporter)

        with pytest.raises(NoCandidateError) as excinfo:
            service.dispatch("C", "S", ["T1"])

        assert excinfo.value.pool == "taxis"

    def test_empty_taxi_pool(self, make_reporter):
        service = TaxiDispatchService(reporter=make_reporter([("C", "S", 1)]))

        with pytest.raises(NoCandidateError):
            service.dispatch("C", "S", [])

    def test_unknown_shop_cannot_be_helped(self, make_reporter):
        service = TaxiDispatchService(reporter=make_reporter([("T1", "C", 1)]))

        outcome = service.dispatch_safe(DispatchRequest(client="C", shop="nowhere"), ["T1"])

        assert outcome.status is OutcomeStatus.CANNOT_BE_HELPED

    def test_request_without_shop_cannot_be_helped(self, make_reporter):
        service = TaxiDispatchService(reporter=make_reporter([("T1", "C", 1)]))

        outcome = service.dispatch_safe(DispatchRequest(client="C"), ["T1"])

        assert outcome.status is OutcomeStatus.CANNOT_BE_HELPED
