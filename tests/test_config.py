"""Tests for configuration and dependency wiring."""

import pytest
from pydantic import ValidationError

from shopdispatch.adapters.cache import InMemoryCache, NullCache
from shopdispatch.adapters.graph import DijkstraEngine, InMemoryGraphStore
from shopdispatch.config import AppConfig, DispatchConfig, EngineConfig, get_config
from shopdispatch.container import Container
from shopdispatch.ports.cache import CachePort
from shopdispatch.ports.graph import GraphStorePort, ShortestPathEnginePort
from shopdispatch.services import (
    PathReporter,
    ShopDispatchService,
    SimulationRunner,
    TaxiDispatchService,
)


def test_defaults():
    config = get_config()

    assert config.dispatch.policy == "shops"
    assert config.dispatch.pickup_label == "taxi"
    assert config.dispatch.dropoff_label == "shop"
    assert config.dispatch.max_workers == 1
    assert config.engine.cache_enabled is True
    assert config.observability.level == "WARNING"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SDS_DISPATCH_POLICY", "taxis")
    monkeypatch.setenv("SDS_ENGINE_CACHE_ENABLED", "false")

    config = get_config()

    assert config.dispatch.policy == "taxis"
    assert config.engine.cache_enabled is False


def test_get_config_is_cached():
    assert get_config() is get_config()


def test_invalid_worker_count_rejected():
    with pytest.raises(ValidationError):
        DispatchConfig(max_workers=0)


def test_invalid_policy_rejected():
    with pytest.raises(ValidationError):
        DispatchConfig(policy="drones")


class TestContainer:
    """Test suite for Container."""

    def test_default_bindings(self):
        container = Container.create_default(AppConfig())

        assert isinstance(container.resolve(GraphStorePort), InMemoryGraphStore)
        assert isinstance(container.resolve(ShortestPathEnginePort), DijkstraEngine)
        assert isinstance(container.resolve(CachePort), InMemoryCache)
        assert isinstance(container.resolve(SimulationRunner), SimulationRunner)

    def test_services_share_one_reporter(self):
        container = Container.create_default(AppConfig())

        shops = container.resolve(ShopDispatchService)
        taxis = container.resolve(TaxiDispatchService)

        assert shops.reporter is taxis.reporter
        assert taxis.reporter is container.resolve(PathReporter)

    def test_graph_store_is_transient(self):
        container = Container.create_default(AppConfig())

        assert container.resolve(GraphStorePort) is not container.resolve(GraphStorePort)

    def test_cache_disabled_binds_null_cache(self):
        config = AppConfig(engine=EngineConfig(cache_enabled=False))
        container = Container.create_default(config)

        assert isinstance(container.resolve(CachePort), NullCache)

    def test_labels_come_from_config(self):
        config = AppConfig(dispatch=DispatchConfig(pickup_label="van"))
        container = Container.create_default(config)

        assert container.resolve(ShopDispatchService).pickup_label == "van"

    def test_register_override_and_transient(self):
        container = Container(config=AppConfig())
        container.register(GraphStorePort, InMemoryGraphStore, singleton=False)

        assert container.resolve(GraphStorePort) is not container.resolve(GraphStorePort)

    def test_unregistered_type_raises(self):
        container = Container(config=AppConfig())

        with pytest.raises(KeyError):
            container.resolve(PathReporter)
