"""Wiring for the dispatch simulator.

Factories are registered per port or service type and built on first
``resolve``. Shared bindings keep their first instance; transient ones
build a new instance on every call. ``create_default`` binds the
production adapters from configuration, and tests override single
bindings with ``register``.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Type-keyed registry of factories.

    Usage:
        # Command line
        runner = Container.create_default().resolve(SimulationRunner)

        # Tests
        container = Container.create_default(AppConfig())
        container.register(ResultWriterPort, lambda: StreamResultWriter(out=buf))

    Attributes:
        config: Settings the default bindings are built from
    """

    config: AppConfig = field(default_factory=get_config)

    _builders: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _shared: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _transient: set[type[Any]] = field(default_factory=set, repr=False)
    _guard: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        key: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Bind ``key`` to ``factory``, replacing any earlier binding.

        With ``singleton=False`` every ``resolve`` calls the factory again.
        """
        with self._guard:
            self._builders[key] = factory
            self._shared.pop(key, None)
            if singleton:
                self._transient.discard(key)
            else:
                self._transient.add(key)

    def resolve(self, key: type[Any]) -> Any:
        """Return the instance bound to ``key``.

        Raises:
            KeyError: If nothing is bound to ``key``.
        """
        with self._guard:
            factory = self._builders.get(key)
            if factory is None:
                raise KeyError(f"Nothing registered for {key}")
            if key in self._transient:
                return factory()
            if key not in self._shared:
                self._shared[key] = factory()
            return self._shared[key]

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Bind every production adapter and service.

        Graph stores are transient: the runner asks for a fresh one per
        run and rebinds the dispatch services to it. Everything else is
        shared, so both policies use one reporter, engine and run cache.

        Args:
            config: Settings to build from; defaults to ``get_config()``.
        """
        from .adapters.cache import InMemoryCache, NullCache
        from .adapters.graph import DijkstraEngine, InMemoryGraphStore
        from .adapters.io import LineProtocolReader, StreamResultWriter
        from .ports.cache import CachePort
        from .ports.graph import GraphStorePort, ShortestPathEnginePort
        from .ports.io import ResultWriterPort, SimulationReaderPort
        from .services import (
            PathReporter,
            ShopDispatchService,
            SimulationRunner,
            TaxiDispatchService,
        )

        config = config or get_config()
        container = cls(config=config)

        def create_cache() -> CachePort[Any]:
            if config.engine.cache_enabled:
                return InMemoryCache(name="runs", max_size=config.engine.cache_max_size)
            return NullCache(name="runs")

        container.register(CachePort, create_cache)

        # Shortest paths
        container.register(
            GraphStorePort, lambda: InMemoryGraphStore(), singleton=False
        )
        container.register(
            ShortestPathEnginePort,
            lambda: DijkstraEngine(cache=container.resolve(CachePort)),
        )
        container.register(
            PathReporter,
            lambda: PathReporter(
                graph=container.resolve(GraphStorePort),
                engine=container.resolve(ShortestPathEnginePort),
            ),
        )

        # Dispatch policies
        container.register(
            ShopDispatchService,
            lambda: ShopDispatchService(
                reporter=container.resolve(PathReporter),
                pickup_label=config.dispatch.pickup_label,
                dropoff_label=config.dispatch.dropoff_label,
            ),
        )
        container.register(
            TaxiDispatchService,
            lambda: TaxiDispatchService(
                reporter=container.resolve(PathReporter),
                pickup_label=config.dispatch.pickup_label,
                dropoff_label=config.dispatch.dropoff_label,
            ),
        )

        # I/O
        container.register(SimulationReaderPort, lambda: LineProtocolReader())
        container.register(ResultWriterPort, lambda: StreamResultWriter())

        # Runner
        def create_runner() -> SimulationRunner:
            return SimulationRunner(
                graph_factory=lambda: container.resolve(GraphStorePort),
                shop_dispatch=container.resolve(ShopDispatchService),
                taxi_dispatch=container.resolve(TaxiDispatchService),
                reader=container.resolve(SimulationReaderPort),
                writer=container.resolve(ResultWriterPort),
                max_workers=config.dispatch.max_workers,
            )

        container.register(SimulationRunner, create_runner)

        return container
