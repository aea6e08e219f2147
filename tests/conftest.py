"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest

from shopdispatch.adapters.graph import DijkstraEngine, InMemoryGraphStore
from shopdispatch.config import reset_config
from shopdispatch.services import PathReporter


@pytest.fixture(autouse=True)
def fresh_config():
    """Make every test load configuration from its own environment."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def engine():
    return DijkstraEngine()


@pytest.fixture
def make_reporter(engine):
    """Build a PathReporter over a graph made of (source, dest, cost) edges."""

    def _make(edges):
        graph = InMemoryGraphStore()
        for source, dest, cost in edges:
            graph.add_edge(source, dest, cost)
        return PathReporter(graph=graph, engine=engine)

    return _make
