"""Shared fixtures: a recording fake routing service and clean config."""

import os
import sys

import pandas as pd
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from drivingtime.config import API_KEY_ENV_VAR, reset_config
from drivingtime.container import Container, reset_container
from drivingtime.domain.models import RouteResult
from drivingtime.services.route_batch import RouteBatchService


class FakeRouting:
    """Routing port double that records every request.

    ``outcomes`` are consumed in order; an Exception is raised instead of
    returned. Once exhausted, every call succeeds with 10 min / 10 km.
    """

    def __init__(self, outcomes=None):
        self.outcomes = list(outcomes or [])
        self.calls = []

    def route(self, request, api_key):
        self.calls.append((request, api_key))
        outcome = self.outcomes.pop(0) if self.outcomes else RouteResult.success(600, 10000)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def requests(self):
        return [request for request, _ in self.calls]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate every test from a real GOOGLE_MAPS_API_KEY and cached config."""
    # setenv records the prior value, so teardown also undoes set_api_key()
    monkeypatch.setenv(API_KEY_ENV_VAR, "placeholder")
    monkeypatch.delenv(API_KEY_ENV_VAR)
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def fake_routing():
    return FakeRouting()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def service(fake_routing, sleeps):
    return RouteBatchService(routing=fake_routing, sleep=sleeps.append)


@pytest.fixture
def fake_container(service):
    container = Container()
    container.register(RouteBatchService, lambda: service)
    return container


@pytest.fixture
def routes_df():
    return pd.DataFrame(
        {
            "name": ["nyc-boston", "la-sf", "paris-lyon"],
            "origin_lat": [40.7128, 34.0522, 48.8566],
            "origin_lon": [-74.0060, -118.2437, 2.3522],
            "dest_lat": [42.3601, 37.7749, 45.7640],
            "dest_lon": [-71.0589, -122.4194, 4.8357],
        }
    )
