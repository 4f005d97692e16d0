"""Shared fixtures: an app client with no network, cleared caches and overrides."""

import pytest
from fastapi.testclient import TestClient

from jokes import service as jokes_service
from main import app
from pokemon import service as pokemon_service
from soccer import service as soccer_service


@pytest.fixture(autouse=True)
def _isolated(monkeypatch):
    monkeypatch.delenv("RAPID_PROXY_SECRET", raising=False)
    for cache in (
        jokes_service.page_cache,
        pokemon_service.poke_cache,
        pokemon_service.pokedex_cache,
        soccer_service.scores_cache,
        soccer_service.standings_cache,
    ):
        cache.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    # Not used as a context manager: the lifespan (dictionary preload) never runs.
    return TestClient(app)
