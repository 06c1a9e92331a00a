import json

import httpx
import pytest

from cinestream.core.config import get_settings
from cinestream.core.storage import InMemoryStorage
from cinestream.services.catalog import CatalogClient
from cinestream.services.client import CineStreamClient


MOVIES = [
    {"id": 1, "title": "Arrival", "poster_url": "/p/arrival.jpg", "rating": 7.9, "genre": "Sci-Fi", "release_year": 2016},
    {"id": 2, "title": "Heat"},
]
FEATURED = [{"id": 1, "title": "Arrival", "poster_url": "/p/arrival.jpg"}]
CATEGORIES = [{"id": "drama", "name": "Drama"}, {"id": 7, "name": "Comedy"}]


@pytest.fixture(autouse=True)
def reset_env(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("CATALOG_BASE_URL", "http://catalog.test")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class FakeCatalog:
    """Routes catalog requests to canned responses or exceptions."""

    def __init__(self, routes=None):
        self.routes = {
            "/api/movies": MOVIES,
            "/api/movies/featured": FEATURED,
            "/api/categories": CATEGORIES,
        }
        self.routes.update(routes or {})
        self.calls: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append(path)
        route = self.routes[path]
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(200, content=json.dumps(route), headers={"content-type": "application/json"})

    def count(self, path: str) -> int:
        return self.calls.count(path)


@pytest.fixture
def fake_catalog():
    return FakeCatalog()


@pytest.fixture
def catalog_client(fake_catalog):
    return CatalogClient(base_url="http://catalog.test", transport=httpx.MockTransport(fake_catalog))


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def client(storage, catalog_client):
    return CineStreamClient(storage=storage, catalog=catalog_client)


def make_client(fake: FakeCatalog, storage=None) -> CineStreamClient:
    catalog = CatalogClient(base_url="http://catalog.test", transport=httpx.MockTransport(fake))
    return CineStreamClient(storage=storage or InMemoryStorage(), catalog=catalog)
