"""Wire the session gate to the catalog fetches."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from cinestream.core.config import get_settings
from cinestream.core.storage import InMemoryStorage, KeyValueStorage
from cinestream.services.catalog import CatalogClient
from cinestream.services.fetcher import CatalogFetcher, ResourceFetch
from cinestream.services.session import GateState, SessionStore


logger = logging.getLogger(__name__)


class CineStreamClient:
    """Explicit triggers instead of render side effects.

    * app start (``start``): landing fetches (featured + categories) run
      regardless of the gate.
    * gate open transition: exactly one ``fetch_movies`` per transition,
      including the one caused by a persisted token at startup.

    Fetches run as background tasks on the running loop, so triggers must be
    called from inside it. ``wait_until_idle`` lets callers wait for them to
    settle.
    """

    def __init__(
        self,
        *,
        storage: KeyValueStorage | None = None,
        catalog: CatalogClient | None = None,
    ) -> None:
        self.session = SessionStore(storage or InMemoryStorage())
        self.fetcher = CatalogFetcher(catalog)
        self._tasks: set[asyncio.Task[Any]] = set()
        self.session.on_gate_open(self._on_gate_open)

    def start(self) -> GateState:
        """Initialize the session and kick off the landing fetches."""

        gate = self.session.initialize()
        self.refresh_landing()
        return gate

    def login(self, token: str | None) -> GateState:
        return self.session.login(token)

    def logout(self) -> GateState:
        return self.session.logout()

    def refresh_movies(self) -> asyncio.Task[Any]:
        return self._spawn(self.fetcher.movies)

    def refresh_landing(self) -> tuple[asyncio.Task[Any], asyncio.Task[Any]]:
        return (
            self._spawn(self.fetcher.featured),
            self._spawn(self.fetcher.categories),
        )

    async def wait_until_idle(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _on_gate_open(self) -> None:
        logger.info("Gate opened, fetching movies")
        self.refresh_movies()

    def _spawn(self, resource: ResourceFetch) -> asyncio.Task[Any]:
        # Resolve the loop first so a missing loop cannot strand the
        # resource in loading.
        loop = asyncio.get_running_loop()
        task = loop.create_task(resource.start(), name=f"fetch_{resource.name}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task


def build_client(catalog: CatalogClient | None = None) -> CineStreamClient:
    """Create a client using the configured storage backend."""

    settings = get_settings()
    storage: KeyValueStorage
    if settings.storage_backend == "memory":
        storage = InMemoryStorage()
    else:
        from cinestream.db import SqlKeyValueStorage, init_models

        init_models()
        storage = SqlKeyValueStorage()
    return CineStreamClient(storage=storage, catalog=catalog)
