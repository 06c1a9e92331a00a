"""Fetch lifecycle tracking for the catalog resources.

Every resource (main movie list, featured list, category list) owns its own
``ResourceFetch``. An invocation moves the status to ``loading`` and then to
exactly one terminal state. Failures are caught and stored on that resource
only; they never reach sibling resources or the caller.

There is no retry, no cancellation and no timeout beyond the one configured
on the HTTP transport: a started fetch always settles on its own.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Coroutine, Generic, Sequence, TypeVar

from cinestream.services.catalog import CatalogClient
from cinestream.services.models import Category, Movie


logger = logging.getLogger(__name__)

T = TypeVar("T")


class FetchState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class FetchStatus(Generic[T]):
    state: FetchState
    payload: T | None = None
    message: str | None = None

    @classmethod
    def idle(cls) -> "FetchStatus[T]":
        return cls(FetchState.IDLE)

    @classmethod
    def loading(cls) -> "FetchStatus[T]":
        return cls(FetchState.LOADING)

    @classmethod
    def success(cls, payload: T) -> "FetchStatus[T]":
        return cls(FetchState.SUCCESS, payload=payload)

    @classmethod
    def error(cls, message: str) -> "FetchStatus[T]":
        return cls(FetchState.ERROR, message=message)

    @property
    def is_terminal(self) -> bool:
        return self.state in (FetchState.SUCCESS, FetchState.ERROR)

    @property
    def is_empty(self) -> bool:
        """True for a successful fetch that returned nothing to show."""
        return self.state is FetchState.SUCCESS and not self.payload


class ResourceFetch(Generic[T]):
    """Status holder and runner for one remote resource."""

    def __init__(self, name: str, loader: Callable[[], Awaitable[T]]) -> None:
        self.name = name
        self._loader = loader
        self.status: FetchStatus[T] = FetchStatus.idle()
        self.history: list[FetchStatus[T]] = [self.status]
        self.invocations = 0

    def _transition(self, status: FetchStatus[T]) -> None:
        self.status = status
        self.history.append(status)
        logger.debug("Fetch %s -> %s", self.name, status.state.value)

    def start(self) -> Coroutine[Any, Any, FetchStatus[T]]:
        """Enter ``loading`` now and return the coroutine that settles it."""

        self.invocations += 1
        self._transition(FetchStatus.loading())
        return self._settle()

    async def run(self) -> FetchStatus[T]:
        """Perform one invocation and return its terminal status."""
        return await self.start()

    async def _settle(self) -> FetchStatus[T]:
        try:
            payload = await self._loader()
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            logger.warning("Fetch %s failed: %s", self.name, message)
            status: FetchStatus[T] = FetchStatus.error(message)
        else:
            status = FetchStatus.success(payload)
        self._transition(status)
        return status


class CatalogFetcher:
    """Owns the three independent catalog fetches."""

    def __init__(self, catalog: CatalogClient | None = None) -> None:
        self.catalog = catalog or CatalogClient()
        self.movies: ResourceFetch[Sequence[Movie]] = ResourceFetch("movies", self.catalog.list_movies)
        self.featured: ResourceFetch[Sequence[Movie]] = ResourceFetch("featured", self.catalog.list_featured)
        self.categories: ResourceFetch[Sequence[Category]] = ResourceFetch(
            "categories", self.catalog.list_categories
        )

    async def fetch_movies(self) -> FetchStatus[Sequence[Movie]]:
        return await self.movies.run()

    async def fetch_featured(self) -> FetchStatus[Sequence[Movie]]:
        return await self.featured.run()

    async def fetch_categories(self) -> FetchStatus[Sequence[Category]]:
        return await self.categories.run()

    async def fetch_landing(self) -> tuple[FetchStatus[Any], FetchStatus[Any]]:
        """Run the landing-page fetches concurrently."""
        featured, categories = await asyncio.gather(self.fetch_featured(), self.fetch_categories())
        return featured, categories
