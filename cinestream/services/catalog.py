"""Async HTTP client for the remote movie catalog."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx
from pydantic import TypeAdapter, ValidationError

from cinestream.core.config import get_settings
from cinestream.services.models import Category, Movie


logger = logging.getLogger(__name__)

_MOVIES = TypeAdapter(list[Movie])
_CATEGORIES = TypeAdapter(list[Category])


class FetchError(Exception):
    """Network failure or malformed response from a catalog endpoint."""


class CatalogClient:
    """Read-only client for the three catalog endpoints.

    The session token is deliberately not attached: the gate is a
    client-side view switch, and the catalog API defines no auth.
    """

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.catalog_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.catalog_timeout
        self._transport = transport

    async def _get(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as exc:
            raise FetchError(str(exc)) from exc
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError
            raise FetchError(str(exc)) from exc

    async def list_movies(self) -> tuple[Movie, ...]:
        payload = await self._get("/api/movies")
        logger.debug("Catalog movies payload: %s", payload)
        return parse_movies(payload)

    async def list_featured(self) -> tuple[Movie, ...]:
        payload = await self._get("/api/movies/featured")
        logger.debug("Catalog featured payload: %s", payload)
        return parse_movies(payload)

    async def list_categories(self) -> tuple[Category, ...]:
        payload = await self._get("/api/categories")
        logger.debug("Catalog categories payload: %s", payload)
        return parse_categories(payload)


def parse_movies(payload: Any) -> tuple[Movie, ...]:
    """Validate a decoded JSON array of movies, keeping server order."""
    return tuple(_validate(_MOVIES, payload, "movie"))


def parse_categories(payload: Any) -> tuple[Category, ...]:
    return tuple(_validate(_CATEGORIES, payload, "category"))


def _validate(adapter: TypeAdapter, payload: Any, kind: str) -> Sequence[Any]:
    if not isinstance(payload, list):
        raise FetchError(f"Expected a JSON array of {kind} objects, got {type(payload).__name__}")
    try:
        return adapter.validate_python(payload)
    except ValidationError as exc:
        raise FetchError(f"Malformed {kind} payload: {exc.error_count()} invalid field(s)") from exc
