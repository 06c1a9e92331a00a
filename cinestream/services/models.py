"""Catalog entities as received from the remote API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Movie(BaseModel):
    """A catalog movie. Identity is ``id``; favorite/watch state lives elsewhere."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int | str
    title: str
    poster_url: str | None = None
    rating: float | None = None
    genre: str | None = None
    release_year: int | None = None


class Category(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int | str
    name: str
