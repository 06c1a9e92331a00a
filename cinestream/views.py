"""Presentational view models built from client state.

Nothing here owns state except ``MovieGrid``, which keeps one interaction
record per rendered card for as long as the current movies result is shown.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Sequence

from pydantic import BaseModel

from cinestream.core.config import get_settings
from cinestream.services.client import CineStreamClient
from cinestream.services.fetcher import FetchState, FetchStatus
from cinestream.services.interaction import InteractionState
from cinestream.services.models import Movie

BRAND = "🎬 CineStream"
NAV_LINKS = (("Home", "/"), ("Trending", "/trending"), ("My Favorites", "/favorites"))


class NavLink(BaseModel):
    label: str
    href: str


class HeaderView(BaseModel):
    brand: str = BRAND
    nav: list[NavLink]


class MovieCardView(BaseModel):
    instance_id: str
    movie_id: int | str
    title: str
    poster_url: str
    rating: str
    genre: str
    year: str
    is_favorite: bool
    is_watching: bool
    favorite_label: str


class MainView(BaseModel):
    loading: bool = False
    loading_message: str | None = None
    error: str | None = None
    cards: list[MovieCardView] = []


class AppView(BaseModel):
    logged_in: bool
    login_required: bool
    header: HeaderView | None = None
    main: MainView | None = None


class CarouselItemView(BaseModel):
    movie_id: int | str
    title: str
    poster_url: str | None = None


class CategoryLinkView(BaseModel):
    category_id: int | str
    name: str
    href: str


class SectionStatus(BaseModel):
    status: FetchState
    error: str | None = None


class HomeView(BaseModel):
    title: str = "Welcome to CineStream"
    tagline: str = "Stream unlimited movies and TV shows"
    featured_status: SectionStatus
    featured: list[CarouselItemView] = []
    categories_status: SectionStatus
    categories: list[CategoryLinkView] = []


@dataclass(slots=True)
class RenderedCard:
    instance_id: str
    movie: Movie
    interaction: InteractionState


class MovieGrid:
    """Cards for the latest movies result.

    A new set of cards (with fresh interaction state) is produced only when
    the movies fetch settles on a different result; re-rendering the same
    result keeps the existing cards.
    """

    def __init__(self) -> None:
        self._source: FetchStatus | None = None
        self._cards: list[RenderedCard] = []

    def sync(self, status: FetchStatus) -> list[RenderedCard]:
        if status.state is FetchState.SUCCESS and status is not self._source:
            self._source = status
            self._cards = [_new_card(movie) for movie in status.payload or ()]
        return self._cards

    def clear(self) -> None:
        """Drop every card. The current result is not shown again; only a
        later movies result brings cards back, with fresh state."""
        self._cards = []

    def find(self, instance_id: str) -> RenderedCard | None:
        for card in self._cards:
            if card.instance_id == instance_id:
                return card
        return None


def _new_card(movie: Movie) -> RenderedCard:
    return RenderedCard(
        instance_id=uuid.uuid4().hex,
        movie=movie,
        interaction=InteractionState(movie_id=movie.id),
    )


def render_header() -> HeaderView:
    return HeaderView(nav=[NavLink(label=label, href=href) for label, href in NAV_LINKS])


def render_card(card: RenderedCard) -> MovieCardView:
    movie = card.movie
    state = card.interaction
    return MovieCardView(
        instance_id=card.instance_id,
        movie_id=movie.id,
        title=movie.title,
        poster_url=movie.poster_url or get_settings().poster_placeholder,
        rating=_or_default(movie.rating, "N/A"),
        genre=movie.genre or "Unknown",
        year=_or_default(movie.release_year, "N/A"),
        is_favorite=state.is_favorite,
        is_watching=state.is_watching,
        favorite_label=state.favorite_label,
    )


def render_app(client: CineStreamClient, grid: MovieGrid) -> AppView:
    """Login prompt when the gate is closed, movie grid otherwise."""

    if not client.session.is_logged_in:
        grid.clear()
        return AppView(logged_in=False, login_required=True)

    status = client.fetcher.movies.status
    main = MainView()
    if status.state is FetchState.LOADING:
        main.loading = True
        main.loading_message = "Loading movies..."
    elif status.state is FetchState.ERROR:
        main.error = status.message
    main.cards = [render_card(card) for card in grid.sync(status)]
    return AppView(logged_in=True, login_required=False, header=render_header(), main=main)


def render_home(client: CineStreamClient) -> HomeView:
    featured = client.fetcher.featured.status
    categories = client.fetcher.categories.status
    return HomeView(
        featured_status=_section(featured),
        featured=[
            CarouselItemView(movie_id=movie.id, title=movie.title, poster_url=movie.poster_url)
            for movie in _items(featured)
        ],
        categories_status=_section(categories),
        categories=[
            CategoryLinkView(category_id=category.id, name=category.name, href=f"/category/{category.id}")
            for category in _items(categories)
        ],
    )


def _section(status: FetchStatus) -> SectionStatus:
    return SectionStatus(status=status.state, error=status.message)


def _items(status: FetchStatus) -> Sequence:
    if status.state is FetchState.SUCCESS:
        return status.payload or ()
    return ()


def _or_default(value: object, default: str) -> str:
    if not value:
        return default
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)
