import httpx
import pytest

from cinestream.services.fetcher import FetchState, FetchStatus
from cinestream.services.models import Movie
from cinestream.views import MovieGrid, render_app, render_home

from conftest import FakeCatalog, make_client


def test_grid_keeps_cards_for_same_result():
    grid = MovieGrid()
    status = FetchStatus.success((Movie(id=1, title="A"), Movie(id=1, title="A")))
    first = grid.sync(status)
    again = grid.sync(status)
    assert first is again
    assert first[0].instance_id != first[1].instance_id
    assert first[0].interaction is not first[1].interaction


def test_grid_duplicate_movie_cards_are_independent():
    grid = MovieGrid()
    cards = grid.sync(FetchStatus.success((Movie(id=5, title="Twin"), Movie(id=5, title="Twin"))))
    cards[0].interaction.toggle_favorite()
    assert cards[0].interaction.is_favorite is True
    assert cards[1].interaction.is_favorite is False


def test_grid_resets_on_new_result_and_keeps_old_while_loading():
    grid = MovieGrid()
    first = grid.sync(FetchStatus.success((Movie(id=1, title="A"),)))
    first[0].interaction.toggle_favorite()
    assert grid.sync(FetchStatus.loading()) == first
    second = grid.sync(FetchStatus.success((Movie(id=1, title="A"),)))
    assert second[0].interaction.is_favorite is False


def test_closed_gate_renders_login_prompt(client):
    view = render_app(client, MovieGrid())
    assert view.login_required is True
    assert view.main is None


@pytest.mark.asyncio
async def test_open_gate_renders_cards_with_defaults(client):
    client.start()
    client.login("abc123")
    grid = MovieGrid()
    loading = render_app(client, grid)
    assert loading.main.loading is True
    assert loading.main.loading_message == "Loading movies..."

    await client.wait_until_idle()
    view = render_app(client, grid)
    assert [link.href for link in view.header.nav] == ["/", "/trending", "/favorites"]
    arrival, heat = view.main.cards
    assert arrival.rating == "7.9" and arrival.year == "2016" and arrival.genre == "Sci-Fi"
    assert heat.poster_url == "/placeholder.jpg"
    assert heat.rating == "N/A" and heat.genre == "Unknown" and heat.year == "N/A"
    assert heat.favorite_label == "Add to Favorites"


@pytest.mark.asyncio
async def test_empty_result_renders_nothing_without_error():
    client = make_client(FakeCatalog({"/api/movies": []}))
    client.start()
    client.login("abc123")
    await client.wait_until_idle()

    main = render_app(client, MovieGrid()).main
    assert main.cards == []
    assert main.error is None
    assert main.loading is False


@pytest.mark.asyncio
async def test_home_view_sections_are_independent():
    client = make_client(FakeCatalog({"/api/movies/featured": httpx.ConnectError("offline")}))
    client.start()
    await client.wait_until_idle()

    home = render_home(client)
    assert home.featured_status.status is FetchState.ERROR
    assert home.featured_status.error == "offline"
    assert home.featured == []
    assert home.categories_status.status is FetchState.SUCCESS
    assert [c.href for c in home.categories] == ["/category/drama", "/category/7"]


def test_closed_gate_clears_cards(client):
    grid = MovieGrid()
    status = FetchStatus.success((Movie(id=1, title="A"),))
    card = grid.sync(status)[0]
    card.interaction.toggle_favorite()

    render_app(client, grid)

    assert grid.find(card.instance_id) is None
    assert grid.sync(status) == []
    fresh = grid.sync(FetchStatus.success((Movie(id=1, title="A"),)))
    assert fresh[0].interaction.is_favorite is False
