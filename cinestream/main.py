"""FastAPI entrypoint exposing the gated catalog views."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, status
from pydantic import BaseModel, Field

from cinestream.services.client import CineStreamClient, build_client
from cinestream.services.session import GateState, InvalidTokenError
from cinestream.views import (
    AppView,
    HomeView,
    MovieCardView,
    MovieGrid,
    RenderedCard,
    render_app,
    render_card,
    render_home,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Restore the session and start the landing fetches before serving."""

    client = build_client()
    app.state.client = client
    app.state.grid = MovieGrid()
    client.start()
    yield
    await client.wait_until_idle()


app = FastAPI(title="CineStream", lifespan=lifespan)


class LoginRequest(BaseModel):
    token: str = Field(..., description="Token issued by the login provider")


class GateResponse(BaseModel):
    gate: GateState
    logged_in: bool


def get_client(request: Request) -> CineStreamClient:
    return request.app.state.client


def get_grid(request: Request) -> MovieGrid:
    return request.app.state.grid


@app.get("/view", response_model=AppView)
def app_view(
    client: CineStreamClient = Depends(get_client),
    grid: MovieGrid = Depends(get_grid),
) -> AppView:
    return render_app(client, grid)


@app.get("/home", response_model=HomeView)
def home_view(client: CineStreamClient = Depends(get_client)) -> HomeView:
    return render_home(client)


@app.post("/login", response_model=GateResponse)
async def login(payload: LoginRequest, client: CineStreamClient = Depends(get_client)) -> GateResponse:
    try:
        gate = client.login(payload.token)
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="token must not be empty",
        ) from exc
    return GateResponse(gate=gate, logged_in=client.session.is_logged_in)


@app.post("/logout", response_model=GateResponse)
def logout(
    client: CineStreamClient = Depends(get_client),
    grid: MovieGrid = Depends(get_grid),
) -> GateResponse:
    gate = client.logout()
    grid.clear()
    return GateResponse(gate=gate, logged_in=client.session.is_logged_in)


@app.post("/movies/refresh", status_code=status.HTTP_202_ACCEPTED)
async def refresh_movies(client: CineStreamClient = Depends(get_client)) -> dict:
    if not client.session.is_logged_in:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="login required")
    client.refresh_movies()
    return {"status": "loading"}


@app.post("/home/refresh", status_code=status.HTTP_202_ACCEPTED)
async def refresh_home(client: CineStreamClient = Depends(get_client)) -> dict:
    client.refresh_landing()
    return {"status": "loading"}


@app.post("/cards/{instance_id}/favorite", response_model=MovieCardView)
def toggle_favorite(instance_id: str, grid: MovieGrid = Depends(get_grid)) -> MovieCardView:
    card = _find_card(grid, instance_id)
    card.interaction.toggle_favorite()
    return render_card(card)


@app.post("/cards/{instance_id}/watch", response_model=MovieCardView)
def start_watching(instance_id: str, grid: MovieGrid = Depends(get_grid)) -> MovieCardView:
    card = _find_card(grid, instance_id)
    card.interaction.start_watching()
    return render_card(card)


def _find_card(grid: MovieGrid, instance_id: str) -> RenderedCard:
    card = grid.find(instance_id)
    if card is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="card not found")
    return card
