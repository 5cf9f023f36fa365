"""FastAPI entrypoint hosting the popular-movies view."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Request, Response, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from app.core.config import get_settings
from app.core.logging_config import configure_logging
from app.services.movie_list import ListStatus, MovieListView, ViewState
from app.services.models import MovieCard
from app.services.tmdb import TMDbClient

@asynccontextmanager
async def lifespan(_: FastAPI):
    """Configure logging before serving."""

    configure_logging()
    yield


app = FastAPI(title="Popular Movies", lifespan=lifespan)
templates = Jinja2Templates(directory=Path(__file__).parent / "templates")


class MovieCardResponse(BaseModel):
    key: int
    title: str
    poster_url: str | None = None
    release_date: str
    rating: str


class MovieListResponse(BaseModel):
    status: ListStatus
    movies: list[MovieCardResponse]
    error: str | None = None


def get_tmdb_client() -> TMDbClient:
    settings = get_settings()
    return TMDbClient(
        api_key=settings.tmdb_api_key,
        base_url=settings.tmdb_base_url,
        language=settings.tmdb_language,
        timeout=settings.tmdb_timeout,
    )


def get_movie_list_view(client: TMDbClient = Depends(get_tmdb_client)) -> MovieListView:
    return MovieListView(client, image_base=get_settings().tmdb_image_base)


async def _load_view(view: MovieListView) -> tuple[ViewState, tuple[MovieCard, ...]]:
    """Activate the view for the lifetime of one request and render it."""

    async with view:
        state = await view.wait()
        return state, view.render()


@app.get("/", response_class=HTMLResponse)
async def popular_movies_page(
    request: Request,
    view: MovieListView = Depends(get_movie_list_view),
) -> HTMLResponse:
    state, cards = await _load_view(view)
    return templates.TemplateResponse(
        request,
        "index.html",
        {"status": state.status.value, "movies": cards, "error": _describe_error(state)},
    )


@app.get("/api/movies/popular", response_model=MovieListResponse)
async def popular_movies(
    response: Response,
    view: MovieListView = Depends(get_movie_list_view),
) -> MovieListResponse:
    state, cards = await _load_view(view)
    if state.status is ListStatus.FAILED:
        response.status_code = status.HTTP_502_BAD_GATEWAY
    return MovieListResponse(
        status=state.status,
        movies=[_card_to_response(card) for card in cards],
        error=_describe_error(state),
    )


def _card_to_response(card: MovieCard) -> MovieCardResponse:
    return MovieCardResponse(
        key=card.key,
        title=card.title,
        poster_url=card.poster_url,
        release_date=card.release_date,
        rating=card.rating,
    )


def _describe_error(state: ViewState) -> str | None:
    if state.status is not ListStatus.FAILED:
        return None
    return "Could not load popular movies. Please try again later."

