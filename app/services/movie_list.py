"""Popular-movies view: one fetch per activation, rendered as cards."""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass

from app.services.cards import DEFAULT_IMAGE_BASE, build_card
from app.services.models import MovieCard, MovieSummary
from app.services.tmdb import TMDbClient, TMDbError


logger = logging.getLogger(__name__)


class ListStatus(str, enum.Enum):
    NOT_STARTED = "not_started"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ViewState:
    status: ListStatus = ListStatus.NOT_STARTED
    movies: tuple[MovieSummary, ...] = ()
    error: TMDbError | None = None


class MovieListView:
    """Owns the movie list for one page visit.

    ``activate`` schedules the fetch on the running loop and ``deactivate``
    cancels it and drops the list. Each fetch carries a token, and only the
    most recently issued token may write the state, so a slow response from
    an earlier activation cannot overwrite a newer one.
    """

    def __init__(self, client: TMDbClient, *, image_base: str = DEFAULT_IMAGE_BASE) -> None:
        self._client = client
        self._image_base = image_base
        self._state = ViewState()
        self._token = 0
        self._task: asyncio.Task[None] | None = None
        self._active = False

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def active(self) -> bool:
        return self._active

    def activate(self) -> asyncio.Task[None]:
        if self._active and self._task is not None:
            return self._task
        self._active = True
        self._token += 1
        self._state = ViewState(status=ListStatus.LOADING, movies=self._state.movies)
        self._task = asyncio.get_running_loop().create_task(self._load(self._token))
        return self._task

    def deactivate(self) -> None:
        self._active = False
        self._token += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._state = ViewState()

    async def wait(self) -> ViewState:
        """Block until the pending fetch (if any) settles, then return the state."""

        task = self._task
        if task is not None and not task.done():
            await asyncio.wait({task})
        return self._state

    async def _load(self, token: int) -> None:
        try:
            movies = await self._client.fetch_popular()
        except TMDbError as exc:
            if token != self._token:
                logger.debug("Discarding failure from stale popular fetch #%d", token)
                return
            logger.warning("Failed to load popular movies: %s", exc)
            self._state = ViewState(status=ListStatus.FAILED, movies=self._state.movies, error=exc)
            return
        if token != self._token:
            logger.debug("Discarding stale popular fetch #%d (latest is #%d)", token, self._token)
            return
        self._state = ViewState(status=ListStatus.LOADED, movies=tuple(movies))

    def render(self) -> tuple[MovieCard, ...]:
        return tuple(build_card(movie, image_base=self._image_base) for movie in self._state.movies)

    async def __aenter__(self) -> MovieListView:
        self.activate()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.deactivate()
