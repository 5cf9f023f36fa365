"""Thin async wrapper around the TMDb API for the popular-movies listing."""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from app.services.models import MovieSummary


logger = logging.getLogger(__name__)

POPULAR_PATH = "/movie/popular"

_API_KEY_PATTERN = re.compile(r"(api_key=)[^&\s\"']+")


class RedactApiKeyFilter(logging.Filter):
    """Masks `api_key` query values in records emitted by the httpx loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if "api_key=" in message:
            record.msg = _API_KEY_PATTERN.sub(r"\1***", message)
            record.args = ()
        return True


def install_api_key_redaction() -> None:
    for name in ("httpx", "httpcore"):
        target = logging.getLogger(name)
        if not any(isinstance(f, RedactApiKeyFilter) for f in target.filters):
            target.addFilter(RedactApiKeyFilter())


install_api_key_redaction()


class TMDbError(Exception):
    """Base exception for TMDb-related failures."""


class TMDbNetworkError(TMDbError):
    """Raised when the request never produced a response (connect, timeout, TLS)."""


class TMDbUpstreamError(TMDbError):
    """Raised when TMDb answers with a non-success status code."""

    def __init__(self, status_code: int, path: str) -> None:
        super().__init__(f"TMDb responded with HTTP {status_code} for {path}")
        self.status_code = status_code
        self.path = path


class TMDbMalformedResponse(TMDbError):
    """Raised when the body is not JSON or lacks a usable `results` list."""


class PopularMovieEntry(BaseModel):
    """Wire shape of one `results` item; unknown fields are ignored."""

    id: int
    title: str
    poster_path: str | None = None
    release_date: str | None = None
    vote_average: float = Field(default=0.0, ge=0, le=10)

    def to_summary(self) -> MovieSummary:
        return MovieSummary(
            id=self.id,
            title=self.title,
            poster_path=self.poster_path or None,
            release_date=self.release_date or "",
            vote_average=self.vote_average,
        )


class PopularMoviesPage(BaseModel):
    results: list[PopularMovieEntry]


class TMDbClient:
    """TMDb HTTP client using API key auth.

    Credentials and endpoints are passed in explicitly; the client never
    reads process settings on its own. ``transport`` lets callers swap the
    network layer (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str,
        language: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.language = language
        self.timeout = timeout
        self._transport = transport

    async def _request(self, method: str, path: str, *, params: dict[str, Any] | None = None) -> Any:
        if not self.api_key:
            raise TMDbError("TMDB_API_KEY is not configured")
        url = f"{self.base_url}{path}"
        query = {"api_key": self.api_key}
        if params:
            query.update({k: v for k, v in params.items() if v is not None})
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(method, url, params=query)
        except httpx.DecodingError as exc:
            raise TMDbMalformedResponse(f"TMDb sent an undecodable body for {path}") from exc
        except httpx.RequestError as exc:
            # The exception text may echo the URL, which carries the key.
            raise TMDbNetworkError(f"TMDb request to {path} failed: {type(exc).__name__}") from exc
        if not response.is_success:
            raise TMDbUpstreamError(response.status_code, path)
        try:
            return response.json()
        except ValueError as exc:
            raise TMDbMalformedResponse(f"TMDb returned a non-JSON body for {path}") from exc

    async def fetch_popular(self) -> list[MovieSummary]:
        """Fetch the first page of popular movies in response order."""

        payload = await self._request("GET", POPULAR_PATH, params={"language": self.language})
        try:
            page = PopularMoviesPage.model_validate(payload)
        except ValidationError as exc:
            raise TMDbMalformedResponse(
                f"TMDb popular payload failed validation ({exc.error_count()} errors)"
            ) from exc

        movies = [entry.to_summary() for entry in page.results]
        seen: set[int] = set()
        for movie in movies:
            if movie.id in seen:
                raise TMDbMalformedResponse(f"TMDb popular payload repeats movie id {movie.id}")
            seen.add(movie.id)
        logger.debug("TMDb popular payload: %d results", len(movies))
        return movies
