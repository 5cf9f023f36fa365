"""Shared dataclasses for service layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MovieSummary:
    """One entry of a popular-movies page as the view stores it."""

    id: int
    title: str
    poster_path: str | None = None
    release_date: str = ""
    vote_average: float = 0.0


@dataclass(frozen=True, slots=True)
class MovieCard:
    """Render model for a single grid card, keyed by the movie id."""

    key: int
    title: str
    poster_url: str | None
    release_date: str
    rating: str
