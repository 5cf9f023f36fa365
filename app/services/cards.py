"""Card render models for the popular-movies grid."""

from __future__ import annotations

from decimal import Decimal

from app.services.models import MovieCard, MovieSummary

DEFAULT_IMAGE_BASE = "https://image.tmdb.org/t/p/w500"


def build_poster_url(path: str | None, *, image_base: str = DEFAULT_IMAGE_BASE) -> str | None:
    if not path:
        return None
    return f"{image_base.rstrip('/')}{path}"


def format_rating(vote_average: float) -> str:
    """`7.5` -> ``"7.5/10"``; an unrated `0` still renders as ``"0/10"``.

    The shortest round-tripping decimal is printed in plain notation, so
    trailing zeros and exponent forms never reach the card.
    """

    value = Decimal(repr(float(vote_average))).normalize()
    return f"{value:f}/10"


def build_card(movie: MovieSummary, *, image_base: str = DEFAULT_IMAGE_BASE) -> MovieCard:
    return MovieCard(
        key=movie.id,
        title=movie.title,
        poster_url=build_poster_url(movie.poster_path, image_base=image_base),
        release_date=movie.release_date,
        rating=format_rating(movie.vote_average),
    )
