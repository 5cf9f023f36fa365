import pytest

from app.services.cards import build_card, build_poster_url, format_rating
from app.services.models import MovieSummary


@pytest.mark.parametrize(
    "vote_average, expected",
    [
        (7.5, "7.5/10"),
        (0, "0/10"),
        (0.0, "0/10"),
        (8.1, "8.1/10"),
        (10, "10/10"),
        (6.25, "6.25/10"),
        (0.00001, "0.00001/10"),
        (6.123456789, "6.123456789/10"),
    ],
)
def test_format_rating(vote_average, expected):
    assert format_rating(vote_average) == expected


def test_build_poster_url_only_for_present_paths():
    assert build_poster_url("/a.jpg") == "https://image.tmdb.org/t/p/w500/a.jpg"
    assert build_poster_url("/a.jpg", image_base="https://cdn.test/w342/") == "https://cdn.test/w342/a.jpg"
    assert build_poster_url(None) is None
    assert build_poster_url("") is None


def test_build_card_maps_summary_fields():
    movie = MovieSummary(id=1, title="Alpha", poster_path="/a.jpg", release_date="2020-01-01", vote_average=8.1)

    card = build_card(movie)

    assert card.key == 1
    assert card.title == "Alpha"
    assert card.poster_url.endswith("/a.jpg")
    assert card.release_date == "2020-01-01"
    assert card.rating == "8.1/10"


def test_card_without_poster_has_no_image_url():
    card = build_card(MovieSummary(id=9, title="Untitled", poster_path=None, release_date="", vote_average=0))

    assert card.poster_url is None
    assert card.release_date == ""
    assert card.rating == "0/10"
