import httpx
import pytest

from app.core.config import get_settings
from app.services.tmdb import TMDbClient


@pytest.fixture(autouse=True)
def reset_env(monkeypatch):
    # Keep a developer's real key out of the tests
    monkeypatch.delenv("TMDB_API_KEY", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def api_key():
    return "test-secret-key"


@pytest.fixture
def movie_entry():
    def _entry(movie_id, title, *, poster_path="/poster.jpg", release_date="2024-01-01", vote_average=7.0, **extra):
        return {
            "id": movie_id,
            "title": title,
            "poster_path": poster_path,
            "release_date": release_date,
            "vote_average": vote_average,
            **extra,
        }

    return _entry


@pytest.fixture
def json_handler():
    def _handler_for(payload, *, status_code=200, calls=None):
        def _handler(request: httpx.Request) -> httpx.Response:
            if calls is not None:
                calls.append(request)
            return httpx.Response(status_code, json=payload)

        return _handler

    return _handler_for


@pytest.fixture
def make_client(api_key):
    def _make(handler, *, key=api_key, language=None):
        return TMDbClient(
            api_key=key,
            base_url="https://tmdb.test/3",
            language=language,
            transport=httpx.MockTransport(handler),
        )

    return _make
