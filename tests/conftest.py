import pytest

from filmography.core.config import get_settings


@pytest.fixture(autouse=True)
def reset_env(monkeypatch):
    # Keep a developer's .env / shell exports out of the tests
    for name in ("TMDB_API_KEY", "TMDB_BASE_URL", "TMDB_IMAGE_BASE", "NETWORK_TIMEOUT", "PERSON_ID"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def movie_payload():
    return {
        "id": 284052,
        "title": "Doctor Strange",
        "overview": "A former neurosurgeon embarks on a journey of healing.",
        "poster_path": "/uGBVj3bEbCoZbDjjl9wTxcygko1.jpg",
        "backdrop_path": None,
        "release_date": "2016-10-25",
        "vote_average": 7.4,
        "vote_count": 22000,
        "popularity": 88.5,
        "adult": False,
        "genre_ids": [28, 12, 14],
    }


@pytest.fixture
def detail_payload(movie_payload):
    return {
        **movie_payload,
        "runtime": 115,
        "genres": [{"id": 28, "name": "Action"}, {"id": 14, "name": "Fantasy"}],
        "tagline": "Open your mind. Change your reality.",
        "budget": 165000000,
        "revenue": 677796076,
        "status": "Released",
        "homepage": "https://www.marvel.com/movies/doctor-strange",
    }
