import asyncio
from unittest import mock

import pytest
from pydantic import ValidationError

from filmography.core.messages import CatalogTextResolver, MessageKey
from filmography.services.outcome import Failure, Success
from filmography.services.repository import MovieRepository
from filmography.services.tmdb import (
    FailureKind,
    MovieListResponse,
    MovieRecord,
    TMDbClient,
    TMDbRequestError,
)
from filmography.services.use_cases import (
    GetMovieDetailUseCase,
    GetMoviesUseCase,
    GetSimilarMoviesUseCase,
)


@pytest.fixture
def resolver():
    return CatalogTextResolver()


@pytest.fixture
def client():
    return mock.AsyncMock(spec=TMDbClient)


@pytest.fixture
def repository(client, resolver):
    return MovieRepository(client, resolver)


def test_movies_by_person_success(repository, client, movie_payload):
    client.fetch_by_person.return_value = MovieListResponse(results=[MovieRecord.model_validate(movie_payload)])

    outcome = asyncio.run(repository.get_movies_by_person(71580))

    client.fetch_by_person.assert_awaited_once_with(71580)
    assert isinstance(outcome, Success)
    assert len(outcome.value) == 1
    assert outcome.value[0].title == "Doctor Strange"


def test_movie_detail_not_found(repository, client, resolver):
    client.fetch_detail.side_effect = TMDbRequestError(FailureKind.HTTP, status_code=404)

    outcome = asyncio.run(repository.get_movie_detail(999))

    assert outcome == Failure(resolver.resolve(MessageKey.NOT_FOUND))


def test_movie_detail_success(repository, client, detail_payload):
    client.fetch_detail.return_value = MovieRecord.model_validate(detail_payload)

    outcome = asyncio.run(repository.get_movie_detail(284052))

    assert isinstance(outcome, Success)
    assert outcome.value.runtime == 115
    assert outcome.value.status == "Released"


def test_similar_movies_empty_is_success(repository, client):
    client.fetch_similar.return_value = MovieListResponse()

    outcome = asyncio.run(repository.get_similar_movies(123))

    assert outcome == Success([])


@pytest.mark.parametrize(
    "error, key",
    [
        (TMDbRequestError(FailureKind.NO_CONNECTION), MessageKey.NO_INTERNET),
        (TMDbRequestError(FailureKind.TIMEOUT), MessageKey.TIMEOUT),
        (TMDbRequestError(FailureKind.HTTP, status_code=503), MessageKey.SERVER_ERROR),
        (ValueError("Expecting value"), MessageKey.UNKNOWN),
    ],
)
def test_failures_become_messages(repository, client, resolver, error, key):
    client.fetch_similar.side_effect = error

    outcome = asyncio.run(repository.get_similar_movies(1))

    assert outcome == Failure(resolver.resolve(key))


def test_malformed_payload_is_unknown_failure(repository, client, resolver):
    def _invalid(_):
        MovieListResponse.model_validate({"results": [{"id": 1}]})

    client.fetch_by_person.side_effect = _invalid

    outcome = asyncio.run(repository.get_movies_by_person(71580))

    assert outcome == Failure(resolver.resolve(MessageKey.UNKNOWN))


def test_movie_record_requires_overview():
    with pytest.raises(ValidationError):
        MovieRecord.model_validate({"id": 1, "title": "No overview"})


def test_use_cases_delegate_unchanged():
    repository = mock.AsyncMock(spec=MovieRepository)
    movies = Success([])
    detail = Failure("nope")
    repository.get_movies_by_person.return_value = movies
    repository.get_movie_detail.return_value = detail
    repository.get_similar_movies.return_value = movies

    async def scenario():
        return (
            await GetMoviesUseCase(repository)(71580),
            await GetMovieDetailUseCase(repository)(7),
            await GetSimilarMoviesUseCase(repository)(8),
        )

    assert asyncio.run(scenario()) == (movies, detail, movies)
    repository.get_movies_by_person.assert_awaited_once_with(71580)
    repository.get_movie_detail.assert_awaited_once_with(7)
    repository.get_similar_movies.assert_awaited_once_with(8)


def test_partial_catalog_still_returns_failure(client):
    repository = MovieRepository(client, CatalogTextResolver({MessageKey.TIMEOUT: "Zeitüberschreitung"}))
    client.fetch_detail.side_effect = TMDbRequestError(FailureKind.HTTP, status_code=404)

    outcome = asyncio.run(repository.get_movie_detail(1))

    assert outcome == Failure("The requested resource was not found.")


def test_failure_is_logged_with_the_id(repository, client, caplog):
    client.fetch_similar.side_effect = TMDbRequestError(FailureKind.TIMEOUT)

    with caplog.at_level("WARNING", logger="filmography.services.repository"):
        asyncio.run(repository.get_similar_movies(4242))

    record = caplog.records[-1]
    assert record.args[1] == 4242
    assert "similar movies for 4242 failed" in record.getMessage()
