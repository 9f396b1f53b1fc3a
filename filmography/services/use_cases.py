"""Single-operation façades over :class:`MovieRepository`."""

from __future__ import annotations

from filmography.services.models import Movie, MovieDetail
from filmography.services.outcome import Outcome
from filmography.services.repository import MovieRepository


class GetMoviesUseCase:
    def __init__(self, repository: MovieRepository) -> None:
        self.repository = repository

    async def __call__(self, person_id: int) -> Outcome[list[Movie]]:
        return await self.repository.get_movies_by_person(person_id)


class GetMovieDetailUseCase:
    def __init__(self, repository: MovieRepository) -> None:
        self.repository = repository

    async def __call__(self, movie_id: int) -> Outcome[MovieDetail]:
        return await self.repository.get_movie_detail(movie_id)


class GetSimilarMoviesUseCase:
    def __init__(self, repository: MovieRepository) -> None:
        self.repository = repository

    async def __call__(self, movie_id: int) -> Outcome[list[Movie]]:
        return await self.repository.get_similar_movies(movie_id)
