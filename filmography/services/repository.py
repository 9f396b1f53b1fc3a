"""Repository combining the TMDb client, the mapper and the error classifier."""

from __future__ import annotations

import logging

from filmography.core.messages import TextResolver
from filmography.services.errors import error_message
from filmography.services.mapper import to_movie, to_movie_detail
from filmography.services.models import Movie, MovieDetail
from filmography.services.outcome import Failure, Outcome, Success
from filmography.services.tmdb import TMDbClient


logger = logging.getLogger(__name__)


class MovieRepository:
    """Fetch movies and report a :class:`Success` or :class:`Failure`, never raise."""

    def __init__(self, client: TMDbClient, resolver: TextResolver) -> None:
        self.client = client
        self.resolver = resolver

    async def get_movies_by_person(self, person_id: int) -> Outcome[list[Movie]]:
        try:
            response = await self.client.fetch_by_person(person_id)
            movies = [to_movie(record) for record in response.results]
        except Exception as exc:
            return self._failure(exc, "movies for person", person_id)
        logger.debug("Loaded %d movies for person %s", len(movies), person_id)
        return Success(movies)

    async def get_movie_detail(self, movie_id: int) -> Outcome[MovieDetail]:
        try:
            record = await self.client.fetch_detail(movie_id)
            detail = to_movie_detail(record)
        except Exception as exc:
            return self._failure(exc, "detail for movie", movie_id)
        return Success(detail)

    async def get_similar_movies(self, movie_id: int) -> Outcome[list[Movie]]:
        try:
            response = await self.client.fetch_similar(movie_id)
            movies = [to_movie(record) for record in response.results]
        except Exception as exc:
            return self._failure(exc, "similar movies for", movie_id)
        logger.debug("Loaded %d similar movies for %s", len(movies), movie_id)
        return Success(movies)

    def _failure(self, exc: Exception, what: str, item_id: int) -> Failure:
        message = error_message(self.resolver, exc)
        logger.warning("Fetching %s %s failed: %s (%s)", what, item_id, message, exc)
        return Failure(message)
