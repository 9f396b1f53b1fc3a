"""Wiring for per-screen state stores and the registry that owns them."""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from filmography.core.messages import TextResolver
from filmography.services.repository import MovieRepository
from filmography.services.state import MovieStateStore
from filmography.services.tmdb import TMDbClient
from filmography.services.use_cases import (
    GetMovieDetailUseCase,
    GetMoviesUseCase,
    GetSimilarMoviesUseCase,
)


logger = logging.getLogger(__name__)

StoreFactory = Callable[[], MovieStateStore]


def build_store_factory(client: TMDbClient, resolver: TextResolver, *, person_id: int) -> StoreFactory:
    """Share one repository across screens; every call makes a fresh store."""

    repository = MovieRepository(client, resolver)
    get_movies = GetMoviesUseCase(repository)
    get_movie_detail = GetMovieDetailUseCase(repository)
    get_similar_movies = GetSimilarMoviesUseCase(repository)

    def factory() -> MovieStateStore:
        return MovieStateStore(get_movies, get_movie_detail, get_similar_movies, person_id=person_id)

    return factory


class ScreenRegistry:
    """Keeps the state store of each open screen until the screen is closed."""

    def __init__(self, store_factory: StoreFactory) -> None:
        self._store_factory = store_factory
        self._stores: dict[str, MovieStateStore] = {}

    def __len__(self) -> int:
        return len(self._stores)

    def create(self) -> tuple[str, MovieStateStore]:
        screen_id = uuid.uuid4().hex
        store = self._store_factory()
        self._stores[screen_id] = store
        logger.info("Opened screen %s", screen_id)
        return screen_id, store

    def get(self, screen_id: str) -> MovieStateStore:
        """Raise ``KeyError`` for unknown or closed screens."""

        return self._stores[screen_id]

    def close(self, screen_id: str) -> None:
        store = self._stores.pop(screen_id)
        store.close()
        logger.info("Closed screen %s", screen_id)

    def close_all(self) -> None:
        for screen_id in list(self._stores):
            self.close(screen_id)
