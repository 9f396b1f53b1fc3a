"""Per-screen view state for the filmography, detail and similar-movies sections."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import AsyncIterator, Awaitable, Callable

from filmography.services.models import Movie, MovieDetail
from filmography.services.outcome import Failure, Outcome, Success


logger = logging.getLogger(__name__)

Listener = Callable[["ViewState"], None]

# Snapshots buffered per updates() consumer; older ones are dropped when full.
UPDATE_BUFFER = 16


@dataclass(frozen=True, slots=True)
class ListSection:
    movies: tuple[Movie, ...] = ()
    loading: bool = False
    error: str | None = None


@dataclass(frozen=True, slots=True)
class DetailSection:
    movie: MovieDetail | None = None
    loading: bool = False
    error: str | None = None


@dataclass(frozen=True, slots=True)
class SimilarSection:
    movies: tuple[Movie, ...] = ()
    loading: bool = False
    error: str | None = None


@dataclass(frozen=True, slots=True)
class ViewState:
    """Immutable snapshot; every change publishes a new instance."""

    movie_list: ListSection = field(default_factory=ListSection)
    detail: DetailSection = field(default_factory=DetailSection)
    similar: SimilarSection = field(default_factory=SimilarSection)


class MovieStateStore:
    """Owns one :class:`ViewState` for the lifetime of a screen.

    Each ``load_*`` command flips its section to loading, awaits the use case and
    publishes the result. Overlapping calls on the same section are neither
    cancelled nor de-duplicated, so whichever finishes last wins.
    """

    def __init__(
        self,
        get_movies: Callable[[int], Awaitable[Outcome[list[Movie]]]],
        get_movie_detail: Callable[[int], Awaitable[Outcome[MovieDetail]]],
        get_similar_movies: Callable[[int], Awaitable[Outcome[list[Movie]]]],
        *,
        person_id: int,
    ) -> None:
        self._get_movies = get_movies
        self._get_movie_detail = get_movie_detail
        self._get_similar_movies = get_similar_movies
        self.person_id = person_id
        self._state = ViewState()
        self._listeners: list[Listener] = []
        self._queues: list[asyncio.Queue[ViewState | None]] = []
        self._closed = False

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new snapshot; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def updates(self) -> AsyncIterator[ViewState]:
        """Yield the current snapshot, then each new one until :meth:`close`."""

        if self._closed:
            return
        queue: asyncio.Queue[ViewState | None] = asyncio.Queue(maxsize=UPDATE_BUFFER)
        self._queues.append(queue)
        try:
            yield self._state
            while True:
                snapshot = await queue.get()
                if snapshot is None:
                    break
                yield snapshot
        finally:
            if queue in self._queues:
                self._queues.remove(queue)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._listeners.clear()
        for queue in self._queues:
            _offer(queue, None)
        logger.debug("State store for person %s closed", self.person_id)

    async def load_list(self) -> None:
        self._ensure_open()
        self._update(movie_list=replace(self._state.movie_list, loading=True, error=None))
        outcome = await self._get_movies(self.person_id)
        if isinstance(outcome, Success):
            self._update(movie_list=replace(self._state.movie_list, movies=tuple(outcome.value), loading=False))
        else:
            # Stale movies stay on failure so the list doesn't flicker.
            self._update(movie_list=replace(self._state.movie_list, loading=False, error=outcome.message))

    async def load_detail(self, movie_id: int) -> None:
        """Load one movie's detail and, only if that succeeds, its similar movies."""

        self._ensure_open()
        self._update(detail=replace(self._state.detail, loading=True, error=None))
        outcome = await self._get_movie_detail(movie_id)
        if isinstance(outcome, Failure):
            self._update(detail=replace(self._state.detail, loading=False, error=outcome.message))
            return
        self._update(detail=replace(self._state.detail, movie=outcome.value, loading=False))
        if not self._closed:
            await self.load_similar(movie_id)

    async def load_similar(self, movie_id: int) -> None:
        self._ensure_open()
        self._update(similar=replace(self._state.similar, loading=True, error=None))
        outcome = await self._get_similar_movies(movie_id)
        if isinstance(outcome, Success):
            self._update(similar=replace(self._state.similar, movies=tuple(outcome.value), loading=False))
        else:
            self._update(similar=replace(self._state.similar, loading=False, error=outcome.message))

    def clear_errors(self) -> None:
        self._ensure_open()
        self._update(
            movie_list=replace(self._state.movie_list, error=None),
            detail=replace(self._state.detail, error=None),
            similar=replace(self._state.similar, error=None),
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("state store is closed")

    def _update(self, **sections: object) -> None:
        if self._closed:
            logger.debug("Dropping state update after close: %s", sorted(sections))
            return
        self._state = replace(self._state, **sections)
        for queue in self._queues:
            _offer(queue, self._state)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("State listener %r failed", listener)


def _offer(queue: asyncio.Queue, item: ViewState | None) -> None:
    if queue.full():
        queue.get_nowait()
    queue.put_nowait(item)
