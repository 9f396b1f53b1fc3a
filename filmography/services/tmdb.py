"""Thin async wrapper around the three TMDb endpoints used by the filmography screens."""

from __future__ import annotations

import logging
import socket
from enum import Enum
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from filmography.core.config import get_settings


logger = logging.getLogger(__name__)


class GenreRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str


class MovieRecord(BaseModel):
    """Movie object as returned by the list and detail endpoints."""

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    overview: str
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: str
    vote_average: float
    vote_count: int
    popularity: float
    runtime: int | None = None
    genres: list[GenreRecord] | None = None
    tagline: str | None = None
    budget: int | None = None
    revenue: int | None = None
    status: str | None = None
    homepage: str | None = None


class MovieListResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: list[MovieRecord] = Field(default_factory=list)


class FailureKind(str, Enum):
    NO_CONNECTION = "no_connection"
    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP = "http"
    UNKNOWN = "unknown"


class TMDbError(Exception):
    """Base exception for TMDb-related failures."""


class TMDbRequestError(TMDbError):
    """Raised when a request fails; tagged with the kind of failure."""

    def __init__(self, kind: FailureKind, *, status_code: int | None = None, detail: str = "") -> None:
        super().__init__(detail or kind.value)
        self.kind = kind
        self.status_code = status_code


def _is_name_resolution_failure(exc: BaseException) -> bool:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, socket.gaierror):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def failure_kind_for(exc: BaseException) -> tuple[FailureKind, int | None]:
    """Tag a low-level exception with the failure kind it represents."""

    if _is_name_resolution_failure(exc):
        return FailureKind.NO_CONNECTION, None
    if isinstance(exc, httpx.TimeoutException):
        return FailureKind.TIMEOUT, None
    if isinstance(exc, (httpx.TransportError, OSError)):
        return FailureKind.NETWORK, None
    if isinstance(exc, httpx.HTTPStatusError):
        return FailureKind.HTTP, exc.response.status_code
    return FailureKind.UNKNOWN, None


class TMDbClient:
    """Async TMDb HTTP client using API key auth."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key or settings.tmdb_api_key
        self.base_url = (base_url or settings.tmdb_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.network_timeout
        # api_key rides along on every request as a client-level query param.
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            params={"api_key": self.api_key} if self.api_key else None,
            timeout=httpx.Timeout(self.timeout),
            transport=transport,
        )

    async def __aenter__(self) -> TMDbClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        if not self.api_key:
            raise TMDbRequestError(
                FailureKind.HTTP, status_code=401, detail="TMDB_API_KEY is not configured"
            )
        logger.debug("TMDb GET %s params=%s", path, params)
        try:
            response = await self._http.get(path, params=params)
            response.raise_for_status()
        except (httpx.HTTPError, OSError) as exc:
            kind, status_code = failure_kind_for(exc)
            raise TMDbRequestError(kind, status_code=status_code, detail=str(exc)) from exc
        return response.json()

    async def fetch_by_person(self, person_id: int) -> MovieListResponse:
        """Movies crediting *person_id*; always the first page."""

        payload = await self._get("/discover/movie", params={"with_people": person_id})
        return MovieListResponse.model_validate(payload)

    async def fetch_detail(self, movie_id: int) -> MovieRecord:
        payload = await self._get(f"/movie/{movie_id}")
        return MovieRecord.model_validate(payload)

    async def fetch_similar(self, movie_id: int) -> MovieListResponse:
        payload = await self._get(f"/movie/{movie_id}/similar")
        return MovieListResponse.model_validate(payload)
