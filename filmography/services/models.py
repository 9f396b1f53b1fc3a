"""Domain dataclasses shared by the repository, the state store and the API."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Movie:
    """Summary row of a filmography or similar-movies list."""

    id: int
    title: str
    overview: str
    poster_path: str
    backdrop_path: str
    release_date: str
    vote_average: float
    vote_count: int
    popularity: float


@dataclass(frozen=True, slots=True)
class Genre:
    id: int
    name: str


@dataclass(frozen=True, slots=True)
class MovieDetail:
    """Full movie record from the detail endpoint."""

    id: int
    title: str
    overview: str
    poster_path: str
    backdrop_path: str
    release_date: str
    vote_average: float
    vote_count: int
    popularity: float
    runtime: int | None = None
    genres: tuple[Genre, ...] = ()
    tagline: str = ""
    budget: int = 0
    revenue: int = 0
    status: str = ""
    homepage: str | None = None
