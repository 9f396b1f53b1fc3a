"""Convert TMDb wire records into domain dataclasses."""

from __future__ import annotations

from filmography.services.models import Genre, Movie, MovieDetail
from filmography.services.tmdb import GenreRecord, MovieRecord


def to_movie(record: MovieRecord) -> Movie:
    return Movie(
        id=record.id,
        title=record.title,
        overview=record.overview,
        poster_path=record.poster_path or "",
        backdrop_path=record.backdrop_path or "",
        release_date=record.release_date,
        vote_average=record.vote_average,
        vote_count=record.vote_count,
        popularity=record.popularity,
    )


def to_movie_detail(record: MovieRecord) -> MovieDetail:
    """Map a detail-endpoint record; runtime and homepage stay ``None`` when absent."""

    return MovieDetail(
        id=record.id,
        title=record.title,
        overview=record.overview,
        poster_path=record.poster_path or "",
        backdrop_path=record.backdrop_path or "",
        release_date=record.release_date,
        vote_average=record.vote_average,
        vote_count=record.vote_count,
        popularity=record.popularity,
        runtime=record.runtime,
        genres=tuple(to_genre(genre) for genre in record.genres or []),
        tagline=record.tagline or "",
        budget=record.budget if record.budget is not None else 0,
        revenue=record.revenue if record.revenue is not None else 0,
        status=record.status or "",
        homepage=record.homepage,
    )


def to_genre(record: GenreRecord) -> Genre:
    return Genre(id=record.id, name=record.name)
