"""FastAPI entrypoint exposing one filmography state store per open screen."""

from __future__ import annotations

import json
import logging
from contextlib import aclosing, asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from filmography.core.config import get_settings
from filmography.core.messages import CatalogTextResolver
from filmography.services.formatting import (
    backdrop_url,
    extract_year,
    format_currency,
    format_rating,
    poster_url,
)
from filmography.services.models import Movie, MovieDetail
from filmography.services.screens import ScreenRegistry, build_store_factory
from filmography.services.state import MovieStateStore, ViewState
from filmography.services.tmdb import TMDbClient


logger = logging.getLogger(__name__)
text_resolver = CatalogTextResolver()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the shared TMDb client and close every screen on shutdown."""

    settings = get_settings()
    logging.getLogger("filmography").setLevel(settings.log_level.upper())
    client = TMDbClient()
    app.state.screens = ScreenRegistry(
        build_store_factory(client, text_resolver, person_id=settings.person_id)
    )
    try:
        yield
    finally:
        app.state.screens.close_all()
        await client.aclose()


app = FastAPI(title="Filmography Service", lifespan=lifespan)


class MovieResponse(BaseModel):
    id: int
    title: str
    overview: str
    release_date: str
    year: str
    vote_average: float
    vote_count: int
    rating: str
    popularity: float
    poster_url: str
    backdrop_url: str


class GenreResponse(BaseModel):
    id: int
    name: str


class MovieDetailResponse(MovieResponse):
    runtime: int | None = None
    genres: list[GenreResponse] = []
    tagline: str = ""
    budget: int = 0
    budget_display: str = "0"
    revenue: int = 0
    revenue_display: str = "0"
    status: str = ""
    homepage: str | None = None


class MovieListSectionResponse(BaseModel):
    movies: list[MovieResponse]
    loading: bool
    error: str | None = None


class DetailSectionResponse(BaseModel):
    movie: MovieDetailResponse | None = None
    loading: bool
    error: str | None = None


class ScreenResponse(BaseModel):
    screen_id: str
    movie_list: MovieListSectionResponse
    detail: DetailSectionResponse
    similar: MovieListSectionResponse


def get_screens(request: Request) -> ScreenRegistry:
    return request.app.state.screens


def _sse_event(event: str, payload: dict | None = None) -> str:
    data = json.dumps(payload or {}, ensure_ascii=False)
    return f"event: {event}\ndata: {data}\n\n"


def _get_store(screens: ScreenRegistry, screen_id: str) -> MovieStateStore:
    try:
        return screens.get(screen_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Screen {screen_id} is not open",
        ) from exc


@app.post("/screens", response_model=ScreenResponse, status_code=status.HTTP_201_CREATED)
async def open_screen(screens: ScreenRegistry = Depends(get_screens)) -> ScreenResponse:
    """Open a screen and load the filmography right away."""

    screen_id, store = screens.create()
    await store.load_list()
    return _state_to_response(screen_id, store.state)


@app.get("/screens/{screen_id}", response_model=ScreenResponse)
def get_screen(screen_id: str, screens: ScreenRegistry = Depends(get_screens)) -> ScreenResponse:
    store = _get_store(screens, screen_id)
    return _state_to_response(screen_id, store.state)


@app.post("/screens/{screen_id}/movies/refresh", response_model=ScreenResponse)
async def refresh_movies(screen_id: str, screens: ScreenRegistry = Depends(get_screens)) -> ScreenResponse:
    store = _get_store(screens, screen_id)
    await store.load_list()
    return _state_to_response(screen_id, store.state)


@app.post("/screens/{screen_id}/movies/{movie_id}", response_model=ScreenResponse)
async def select_movie(
    screen_id: str,
    movie_id: int,
    screens: ScreenRegistry = Depends(get_screens),
) -> ScreenResponse:
    """Load a movie's detail; similar movies follow when the detail succeeds."""

    store = _get_store(screens, screen_id)
    await store.load_detail(movie_id)
    return _state_to_response(screen_id, store.state)


@app.post("/screens/{screen_id}/movies/{movie_id}/similar", response_model=ScreenResponse)
async def reload_similar(
    screen_id: str,
    movie_id: int,
    screens: ScreenRegistry = Depends(get_screens),
) -> ScreenResponse:
    store = _get_store(screens, screen_id)
    await store.load_similar(movie_id)
    return _state_to_response(screen_id, store.state)


@app.post("/screens/{screen_id}/clear-errors", response_model=ScreenResponse)
def clear_errors(screen_id: str, screens: ScreenRegistry = Depends(get_screens)) -> ScreenResponse:
    store = _get_store(screens, screen_id)
    store.clear_errors()
    return _state_to_response(screen_id, store.state)


@app.get("/screens/{screen_id}/events")
async def stream_screen(screen_id: str, screens: ScreenRegistry = Depends(get_screens)) -> StreamingResponse:
    store = _get_store(screens, screen_id)

    async def event_stream():
        async with aclosing(store.updates()) as snapshots:
            async for snapshot in snapshots:
                response = _state_to_response(screen_id, snapshot)
                yield _sse_event("state", response.model_dump(mode="json"))
        # Only reached once the screen closes, not on client disconnect.
        yield _sse_event("end")

    return StreamingResponse(event_stream(), media_type="text/event-stream")


@app.delete("/screens/{screen_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_screen(screen_id: str, screens: ScreenRegistry = Depends(get_screens)) -> Response:
    _get_store(screens, screen_id)
    screens.close(screen_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _state_to_response(screen_id: str, state: ViewState) -> ScreenResponse:
    return ScreenResponse(
        screen_id=screen_id,
        movie_list=MovieListSectionResponse(
            movies=[_movie_to_response(movie) for movie in state.movie_list.movies],
            loading=state.movie_list.loading,
            error=state.movie_list.error,
        ),
        detail=DetailSectionResponse(
            movie=_detail_to_response(state.detail.movie) if state.detail.movie else None,
            loading=state.detail.loading,
            error=state.detail.error,
        ),
        similar=MovieListSectionResponse(
            movies=[_movie_to_response(movie) for movie in state.similar.movies],
            loading=state.similar.loading,
            error=state.similar.error,
        ),
    )


def _movie_fields(movie: Movie | MovieDetail) -> dict:
    return {
        "id": movie.id,
        "title": movie.title,
        "overview": movie.overview,
        "release_date": movie.release_date,
        "year": extract_year(movie.release_date, text_resolver),
        "vote_average": movie.vote_average,
        "vote_count": movie.vote_count,
        "rating": format_rating(movie.vote_average),
        "popularity": movie.popularity,
        "poster_url": poster_url(movie.poster_path),
        "backdrop_url": backdrop_url(movie.backdrop_path),
    }


def _movie_to_response(movie: Movie) -> MovieResponse:
    return MovieResponse(**_movie_fields(movie))


def _detail_to_response(detail: MovieDetail) -> MovieDetailResponse:
    return MovieDetailResponse(
        **_movie_fields(detail),
        runtime=detail.runtime,
        genres=[GenreResponse(id=genre.id, name=genre.name) for genre in detail.genres],
        tagline=detail.tagline,
        budget=detail.budget,
        budget_display=format_currency(detail.budget),
        revenue=detail.revenue,
        revenue_display=format_currency(detail.revenue),
        status=detail.status,
        homepage=detail.homepage,
    )
