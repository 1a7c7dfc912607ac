"""FastAPI entrypoint exposing the movie store to a presentation layer."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Awaitable

import httpx
from fastapi import Depends, FastAPI, HTTPException, Query, Request, status
from pydantic import BaseModel, Field

from app.services.movie_store import MovieStore
from app.services.tmdb import TMDbClient, TMDbError, describe_error


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the TMDb client and the store this app instance serves."""

    app.state.store = MovieStore(TMDbClient())
    yield


app = FastAPI(title="Movie Browser", lifespan=lifespan)


class SearchRequest(BaseModel):
    query: str = Field(..., description="Free-text movie title search")


class YearFilterRequest(BaseModel):
    year: str | int = Field(..., description="Primary release year; '' clears it")


class GenreFilterRequest(BaseModel):
    genre: str | int = Field(..., description="TMDb genre id; '' clears it")


class PageRequest(BaseModel):
    page: int = Field(..., ge=1)


class MovieListState(BaseModel):
    movies: list[dict[str, Any]]
    current_page: int
    total_pages: int
    loading: bool
    error: str | None = None
    search_query: str
    year_filter: str | int
    genre_filter: str | int


class MovieDetailState(BaseModel):
    movie: dict[str, Any] | None = None
    cast: list[dict[str, Any]]
    director: str
    production_companies: str
    origin_country: str
    loading: bool
    error: str | None = None


def get_store(request: Request) -> MovieStore:
    # One store per app: every caller shares its filters, page and detail state.
    return request.app.state.store


@app.get("/movies", response_model=MovieListState)
async def read_movies(store: MovieStore = Depends(get_store)) -> MovieListState:
    return MovieListState(**store.list_state())


@app.post("/movies/refresh", response_model=MovieListState)
async def refresh_movies(store: MovieStore = Depends(get_store)) -> MovieListState:
    await store.fetch_movies()
    return MovieListState(**store.list_state())


@app.post("/movies/search", response_model=MovieListState)
async def search_movies(
    payload: SearchRequest,
    store: MovieStore = Depends(get_store),
) -> MovieListState:
    await store.set_search_query(payload.query.strip())
    return MovieListState(**store.list_state())


@app.post("/movies/filters/year", response_model=MovieListState)
async def filter_by_year(
    payload: YearFilterRequest,
    store: MovieStore = Depends(get_store),
) -> MovieListState:
    await store.set_year_filter(payload.year)
    return MovieListState(**store.list_state())


@app.post("/movies/filters/genre", response_model=MovieListState)
async def filter_by_genre(
    payload: GenreFilterRequest,
    store: MovieStore = Depends(get_store),
) -> MovieListState:
    await store.set_genre_filter(payload.genre)
    return MovieListState(**store.list_state())


@app.post("/movies/filters/reset", response_model=MovieListState)
async def reset_filters(store: MovieStore = Depends(get_store)) -> MovieListState:
    await store.reset_filters()
    return MovieListState(**store.list_state())


@app.post("/movies/page", response_model=MovieListState)
async def change_page(
    payload: PageRequest,
    store: MovieStore = Depends(get_store),
) -> MovieListState:
    await store.set_page(payload.page)
    return MovieListState(**store.list_state())


@app.get("/genres")
async def list_genres(store: MovieStore = Depends(get_store)) -> dict[str, Any]:
    return await _proxy(store.client.get_genres())


@app.get("/movies/{movie_id}", response_model=MovieDetailState)
async def read_movie(movie_id: int, store: MovieStore = Depends(get_store)) -> MovieDetailState:
    """Load details + credits into the store and return the detail state."""

    await store.fetch_movie_details(movie_id)
    return MovieDetailState(**store.detail_state())


@app.get("/movies/{movie_id}/images")
async def read_movie_images(movie_id: int, store: MovieStore = Depends(get_store)) -> dict[str, Any]:
    return await _proxy(store.client.get_movie_images(movie_id))


@app.get("/movies/{movie_id}/videos")
async def read_movie_videos(movie_id: int, store: MovieStore = Depends(get_store)) -> dict[str, Any]:
    return await _proxy(store.client.get_movie_videos(movie_id))


@app.get("/movies/{movie_id}/reviews")
async def read_movie_reviews(
    movie_id: int,
    page: int | None = Query(default=None, ge=1),
    store: MovieStore = Depends(get_store),
) -> dict[str, Any]:
    return await _proxy(store.client.get_movie_reviews(movie_id, page=page))


@app.get("/movies/{movie_id}/recommendations")
async def read_recommendations(
    movie_id: int,
    page: int | None = Query(default=None, ge=1),
    store: MovieStore = Depends(get_store),
) -> dict[str, Any]:
    return await _proxy(store.client.get_recommendations(movie_id, page=page))


async def _proxy(call: Awaitable[dict[str, Any]]) -> dict[str, Any]:
    """Await a client call, mapping upstream failures to HTTP errors."""

    try:
        return await call
    except TMDbError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="TMDb is not configured.",
        ) from exc
    except httpx.HTTPError as exc:
        logger.warning("TMDb passthrough failed: %s", describe_error(exc))
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to load movie data from TMDb.",
        ) from exc
