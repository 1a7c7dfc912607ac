"""Session-scoped movie browsing state and the actions that mutate it."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from app.services.tmdb import TMDbClient, describe_error


logger = logging.getLogger(__name__)

MOVIES_ERROR = "Error al obtener películas"
DETAILS_ERROR = "Error al obtener detalles de la película"


def resolve_director(crew: Iterable[dict[str, Any]]) -> str:
    """Name of the first crew member credited as Director, or ``''``."""

    for member in crew:
        if member.get("job") == "Director":
            return member.get("name") or ""
    return ""


def join_names(entries: Iterable[dict[str, Any]] | None) -> str:
    return ", ".join(entry["name"] for entry in entries or [])


class MovieStore:
    """Owns the list/detail state a presentation layer renders.

    The actions below are the only code that writes to the state. Nothing
    serializes them: if two actions overlap, both apply their results and the
    response that resolves last wins.
    """

    def __init__(self, client: TMDbClient) -> None:
        self.client = client

        self.movies: list[dict[str, Any]] = []
        self.current_page = 1
        self.total_pages = 0
        self.loading = False
        self.error: str | None = None

        # '' means unset; no filter at all means the popular listing.
        self.search_query = ""
        self.year_filter: str | int = ""
        self.genre_filter: str | int = ""

        self.movie: dict[str, Any] | None = None
        self.cast: list[dict[str, Any]] = []
        self.director = ""
        self.production_companies = ""
        self.origin_country = ""

    async def fetch_movies(self) -> None:
        """Load the current page from search, discover or popular, in that order."""

        self.loading = True
        self.error = None
        try:
            if self.search_query:
                response = await self.client.search_movies(self.search_query, self.current_page)
            elif self.year_filter or self.genre_filter:
                filters: dict[str, Any] = {}
                if self.year_filter:
                    filters["primary_release_year"] = self.year_filter
                if self.genre_filter:
                    filters["with_genres"] = self.genre_filter
                response = await self.client.discover_movies(filters, self.current_page)
            else:
                response = await self.client.get_popular_movies(self.current_page)

            self.movies = response["results"]
            self.total_pages = response["total_pages"]
        except Exception as exc:
            message = describe_error(exc) or MOVIES_ERROR
            logger.error("Failed to fetch movies (page %s): %s", self.current_page, message)
            self.movies = []
            self.total_pages = 0
            self.error = message
        finally:
            self.loading = False

    async def fetch_movie_details(self, movie_id: int | str) -> None:
        self.loading = True
        self.error = None
        try:
            movie_data = await self.client.get_movie_details(movie_id)
            self.movie = movie_data

            credits = await self.client.get_movie_credits(movie_id)
            self.cast = credits["cast"]
            self.director = resolve_director(credits["crew"])

            self.production_companies = join_names(movie_data.get("production_companies"))
            self.origin_country = join_names(movie_data.get("production_countries"))
        except Exception as exc:
            message = describe_error(exc) or DETAILS_ERROR
            logger.error("Failed to fetch details for movie %s: %s", movie_id, message)
            self.movie = None
            self.cast = []
            self.director = ""
            self.production_companies = ""
            self.origin_country = ""
            self.error = message
        finally:
            self.loading = False

    async def set_genre_filter(self, genre: str | int) -> None:
        # The year filter survives a genre change; discover combines both.
        self.genre_filter = genre
        self.search_query = ""
        self.current_page = 1
        await self.fetch_movies()

    async def set_year_filter(self, year: str | int) -> None:
        # Keeps the current page.
        self.year_filter = year
        self.genre_filter = ""
        await self.fetch_movies()

    async def set_search_query(self, query: str) -> None:
        self.search_query = query
        self.year_filter = ""
        self.genre_filter = ""
        self.current_page = 1
        await self.fetch_movies()

    async def reset_filters(self) -> None:
        self.search_query = ""
        self.year_filter = ""
        self.genre_filter = ""
        self.current_page = 1
        await self.fetch_movies()

    async def set_page(self, page: int) -> None:
        self.current_page = page
        await self.fetch_movies()

    def list_state(self) -> dict[str, Any]:
        return {
            "movies": self.movies,
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "loading": self.loading,
            "error": self.error,
            "search_query": self.search_query,
            "year_filter": self.year_filter,
            "genre_filter": self.genre_filter,
        }

    def detail_state(self) -> dict[str, Any]:
        return {
            "movie": self.movie,
            "cast": self.cast,
            "director": self.director,
            "production_companies": self.production_companies,
            "origin_country": self.origin_country,
            "loading": self.loading,
            "error": self.error,
        }
