"""Thin async wrapper around the TMDb v3 API.

Every method is a single GET round trip that returns the decoded JSON body
as-is. HTTP and transport failures raised by httpx are not caught here; the
caller decides what a failed fetch means.
"""

from __future__ import annotations

from typing import Any

import logging

import httpx

from app.core.config import get_settings


logger = logging.getLogger(__name__)


class TMDbError(Exception):
    """Raised when the client is not usable (e.g. missing API key)."""


def describe_error(exc: BaseException) -> str:
    """User-facing text for a failed call; never includes the request URL.

    httpx puts the full URL (``api_key`` included) into ``HTTPStatusError``
    messages, so status failures are reduced to their status code.
    """

    if isinstance(exc, httpx.HTTPStatusError):
        return f"Request failed with status code {exc.response.status_code}"
    return str(exc)


class TMDbClient:
    """Simple TMDb HTTP client using API key auth."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        language: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key or settings.tmdb_api_key
        self.base_url = (base_url or settings.tmdb_base_url).rstrip("/")
        self.language = language or settings.tmdb_language
        self.timeout = timeout if timeout is not None else settings.tmdb_timeout
        self._transport = transport

    async def _get(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        if not self.api_key:
            raise TMDbError("TMDB_API_KEY is not configured")
        url = f"{self.base_url}{path}"
        query: dict[str, Any] = {"api_key": self.api_key}
        if self.language:
            query["language"] = self.language
        if params:
            query.update({k: v for k, v in params.items() if v is not None})
        logger.debug("TMDb GET %s params=%s", path, {k: v for k, v in query.items() if k != "api_key"})
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(url, params=query)
            response.raise_for_status()
        return response.json()

    async def get_popular_movies(self, page: int = 1) -> dict[str, Any]:
        return await self._get("/movie/popular", params={"page": page})

    async def search_movies(self, query: str, page: int = 1) -> dict[str, Any]:
        return await self._get("/search/movie", params={"query": query, "page": page})

    async def discover_movies(
        self,
        filters: dict[str, Any] | None = None,
        page: int = 1,
    ) -> dict[str, Any]:
        """Filtered listing, e.g. ``{"primary_release_year": 1999, "with_genres": 18}``."""

        return await self._get("/discover/movie", params={**(filters or {}), "page": page})

    async def get_genres(self) -> dict[str, Any]:
        return await self._get("/genre/movie/list")

    async def get_movie_details(self, movie_id: int | str) -> dict[str, Any]:
        return await self._get(f"/movie/{movie_id}")

    async def get_movie_credits(self, movie_id: int | str) -> dict[str, Any]:
        return await self._get(f"/movie/{movie_id}/credits")

    async def get_movie_images(self, movie_id: int | str) -> dict[str, Any]:
        return await self._get(f"/movie/{movie_id}/images")

    async def get_movie_reviews(self, movie_id: int | str, page: int | None = None) -> dict[str, Any]:
        return await self._get(f"/movie/{movie_id}/reviews", params={"page": page})

    async def get_recommendations(self, movie_id: int | str, page: int | None = None) -> dict[str, Any]:
        return await self._get(f"/movie/{movie_id}/recommendations", params={"page": page})

    async def get_movie_videos(self, movie_id: int | str) -> dict[str, Any]:
        return await self._get(f"/movie/{movie_id}/videos")
