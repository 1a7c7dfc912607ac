from typing import Any

import pytest

from app.core.config import get_settings


class FakeTMDbClient:
    """Stands in for TMDbClient; records calls and the store's loading flag."""

    def __init__(self, store_ref: dict[str, Any]):
        self.calls: list[tuple] = []
        self.responses: dict[str, Any] = {}
        self.loading_seen: list[bool] = []
        self._store_ref = store_ref

    async def _answer(self, name: str, *args):
        self.calls.append((name, *args))
        store = self._store_ref.get("store")
        if store is not None:
            self.loading_seen.append(store.loading)
        result = self.responses.get(name, {"results": [], "total_pages": 0})
        if isinstance(result, Exception):
            raise result
        return result

    async def get_popular_movies(self, page=1):
        return await self._answer("popular", page)

    async def search_movies(self, query, page=1):
        return await self._answer("search", query, page)

    async def discover_movies(self, filters=None, page=1):
        return await self._answer("discover", filters, page)

    async def get_genres(self):
        return await self._answer("genres")

    async def get_movie_details(self, movie_id):
        return await self._answer("details", movie_id)

    async def get_movie_credits(self, movie_id):
        return await self._answer("credits", movie_id)

    async def get_movie_images(self, movie_id):
        return await self._answer("images", movie_id)

    async def get_movie_reviews(self, movie_id, page=None):
        return await self._answer("reviews", movie_id, page)

    async def get_recommendations(self, movie_id, page=None):
        return await self._answer("recommendations", movie_id, page)

    async def get_movie_videos(self, movie_id):
        return await self._answer("videos", movie_id)


@pytest.fixture(autouse=True)
def reset_settings(monkeypatch):
    # Keep a developer's real TMDb env out of the tests
    monkeypatch.delenv("TMDB_API_KEY", raising=False)
    monkeypatch.delenv("TMDB_LANGUAGE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def store_ref():
    return {}


@pytest.fixture
def fake_client(store_ref):
    return FakeTMDbClient(store_ref)


@pytest.fixture
def store(fake_client, store_ref):
    from app.services.movie_store import MovieStore

    instance = MovieStore(fake_client)
    store_ref["store"] = instance
    return instance
