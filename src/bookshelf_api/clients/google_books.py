import logging
from collections.abc import MutableMapping
from typing import Any

import httpx
from cachetools import TTLCache
from pydantic import ValidationError

from bookshelf_api.domain import UNKNOWN_AUTHOR, UNKNOWN_GENRE, UNKNOWN_TITLE, SearchField
from bookshelf_api.schemas.book import Book

logger = logging.getLogger(__name__)

_FIELD_OPERATORS: dict[str, str] = {"title": "intitle", "author": "inauthor"}


def volume_to_book(item: dict[str, Any], fallback_genre: str = UNKNOWN_GENRE) -> Book:
    """Maps a Google Books volume resource onto a catalog Book."""
    volume_info = item.get("volumeInfo") or {}
    categories = [c for c in volume_info.get("categories") or [] if c]
    authors = volume_info.get("authors") or []
    image_links = volume_info.get("imageLinks") or {}

    return Book(
        id=item["id"],
        title=volume_info.get("title") or UNKNOWN_TITLE,
        author=", ".join(authors) if authors else UNKNOWN_AUTHOR,
        genre=categories[0] if categories else fallback_genre,
        features=[*categories, volume_info.get("language") or "english"],
        description=volume_info.get("description"),
        cover_image=image_links.get("thumbnail"),
    )


class GoogleBooksClient:
    """
    Best-effort lookup against the Google Books volumes API.

    Every failure is logged and reported as an empty result list. Successful
    lookups are cached in a bounded TTL cache, so old queries age out.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        base_url: str,
        api_key: str | None = None,
        max_results: int = 5,
        cache_max_entries: int = 1024,
        cache_ttl_seconds: float = 3600.0,
        cache: MutableMapping[str, list[Book]] | None = None,
    ) -> None:
        self._http = http
        self._base_url = base_url
        self._api_key = api_key
        self._max_results = max_results
        if cache is None:
            cache = TTLCache(maxsize=cache_max_entries, ttl=cache_ttl_seconds)
        self._cache = cache

    async def search(self, query: str, field: SearchField = "title") -> list[Book]:
        cache_key = f"{field}:{query.lower()}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return list(cached)

        operator = _FIELD_OPERATORS[field]
        books = await self._fetch(f"{operator}:{query}", self._max_results)
        if books is None:
            return []
        self._cache[cache_key] = books
        return list(books)

    async def search_subject(self, genre: str, max_results: int = 10) -> list[Book]:
        cache_key = f"subject:{genre.lower()}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return list(cached)

        books = await self._fetch(f"subject:{genre}", max_results, fallback_genre=genre)
        if books is None:
            return []
        self._cache[cache_key] = books
        return list(books)

    async def _fetch(
        self, q: str, max_results: int, fallback_genre: str = UNKNOWN_GENRE
    ) -> list[Book] | None:
        params: dict[str, str | int] = {"q": q, "maxResults": max_results}
        if self._api_key:
            params["key"] = self._api_key

        try:
            response = await self._http.get(self._base_url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Google Books request failed q=%s status_code=%s", q, e.response.status_code
            )
            return None
        except httpx.RequestError as e:
            logger.warning("Google Books request error q=%s error=%s", q, e)
            return None
        except ValueError:
            logger.warning("Google Books returned a non-JSON body q=%s", q)
            return None

        if not isinstance(data, dict):
            logger.warning("Google Books returned an unexpected body q=%s", q)
            return None

        books: list[Book] = []
        for item in data.get("items") or []:
            try:
                books.append(volume_to_book(item, fallback_genre=fallback_genre))
            except (KeyError, TypeError, ValidationError):
                logger.warning("Skipping malformed Google Books volume q=%s", q, exc_info=True)
        return books
