import logging
from collections.abc import Sequence

import httpx
from pydantic import TypeAdapter, ValidationError

from bookshelf_api.schemas.book import UserBook

logger = logging.getLogger(__name__)

_user_books_adapter = TypeAdapter(list[UserBook])


class RemoteBookStore:
    """
    Optional remote persistence for a session's reading list.

    The store speaks ``{"books": [...]}`` in both directions. With no URL
    configured it is disabled: ``load`` returns None and ``save`` returns False.
    """

    def __init__(self, http: httpx.AsyncClient, url: str | None) -> None:
        self._http = http
        self._url = url

    @property
    def enabled(self) -> bool:
        return bool(self._url)

    async def load(self, session_id: str) -> list[UserBook] | None:
        if not self._url:
            return None
        try:
            response = await self._http.get(self._url, headers={"X-Session-Id": session_id})
            response.raise_for_status()
            books = response.json().get("books")
            if books is None:
                return None
            return _user_books_adapter.validate_python(books)
        except (httpx.HTTPError, ValidationError, ValueError, AttributeError) as e:
            logger.warning("Failed to fetch remote books error=%s", e)
            return None

    async def save(self, session_id: str, books: Sequence[UserBook]) -> bool:
        if not self._url:
            return False
        body = {"books": [book.model_dump(mode="json") for book in books]}
        try:
            response = await self._http.post(
                self._url, json=body, headers={"X-Session-Id": session_id}
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Failed to sync books remotely error=%s", e)
            return False
        return True
