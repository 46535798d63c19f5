import json
import logging
import time
from collections.abc import Sequence

from fastapi.concurrency import run_in_threadpool
from pydantic import TypeAdapter, ValidationError

from bookshelf_api.clients.remote_store import RemoteBookStore
from bookshelf_api.domain import SessionId, UserBookId
from bookshelf_api.repositories.local_cache_repository import LocalCacheRepository
from bookshelf_api.schemas.book import UserBook
from bookshelf_api.schemas.shelf import ReadingList

logger = logging.getLogger(__name__)

LOCAL_LOAD_FAILED = "Failed to load books from local storage."
REMOTE_SYNC_FAILED = "Remote sync failed, changes saved locally."

_user_books_adapter = TypeAdapter(list[UserBook])


def next_user_book_id(books: Sequence[UserBook], now_ms: int | None = None) -> UserBookId:
    """Epoch-millisecond id, bumped past the newest existing id on collision."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    newest = max((book.id for book in books), default=-1)
    return UserBookId(max(now_ms, newest + 1))


class ReadingListService:
    """
    Loads and saves a session's reading list.

    The remote store is tried first on load; whatever it returns is written
    through to the local cache. When the remote is absent or fails, the local
    cache (a JSON document under a fixed key) is used instead.
    """

    def __init__(
        self, cache: LocalCacheRepository, remote: RemoteBookStore, cache_key: str
    ) -> None:
        self.cache = cache
        self.remote = remote
        self.cache_key = cache_key

    async def load(self, session_id: SessionId) -> ReadingList:
        remote_books = await self.remote.load(session_id)
        if remote_books is not None:
            await run_in_threadpool(self._write_local, session_id, remote_books)
            return ReadingList(books=remote_books)

        payload = await run_in_threadpool(self.cache.get_payload, session_id, self.cache_key)
        if payload is None:
            return ReadingList(books=[])

        try:
            books = _user_books_adapter.validate_python(json.loads(payload))
        except (ValueError, ValidationError):
            logger.warning("Local reading list is unreadable session_id=%s", session_id)
            return ReadingList(books=[], advisory=LOCAL_LOAD_FAILED)
        return ReadingList(books=books)

    async def save(self, session_id: SessionId, books: Sequence[UserBook]) -> ReadingList:
        await run_in_threadpool(self._write_local, session_id, books)

        advisory = None
        if self.remote.enabled and not await self.remote.save(session_id, books):
            advisory = REMOTE_SYNC_FAILED
        return ReadingList(books=list(books), advisory=advisory)

    def _write_local(self, session_id: SessionId, books: Sequence[UserBook]) -> None:
        payload = json.dumps([book.model_dump(mode="json") for book in books])
        self.cache.put_payload(session_id, self.cache_key, payload)
