from collections.abc import Callable, Iterable

from fastapi.concurrency import run_in_threadpool

from bookshelf_api.clients.google_books import GoogleBooksClient
from bookshelf_api.domain import SearchField, SessionId
from bookshelf_api.schemas.book import Book
from bookshelf_api.schemas.suggestion import Suggestion
from bookshelf_api.services.catalog_service import CatalogService


def _unique_by(books: Iterable[Book], key: Callable[[Book], str]) -> list[Book]:
    seen: set[str] = set()
    unique: list[Book] = []
    for book in books:
        k = key(book)
        if k in seen:
            continue
        seen.add(k)
        unique.append(book)
    return unique


def _to_suggestion(book: Book) -> Suggestion:
    return Suggestion(
        id=book.id,
        title=book.title,
        author=book.author,
        cover_image=book.cover_image,
        description=book.description,
    )


class SuggestionService:
    def __init__(
        self,
        catalog: CatalogService,
        search: GoogleBooksClient,
        limit: int = 5,
        min_query_length: int = 3,
    ) -> None:
        self.catalog = catalog
        self.search = search
        self.limit = limit
        self.min_query_length = min_query_length

    def accepts(self, query: str) -> bool:
        return len(query.strip()) >= self.min_query_length

    def local_matches(self, session_id: SessionId, field: SearchField, query: str) -> list[Book]:
        needle = query.strip().lower()
        key = _field_key(field)
        matches = [b for b in self.catalog.get_catalog(session_id) if needle in key(b).lower()]
        return _unique_by(matches, key)[: self.limit]

    async def suggest(
        self, session_id: SessionId, field: SearchField, query: str
    ) -> list[Suggestion]:
        """
        Local catalog matches first, then search results, unique by the
        searched field and capped at the limit.
        """
        if not self.accepts(query):
            return []

        local = await run_in_threadpool(self.local_matches, session_id, field, query)
        remote = await self.search.search(query.strip(), field)
        combined = _unique_by([*local, *remote], _field_key(field))[: self.limit]
        return [_to_suggestion(book) for book in combined]


def _field_key(field: SearchField) -> Callable[[Book], str]:
    if field == "author":
        return lambda book: book.author
    return lambda book: book.title
