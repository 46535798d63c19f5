import logging
from collections.abc import Sequence

from bookshelf_api.domain import BookId, SessionId
from bookshelf_api.models import CatalogEntry
from bookshelf_api.repositories.catalog_repository import CatalogRepository
from bookshelf_api.schemas.book import Book
from bookshelf_api.seed import SEED_BOOKS

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, repo: CatalogRepository, seed: Sequence[Book] = SEED_BOOKS) -> None:
        self.repo = repo
        self.seed = seed

    def _map_to_schema(self, entry: CatalogEntry) -> Book:
        return Book(
            id=BookId(entry.book_id),
            title=entry.title,
            author=entry.author,
            genre=entry.genre,
            features=entry.features,
            cover_image=entry.cover_image,
            description=entry.description,
        )

    def ensure_seeded(self, session_id: SessionId) -> None:
        if self.repo.count(session_id) == 0:
            added = self.repo.append(session_id, self.seed)
            logger.info("Seeded catalog session_id=%s count=%s", session_id, len(added))

    def get_catalog(self, session_id: SessionId) -> list[Book]:
        self.ensure_seeded(session_id)
        return [self._map_to_schema(entry) for entry in self.repo.list_entries(session_id)]

    def find_by_title(self, session_id: SessionId, title: str) -> Book | None:
        self.ensure_seeded(session_id)
        entry = self.repo.find_by_title(session_id, title)
        return self._map_to_schema(entry) if entry is not None else None

    def add_books(
        self, session_id: SessionId, books: Sequence[Book], case_insensitive: bool = False
    ) -> list[Book]:
        """
        Appends books with unseen titles; returns only those actually added.
        """
        self.ensure_seeded(session_id)
        added = self.repo.append(session_id, books, case_insensitive=case_insensitive)
        if added:
            logger.info("Catalog grew session_id=%s added=%s", session_id, len(added))
        return [self._map_to_schema(entry) for entry in added]
