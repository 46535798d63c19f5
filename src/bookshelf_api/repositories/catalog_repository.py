from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookshelf_api.domain import SessionId
from bookshelf_api.models import CatalogEntry
from bookshelf_api.schemas.book import Book


class CatalogRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def count(self, session_id: SessionId) -> int:
        stmt = select(func.count()).select_from(CatalogEntry).where(
            CatalogEntry.session_id == session_id
        )
        return self.session.execute(stmt).scalar_one()

    def list_entries(self, session_id: SessionId) -> Sequence[CatalogEntry]:
        """
        Returns the session catalog in insertion order.
        """
        stmt = (
            select(CatalogEntry)
            .where(CatalogEntry.session_id == session_id)
            .order_by(CatalogEntry.position.asc())
        )
        return self.session.scalars(stmt).all()

    def find_by_title(self, session_id: SessionId, title: str) -> CatalogEntry | None:
        """
        Case-insensitive title lookup.
        """
        stmt = (
            select(CatalogEntry)
            .where(CatalogEntry.session_id == session_id)
            .where(func.lower(CatalogEntry.title) == title.lower())
            .order_by(CatalogEntry.position.asc())
        )
        return self.session.scalars(stmt).first()

    def append(
        self, session_id: SessionId, books: Sequence[Book], case_insensitive: bool = False
    ) -> list[CatalogEntry]:
        """
        Appends books whose title is not yet in the catalog and returns the new rows.

        Titles are compared exactly unless ``case_insensitive`` is set.
        """
        if not books:
            return []

        def normalize(title: str) -> str:
            return title.lower() if case_insensitive else title

        existing = {normalize(entry.title) for entry in self.list_entries(session_id)}
        added: list[CatalogEntry] = []
        for book in books:
            key = normalize(book.title)
            if key in existing:
                continue
            existing.add(key)
            entry = CatalogEntry(
                session_id=session_id,
                book_id=book.id,
                title=book.title,
                author=book.author,
                genre=book.genre,
                features=list(book.features),
                cover_image=book.cover_image,
                description=book.description,
            )
            self.session.add(entry)
            added.append(entry)

        if added:
            try:
                self.session.commit()
            except SQLAlchemyError:
                self.session.rollback()
                raise
            for entry in added:
                self.session.refresh(entry)
        return added
