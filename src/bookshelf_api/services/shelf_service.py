import logging

from fastapi.concurrency import run_in_threadpool

from bookshelf_api.clients.google_books import GoogleBooksClient
from bookshelf_api.domain import UNKNOWN_AUTHOR, BookId, FeedbackSignal, SessionId, UserBookId
from bookshelf_api.errors import EmptyTitleError, UserBookNotFoundError
from bookshelf_api.repositories.feedback_repository import FeedbackRepository
from bookshelf_api.schemas.book import Book, UserBook
from bookshelf_api.schemas.recommendation import RecommendationsResponse
from bookshelf_api.schemas.shelf import (
    AddBookRequest,
    ReadingList,
    ReadingStats,
    ShelfSnapshot,
    ShelfState,
)
from bookshelf_api.services.catalog_service import CatalogService
from bookshelf_api.services.reading_list_service import ReadingListService, next_user_book_id
from bookshelf_api.services.recommendation_service import RecommendationService
from bookshelf_api.services.stats_service import compute_stats
from bookshelf_api.session_locks import SessionLocks

logger = logging.getLogger(__name__)


class ShelfService:
    """
    Coordinates a session's reading list, catalog and feedback.

    Every mutation recomputes the recommendations from a freshly assembled
    ``ShelfState`` and returns them with the updated list. Reading-list
    mutations and feedback hold the session lock from load to save, so
    overlapping requests for one session apply one after the other.
    """

    def __init__(
        self,
        reading_list: ReadingListService,
        catalog: CatalogService,
        feedback: FeedbackRepository,
        recommender: RecommendationService,
        search: GoogleBooksClient,
        locks: SessionLocks,
    ) -> None:
        self.reading_list = reading_list
        self.catalog = catalog
        self.feedback = feedback
        self.recommender = recommender
        self.search = search
        self.locks = locks

    async def get_reading_list(self, session_id: SessionId) -> ReadingList:
        return await self.reading_list.load(session_id)

    def get_feedback(self, session_id: SessionId) -> dict[str, str]:
        return self.feedback.get_map(session_id)

    async def build_state(self, session_id: SessionId, user_books: list[UserBook]) -> ShelfState:
        return ShelfState(
            user_books=user_books,
            catalog=await run_in_threadpool(self.catalog.get_catalog, session_id),
            feedback=await run_in_threadpool(self.feedback.get_map, session_id),
        )

    async def get_recommendations(self, session_id: SessionId) -> RecommendationsResponse:
        reading_list = await self.reading_list.load(session_id)
        state = await self.build_state(session_id, reading_list.books)
        return await self.recommender.recommend(session_id, state)

    async def get_stats(self, session_id: SessionId) -> ReadingStats:
        reading_list = await self.reading_list.load(session_id)
        return compute_stats(reading_list.books)

    async def add_book(self, session_id: SessionId, request: AddBookRequest) -> ShelfSnapshot:
        title = request.title.strip()
        if not title:
            raise EmptyTitleError("Book title must not be empty")

        async with self.locks.get(session_id):
            found = await self._resolve_book(session_id, title)
            current = await self.reading_list.load(session_id)
            user_book = UserBook(
                id=next_user_book_id(current.books),
                title=title,
                author=(request.author or "").strip() or UNKNOWN_AUTHOR,
                rating=request.rating,
                features=list(found.features) if found else [],
                genre=found.genre if found else None,
                cover_image=found.cover_image if found else None,
                description=found.description if found else None,
            )
            logger.info(
                "Book added session_id=%s user_book_id=%s matched=%s",
                session_id,
                user_book.id,
                found is not None,
            )
            return await self._commit(
                session_id, [*current.books, user_book], current.advisory
            )

    async def remove_book(self, session_id: SessionId, user_book_id: UserBookId) -> ShelfSnapshot:
        async with self.locks.get(session_id):
            current = await self.reading_list.load(session_id)
            remaining = [book for book in current.books if book.id != user_book_id]
            if len(remaining) == len(current.books):
                raise UserBookNotFoundError(
                    f"Book with id {user_book_id} is not on the reading list"
                )
            return await self._commit(session_id, remaining, current.advisory)

    async def set_feedback(
        self, session_id: SessionId, book_id: BookId, signal: FeedbackSignal
    ) -> ShelfSnapshot:
        async with self.locks.get(session_id):
            await run_in_threadpool(self.feedback.set_signal, session_id, book_id, signal)
            current = await self.reading_list.load(session_id)
            recommendations = await self.recommender.recommend(
                session_id, await self.build_state(session_id, current.books)
            )
        return ShelfSnapshot(
            books=current.books, advisory=current.advisory, recommendations=recommendations
        )

    async def _resolve_book(self, session_id: SessionId, title: str) -> Book | None:
        """
        Finds catalog metadata for a title, falling back to a title search.
        A search hit is added to the catalog.
        """
        found = await run_in_threadpool(self.catalog.find_by_title, session_id, title)
        if found is not None:
            return found

        results = await self.search.search(title, "title")
        if not results:
            return None
        best = next((b for b in results if b.title.lower() == title.lower()), results[0])
        await run_in_threadpool(
            self.catalog.add_books, session_id, [best], case_insensitive=True
        )
        return best

    async def _commit(
        self, session_id: SessionId, books: list[UserBook], load_advisory: str | None
    ) -> ShelfSnapshot:
        saved = await self.reading_list.save(session_id, books)
        recommendations = await self.recommender.recommend(
            session_id, await self.build_state(session_id, saved.books)
        )
        return ShelfSnapshot(
            books=saved.books,
            advisory=saved.advisory or load_advisory,
            recommendations=recommendations,
        )
