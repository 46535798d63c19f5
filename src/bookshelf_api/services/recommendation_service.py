import json
import logging
import time
from datetime import UTC, datetime

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError

from bookshelf_api.clients.google_books import GoogleBooksClient
from bookshelf_api.domain import UNKNOWN_GENRE, SessionId
from bookshelf_api.schemas.book import Book
from bookshelf_api.schemas.recommendation import RecommendationsResponse
from bookshelf_api.schemas.shelf import ShelfState
from bookshelf_api.services.catalog_service import CatalogService
from bookshelf_api.services.scoring import genre_ranking, score_recommendations

logger = logging.getLogger(__name__)


class RecommendationService:
    def __init__(
        self,
        catalog: CatalogService,
        search: GoogleBooksClient,
        limit: int = 5,
        augmentation_max_results: int = 10,
    ) -> None:
        self.catalog = catalog
        self.search = search
        self.limit = limit
        self.augmentation_max_results = augmentation_max_results

    async def recommend(self, session_id: SessionId, state: ShelfState) -> RecommendationsResponse:
        start_time = time.perf_counter()

        ranking = genre_ranking(state.user_books)
        catalog = state.catalog
        augmented_count = 0
        if state.user_books and ranking[0] != UNKNOWN_GENRE:
            added = await self._augment(session_id, ranking[0])
            augmented_count = len(added)
            catalog = [*catalog, *added]

        result = score_recommendations(
            state.user_books,
            catalog,
            state.feedback,
            limit=self.limit,
            ranking=ranking,
        )

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        log_event = {
            "event_name": "recommendation_cycle",
            "ts": datetime.now(UTC).isoformat(),
            "session_id": session_id,
            "user_books_count": len(state.user_books),
            "catalog_count": len(catalog),
            "augmented_count": augmented_count,
            "feedback_count": len(state.feedback),
            "returned_count": len(result.recommendations),
            "top_genre": ranking[0] if ranking else None,
            "user_books_empty": result.user_books_empty,
            "latency_ms": latency_ms,
        }
        logger.info("TELEMETRY: %s", json.dumps(log_event))

        return RecommendationsResponse(
            recommendations=result.recommendations,
            user_books_empty=result.user_books_empty,
        )

    async def _augment(self, session_id: SessionId, top_genre: str) -> list[Book]:
        """
        Pulls books for the top genre into the catalog. Never raises.
        """
        discovered = await self.search.search_subject(
            top_genre, max_results=self.augmentation_max_results
        )
        if not discovered:
            return []
        try:
            return await run_in_threadpool(self.catalog.add_books, session_id, discovered)
        except SQLAlchemyError:
            logger.exception("Error fetching additional books genre=%s", top_genre)
            return []
