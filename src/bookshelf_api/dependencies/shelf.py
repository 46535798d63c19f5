from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from bookshelf_api.clients.google_books import GoogleBooksClient
from bookshelf_api.clients.remote_store import RemoteBookStore
from bookshelf_api.config import settings
from bookshelf_api.database import SessionLocal
from bookshelf_api.dependencies.clients import (
    get_remote_store,
    get_search_client,
    get_session_locks,
)
from bookshelf_api.repositories.catalog_repository import CatalogRepository
from bookshelf_api.repositories.feedback_repository import FeedbackRepository
from bookshelf_api.repositories.local_cache_repository import LocalCacheRepository
from bookshelf_api.services.catalog_service import CatalogService
from bookshelf_api.services.reading_list_service import ReadingListService
from bookshelf_api.services.recommendation_service import RecommendationService
from bookshelf_api.services.shelf_service import ShelfService
from bookshelf_api.services.suggestion_service import SuggestionService
from bookshelf_api.session_locks import SessionLocks


def get_db_session() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def get_catalog_service(session: Annotated[Session, Depends(get_db_session)]) -> CatalogService:
    return CatalogService(repo=CatalogRepository(session=session))


def get_feedback_repository(
    session: Annotated[Session, Depends(get_db_session)],
) -> FeedbackRepository:
    return FeedbackRepository(session=session)


def get_reading_list_service(
    session: Annotated[Session, Depends(get_db_session)],
    remote: Annotated[RemoteBookStore, Depends(get_remote_store)],
) -> ReadingListService:
    return ReadingListService(
        cache=LocalCacheRepository(session=session),
        remote=remote,
        cache_key=settings.local_cache_key,
    )


def get_recommendation_service(
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    search: Annotated[GoogleBooksClient, Depends(get_search_client)],
) -> RecommendationService:
    return RecommendationService(
        catalog=catalog,
        search=search,
        limit=settings.recommendation_limit,
        augmentation_max_results=settings.augmentation_max_results,
    )


def get_shelf_service(
    reading_list: Annotated[ReadingListService, Depends(get_reading_list_service)],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    feedback: Annotated[FeedbackRepository, Depends(get_feedback_repository)],
    recommender: Annotated[RecommendationService, Depends(get_recommendation_service)],
    search: Annotated[GoogleBooksClient, Depends(get_search_client)],
    locks: Annotated[SessionLocks, Depends(get_session_locks)],
) -> ShelfService:
    return ShelfService(
        reading_list=reading_list,
        catalog=catalog,
        feedback=feedback,
        recommender=recommender,
        search=search,
        locks=locks,
    )


def get_suggestion_service(
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    search: Annotated[GoogleBooksClient, Depends(get_search_client)],
) -> SuggestionService:
    """Dependency to provide the SuggestionService instance."""
    return SuggestionService(
        catalog=catalog,
        search=search,
        limit=settings.suggestion_limit,
        min_query_length=settings.min_query_length,
    )
