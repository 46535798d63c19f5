from bookshelf_api.schemas.book import Book, CatalogAddRequest, CatalogRead, ScoredBook, UserBook
from bookshelf_api.schemas.recommendation import RecommendationsResponse
from bookshelf_api.schemas.shelf import (
    AddBookRequest,
    FeedbackRead,
    FeedbackRequest,
    ReadingList,
    ReadingStats,
    ShelfSnapshot,
    ShelfState,
)
from bookshelf_api.schemas.suggestion import Suggestion, SuggestionsResponse

__all__ = [
    "AddBookRequest",
    "Book",
    "CatalogAddRequest",
    "CatalogRead",
    "FeedbackRead",
    "FeedbackRequest",
    "ReadingList",
    "ReadingStats",
    "RecommendationsResponse",
    "ScoredBook",
    "ShelfSnapshot",
    "ShelfState",
    "Suggestion",
    "SuggestionsResponse",
    "UserBook",
]
