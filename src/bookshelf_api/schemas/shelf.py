from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints

from bookshelf_api.domain import BookId, FeedbackSignal, Rating
from bookshelf_api.schemas.book import Book, UserBook
from bookshelf_api.schemas.recommendation import RecommendationsResponse


class ShelfState(BaseModel):
    """Everything the scorer reads, passed explicitly instead of held globally."""

    user_books: list[UserBook] = Field(default_factory=list)
    catalog: list[Book] = Field(default_factory=list)
    feedback: dict[BookId, FeedbackSignal] = Field(default_factory=dict)


class ReadingList(BaseModel):
    books: list[UserBook] = Field(description="Books the user has read")
    advisory: str | None = Field(
        default=None,
        description="Non-fatal persistence message to show the user",
        examples=["Remote sync failed, changes saved locally."],
    )


class AddBookRequest(BaseModel):
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)] = Field(
        description="Title of the book", examples=["The Hobbit"]
    )
    author: str | None = Field(default=None, description="Optional author name")
    rating: Rating = Field(default=5, description="Rating from 1 to 5", examples=[4])


class FeedbackRequest(BaseModel):
    signal: FeedbackSignal = Field(description="Like or dislike", examples=["like"])


class FeedbackRead(BaseModel):
    feedback: dict[BookId, FeedbackSignal] = Field(
        description="Feedback signal per book id", examples=[{"4": "like"}]
    )


class ShelfSnapshot(ReadingList):
    recommendations: RecommendationsResponse = Field(
        description="Recommendations recomputed after the change"
    )


class ReadingStats(BaseModel):
    total_books: int = Field(description="Number of books on the reading list")
    average_rating: float = Field(description="Mean rating, rounded to one decimal")
    top_genre: str = Field(
        description="Most frequent known genre, or N/A", examples=["Fantasy", "N/A"]
    )
