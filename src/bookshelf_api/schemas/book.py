from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bookshelf_api.domain import (
    NO_SYNOPSIS,
    UNKNOWN_AUTHOR,
    UNKNOWN_GENRE,
    BookId,
    Rating,
    Score,
    UserBookId,
)


class BookBase(BaseModel):
    title: str = Field(description="Title of the book", examples=["The Hobbit"])
    author: str = Field(
        default=UNKNOWN_AUTHOR, description="Author(s) of the book", examples=["J.R.R. Tolkien"]
    )
    genre: str = Field(
        default=UNKNOWN_GENRE, description="Single free-text genre label", examples=["Fantasy"]
    )
    features: list[str] = Field(
        default_factory=list,
        description="Free-text feature tags",
        examples=[["fantasy", "quest", "dragons"]],
    )
    cover_image: str | None = Field(default=None, description="URL of the cover thumbnail")
    description: str = Field(default=NO_SYNOPSIS, description="Synopsis of the book")

    @field_validator("author", mode="before")
    @classmethod
    def default_author(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return UNKNOWN_AUTHOR
        return value

    @field_validator("genre", mode="before")
    @classmethod
    def default_genre(cls, value: Any) -> Any:
        if not isinstance(value, str) or not value.strip():
            return UNKNOWN_GENRE
        return value

    @field_validator("features", mode="before")
    @classmethod
    def default_features(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list | tuple | set):
            return [str(tag) for tag in value if tag]
        return []

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return NO_SYNOPSIS
        return value


class Book(BookBase):
    id: BookId = Field(description="Opaque identifier of the book", examples=["4"])

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ScoredBook(Book):
    score: Score = Field(description="Recommendation match score", examples=[7])


class UserBook(BookBase):
    id: UserBookId = Field(
        description="Identifier derived from the time the book was added (epoch ms)",
        examples=[1718000000000],
    )
    rating: Rating = Field(description="User rating from 1 to 5", examples=[5])

    model_config = ConfigDict(frozen=True)


class CatalogAddRequest(BookBase):
    id: BookId = Field(description="Identifier of the book to add", examples=["zyTCAlFPjgYC"])


class CatalogRead(BaseModel):
    items: list[Book] = Field(description="Catalog books in iteration order")
    total: int
