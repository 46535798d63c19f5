from pydantic import BaseModel, Field

from bookshelf_api.domain import BookId, SearchField


class Suggestion(BaseModel):
    id: BookId | None = None
    title: str
    author: str
    cover_image: str | None = None
    description: str | None = None


class SuggestionsResponse(BaseModel):
    field: SearchField = Field(description="Which input the suggestions are for")
    query: str = Field(description="The query the suggestions were computed for")
    suggestions: list[Suggestion] = Field(description="Up to five suggestions, local first")
    superseded: bool = Field(
        default=False,
        description="True when a newer request for the same input replaced this one",
    )
