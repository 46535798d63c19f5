from pydantic import BaseModel, Field

from bookshelf_api.schemas.book import ScoredBook


class RecommendationsResponse(BaseModel):
    recommendations: list[ScoredBook] = Field(
        description="Up to five recommended books, highest score first"
    )
    user_books_empty: bool = Field(
        description=(
            "True when the reading list is empty, as opposed to a non-empty "
            "list that produced no qualifying books"
        )
    )
