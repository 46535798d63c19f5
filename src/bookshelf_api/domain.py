import typing
from typing import Annotated, Literal

from pydantic import BeforeValidator, Field

if typing.TYPE_CHECKING:
    BookId = typing.NewType("BookId", str)
    UserBookId = typing.NewType("UserBookId", int)
    SessionId = typing.NewType("SessionId", str)
    Rating = typing.NewType("Rating", int)
    Score = typing.NewType("Score", int)
else:
    # Seed catalog ids are integers, search ids are strings; both end up as str.
    _BookIdStr = Annotated[str, BeforeValidator(str), Field(min_length=1, max_length=64)]
    BookId = typing.NewType("BookId", _BookIdStr)

    _UserBookIdInt = Annotated[int, Field(ge=0)]
    UserBookId = typing.NewType("UserBookId", _UserBookIdInt)

    _SessionIdStr = Annotated[str, Field(min_length=1, max_length=128)]
    SessionId = typing.NewType("SessionId", _SessionIdStr)

    _RatingInt = Annotated[int, Field(ge=1, le=5)]
    Rating = typing.NewType("Rating", _RatingInt)

    _ScoreInt = Annotated[int, Field(ge=0)]
    Score = typing.NewType("Score", _ScoreInt)

FeedbackSignal = Literal["like", "dislike"]
SearchField = Literal["title", "author"]

UNKNOWN_GENRE = "Unknown"
UNKNOWN_AUTHOR = "Unknown Author"
UNKNOWN_TITLE = "Unknown Title"
NO_SYNOPSIS = "No synopsis available"
