from collections import Counter
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from bookshelf_api.domain import UNKNOWN_GENRE
from bookshelf_api.schemas.book import UserBook
from bookshelf_api.schemas.shelf import ReadingStats

_ONE_DECIMAL = Decimal("0.1")


def mean_rating(user_books: Sequence[UserBook]) -> float:
    """Mean rating to one decimal, exact halves rounded up (4.25 -> 4.3)."""
    if not user_books:
        return 0.0
    mean = Decimal(sum(book.rating for book in user_books)) / Decimal(len(user_books))
    return float(mean.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def compute_stats(user_books: Sequence[UserBook]) -> ReadingStats:
    genres = Counter(book.genre for book in user_books if book.genre != UNKNOWN_GENRE)
    top = genres.most_common(1)

    return ReadingStats(
        total_books=len(user_books),
        average_rating=mean_rating(user_books),
        top_genre=top[0][0] if top else "N/A",
    )
