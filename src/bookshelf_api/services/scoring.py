"""
Recommendation scoring.

A catalog book's score is the sum of three parts:

* feature overlap: for each of its feature tags, how often that tag appears
  across the user's favorites (books rated 4 or higher);
* genre bonus: +5 if its genre is the user's most-read genre, +4 for the
  second, and so on down to a floor of +1;
* feedback: +3 for a like, -5 for a dislike.

Books the user already read (case-insensitive title) and books scoring 0 or
less are dropped. The rest are ranked by score; equal scores keep catalog
order.
"""

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from bookshelf_api.domain import Score
from bookshelf_api.schemas.book import Book, ScoredBook, UserBook

FAVORITE_MIN_RATING = 4
TOP_GENRE_BONUS = 5
MIN_GENRE_BONUS = 1
LIKE_BONUS = 3
DISLIKE_PENALTY = 5
DEFAULT_LIMIT = 5


@dataclass(frozen=True)
class ScoringResult:
    recommendations: list[ScoredBook] = field(default_factory=list)
    user_books_empty: bool = False


def favorite_feature_counts(user_books: Iterable[UserBook]) -> Counter[str]:
    counts: Counter[str] = Counter()
    for book in user_books:
        if book.rating >= FAVORITE_MIN_RATING:
            counts.update(book.features)
    return counts


def genre_ranking(user_books: Iterable[UserBook]) -> list[str]:
    """Genres by descending read count; ties keep first-seen order."""
    counts = Counter(book.genre for book in user_books)
    # sorted() is stable and Counter preserves first-seen order
    return [genre for genre, _ in sorted(counts.items(), key=lambda kv: -kv[1])]


def genre_bonus(rank: int) -> int:
    return max(TOP_GENRE_BONUS - rank, MIN_GENRE_BONUS)


def score_book(
    book: Book,
    feature_counts: Mapping[str, int],
    genre_ranks: Mapping[str, int],
    feedback: Mapping[str, str],
) -> int:
    score = sum(feature_counts.get(tag, 0) for tag in book.features)

    rank = genre_ranks.get(book.genre)
    if rank is not None:
        score += genre_bonus(rank)

    signal = feedback.get(book.id)
    if signal == "like":
        score += LIKE_BONUS
    elif signal == "dislike":
        score -= DISLIKE_PENALTY

    return score


def score_recommendations(
    user_books: Sequence[UserBook],
    catalog: Sequence[Book],
    feedback: Mapping[str, str],
    limit: int = DEFAULT_LIMIT,
    ranking: Sequence[str] | None = None,
) -> ScoringResult:
    if not user_books:
        return ScoringResult(recommendations=[], user_books_empty=True)

    feature_counts = favorite_feature_counts(user_books)
    if ranking is None:
        ranking = genre_ranking(user_books)
    genre_ranks = {genre: rank for rank, genre in enumerate(ranking)}
    read_titles = {book.title.lower() for book in user_books}

    candidates: list[ScoredBook] = []
    for book in catalog:
        if book.title.lower() in read_titles:
            continue
        score = score_book(book, feature_counts, genre_ranks, feedback)
        if score <= 0:
            continue
        candidates.append(ScoredBook(**book.model_dump(), score=Score(score)))

    candidates.sort(key=lambda b: -b.score)
    return ScoringResult(recommendations=candidates[:limit], user_books_empty=False)
