import pytest
from pydantic import ValidationError

from bookshelf_api.schemas import (
    AddBookRequest,
    Book,
    FeedbackRequest,
    ScoredBook,
    ShelfState,
    UserBook,
)


def test_book_applies_defaults_for_missing_fields():
    book = Book(id="x", title="Untitled", author=None, genre="", features=None, description="  ")

    assert book.author == "Unknown Author"
    assert book.genre == "Unknown"
    assert book.features == []
    assert book.description == "No synopsis available"
    assert book.cover_image is None


def test_book_coerces_numeric_id_and_drops_empty_features():
    book = Book(id=4, title="The Hobbit", features=["magic", "", None, "quest"])

    assert book.id == "4"
    assert book.features == ["magic", "quest"]


def test_single_feature_string_becomes_list():
    assert Book(id="1", title="Dune", features="desert").features == ["desert"]


def test_scored_book_rejects_negative_score():
    with pytest.raises(ValidationError):
        ScoredBook(id="1", title="Dune", score=-1)


@pytest.mark.parametrize("rating", [0, 6])
def test_user_book_rating_out_of_range(rating: int):
    with pytest.raises(ValidationError):
        UserBook(id=1, title="Dune", rating=rating)


def test_user_book_is_frozen():
    book = UserBook(id=1, title="Dune", rating=3)

    with pytest.raises(ValidationError):
        book.rating = 4  # type: ignore[misc]


def test_add_book_request_strips_title_and_defaults_rating():
    request = AddBookRequest(title="  The Hobbit  ")

    assert request.title == "The Hobbit"
    assert request.rating == 5
    assert request.author is None


def test_add_book_request_rejects_blank_title():
    with pytest.raises(ValidationError):
        AddBookRequest(title="   ")


def test_feedback_request_rejects_unknown_signal():
    with pytest.raises(ValidationError):
        FeedbackRequest(signal="meh")


def test_shelf_state_defaults_are_empty():
    state = ShelfState()

    assert state.user_books == []
    assert state.catalog == []
    assert state.feedback == {}
