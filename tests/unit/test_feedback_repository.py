from sqlalchemy.orm import Session

from bookshelf_api.domain import BookId, SessionId
from bookshelf_api.repositories.feedback_repository import FeedbackRepository

SESSION = SessionId("ses-feedback")


def test_empty_map_for_new_session(db_session: Session):
    assert FeedbackRepository(db_session).get_map(SESSION) == {}


def test_last_signal_wins(db_session: Session):
    repo = FeedbackRepository(db_session)

    repo.set_signal(SESSION, BookId("4"), "like")
    repo.set_signal(SESSION, BookId("4"), "dislike")
    repo.set_signal(SESSION, BookId("5"), "like")

    assert repo.get_map(SESSION) == {"4": "dislike", "5": "like"}


def test_feedback_is_scoped_per_session(db_session: Session):
    repo = FeedbackRepository(db_session)
    repo.set_signal(SESSION, BookId("4"), "like")

    assert repo.get_map(SessionId("ses-other")) == {}
