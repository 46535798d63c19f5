from sqlalchemy import select
from sqlalchemy.orm import Session

from bookshelf_api.domain import BookId, FeedbackSignal, SessionId
from bookshelf_api.models import Feedback


class FeedbackRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_map(self, session_id: SessionId) -> dict[str, str]:
        stmt = select(Feedback).where(Feedback.session_id == session_id)
        return {row.book_id: row.signal for row in self.session.scalars(stmt).all()}

    def set_signal(self, session_id: SessionId, book_id: BookId, signal: FeedbackSignal) -> Feedback:
        """
        Stores the signal for a book, replacing any previous one.
        """
        row = self.session.get(Feedback, (session_id, book_id))
        if row is None:
            row = Feedback(session_id=session_id, book_id=book_id, signal=signal)
            self.session.add(row)
        else:
            row.signal = signal
        self.session.commit()
        self.session.refresh(row)
        return row
