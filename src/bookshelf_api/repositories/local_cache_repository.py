from sqlalchemy.orm import Session

from bookshelf_api.domain import SessionId
from bookshelf_api.models import LocalCacheEntry


class LocalCacheRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_payload(self, session_id: SessionId, key: str) -> str | None:
        row = self.session.get(LocalCacheEntry, (session_id, key))
        return row.payload if row is not None else None

    def put_payload(self, session_id: SessionId, key: str, payload: str) -> None:
        row = self.session.get(LocalCacheEntry, (session_id, key))
        if row is None:
            self.session.add(LocalCacheEntry(session_id=session_id, key=key, payload=payload))
        else:
            row.payload = payload
        self.session.commit()
