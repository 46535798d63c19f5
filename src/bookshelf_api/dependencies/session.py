from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

from bookshelf_api.domain import SessionId

session_header = APIKeyHeader(name="X-Session-Id", auto_error=False)


def get_session_id(
    api_key: Annotated[str | None, Depends(session_header)] = None,
) -> SessionId:
    if not api_key or not api_key.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or empty X-Session-Id header",
        )
    return SessionId(api_key.strip())
