from typing import Annotated

from fastapi import APIRouter, Depends, Query

from bookshelf_api.debounce import Debouncer, run_debounced
from bookshelf_api.dependencies.clients import get_debouncer
from bookshelf_api.dependencies.session import get_session_id
from bookshelf_api.dependencies.shelf import get_suggestion_service
from bookshelf_api.domain import SearchField, SessionId
from bookshelf_api.schemas.suggestion import SuggestionsResponse
from bookshelf_api.services.suggestion_service import SuggestionService

router = APIRouter(prefix="/suggestions", tags=["suggestions"])


@router.get(
    "",
    response_model=SuggestionsResponse,
    summary="Type-ahead Suggestions",
    description=(
        "Suggestions for the title or author input. Requests are debounced per session "
        "and field: a request replaced by a newer one before the delay elapses comes back "
        "with `superseded: true` and no suggestions."
    ),
)
async def get_suggestions(
    session_id: Annotated[SessionId, Depends(get_session_id)],
    svc: Annotated[SuggestionService, Depends(get_suggestion_service)],
    debouncer: Annotated[Debouncer, Depends(get_debouncer)],
    q: str = Query("", description="Partial title or author"),
    field: SearchField = Query("title", description="Which input is being typed into"),
) -> SuggestionsResponse:
    if not svc.accepts(q):
        return SuggestionsResponse(field=field, query=q, suggestions=[])

    superseded, suggestions = await run_debounced(
        debouncer, (session_id, field), lambda: svc.suggest(session_id, field, q)
    )
    return SuggestionsResponse(
        field=field, query=q, suggestions=suggestions or [], superseded=superseded
    )
