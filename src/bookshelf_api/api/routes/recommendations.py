from typing import Annotated

from fastapi import APIRouter, Depends

from bookshelf_api.dependencies.session import get_session_id
from bookshelf_api.dependencies.shelf import get_shelf_service
from bookshelf_api.domain import SessionId
from bookshelf_api.schemas.recommendation import RecommendationsResponse
from bookshelf_api.services.shelf_service import ShelfService

router = APIRouter(tags=["recommendations"])


@router.get("/me/recommendations", response_model=RecommendationsResponse)
async def read_my_recommendations(
    session_id: Annotated[SessionId, Depends(get_session_id)],
    svc: Annotated[ShelfService, Depends(get_shelf_service)],
) -> RecommendationsResponse:
    return await svc.get_recommendations(session_id)
