from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from bookshelf_api.dependencies.session import get_session_id
from bookshelf_api.dependencies.shelf import get_shelf_service
from bookshelf_api.domain import BookId, SessionId, UserBookId
from bookshelf_api.errors import EmptyTitleError, UserBookNotFoundError
from bookshelf_api.schemas.shelf import (
    AddBookRequest,
    FeedbackRead,
    FeedbackRequest,
    ReadingList,
    ReadingStats,
    ShelfSnapshot,
)
from bookshelf_api.services.shelf_service import ShelfService

router = APIRouter(prefix="/me", tags=["shelf"])


@router.get(
    "/books",
    response_model=ReadingList,
    summary="Get Reading List",
    description=(
        "Loads the reading list from the remote store, falling back to the local cache. "
        "Persistence problems are reported in `advisory` rather than as errors."
    ),
    responses={401: {"description": "Missing session"}},
)
async def get_my_books(
    session_id: Annotated[SessionId, Depends(get_session_id)],
    svc: Annotated[ShelfService, Depends(get_shelf_service)],
) -> ReadingList:
    return await svc.get_reading_list(session_id)


@router.post(
    "/books",
    response_model=ShelfSnapshot,
    status_code=status.HTTP_201_CREATED,
    summary="Add Book",
    description=(
        "Adds a book the user has read. Metadata is taken from the catalog or, failing "
        "that, from a title search. Returns the updated list and fresh recommendations."
    ),
    responses={401: {"description": "Missing session"}},
)
async def add_my_book(
    payload: AddBookRequest,
    session_id: Annotated[SessionId, Depends(get_session_id)],
    svc: Annotated[ShelfService, Depends(get_shelf_service)],
) -> ShelfSnapshot:
    try:
        return await svc.add_book(session_id, payload)
    except EmptyTitleError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete(
    "/books/{user_book_id}",
    response_model=ShelfSnapshot,
    summary="Remove Book",
    responses={
        401: {"description": "Missing session"},
        404: {"description": "Book not on the reading list"},
    },
)
async def remove_my_book(
    user_book_id: UserBookId,
    session_id: Annotated[SessionId, Depends(get_session_id)],
    svc: Annotated[ShelfService, Depends(get_shelf_service)],
) -> ShelfSnapshot:
    try:
        return await svc.remove_book(session_id, user_book_id)
    except UserBookNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/feedback", response_model=FeedbackRead, summary="Get Feedback")
def get_my_feedback(
    session_id: Annotated[SessionId, Depends(get_session_id)],
    svc: Annotated[ShelfService, Depends(get_shelf_service)],
) -> FeedbackRead:
    return FeedbackRead(feedback=svc.get_feedback(session_id))


@router.put(
    "/feedback/{book_id}",
    response_model=ShelfSnapshot,
    summary="Set Feedback",
    description="Records a like or dislike for a book; the latest signal replaces any earlier one.",
)
async def set_my_feedback(
    book_id: BookId,
    payload: FeedbackRequest,
    session_id: Annotated[SessionId, Depends(get_session_id)],
    svc: Annotated[ShelfService, Depends(get_shelf_service)],
) -> ShelfSnapshot:
    return await svc.set_feedback(session_id, book_id, payload.signal)


@router.get("/stats", response_model=ReadingStats, summary="Get Reading Stats")
async def get_my_stats(
    session_id: Annotated[SessionId, Depends(get_session_id)],
    svc: Annotated[ShelfService, Depends(get_shelf_service)],
) -> ReadingStats:
    return await svc.get_stats(session_id)
