from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from bookshelf_api.dependencies.session import get_session_id
from bookshelf_api.dependencies.shelf import get_catalog_service
from bookshelf_api.domain import SessionId
from bookshelf_api.schemas.book import Book, CatalogAddRequest, CatalogRead
from bookshelf_api.services.catalog_service import CatalogService

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=CatalogRead)
def list_catalog(
    session_id: Annotated[SessionId, Depends(get_session_id)],
    svc: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CatalogRead:
    """Retrieve the session catalog in iteration order."""
    items = svc.get_catalog(session_id)
    return CatalogRead(items=items, total=len(items))


@router.post(
    "",
    response_model=Book | None,
    summary="Add Book To Catalog",
    description=(
        "Adds a picked suggestion to the catalog. Returns 201 with the book when it was "
        "added, or 200 with null when a book with the same title (case-insensitive) exists."
    ),
)
def add_to_catalog(
    payload: CatalogAddRequest,
    response: Response,
    session_id: Annotated[SessionId, Depends(get_session_id)],
    svc: Annotated[CatalogService, Depends(get_catalog_service)],
) -> Book | None:
    book = Book(**payload.model_dump())
    added = svc.add_books(session_id, [book], case_insensitive=True)
    if not added:
        return None
    response.status_code = status.HTTP_201_CREATED
    return added[0]
