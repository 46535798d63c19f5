import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from bookshelf_api.api.routes.catalog import router as catalog_router
from bookshelf_api.api.routes.recommendations import router as recommendations_router
from bookshelf_api.api.routes.shelf import router as shelf_router
from bookshelf_api.api.routes.suggestions import router as suggestions_router
from bookshelf_api.clients.google_books import GoogleBooksClient
from bookshelf_api.clients.remote_store import RemoteBookStore
from bookshelf_api.config import settings
from bookshelf_api.database import Base, engine
from bookshelf_api.debounce import Debouncer
from bookshelf_api.logging_config import configure_logging
from bookshelf_api.middleware import RequestContextMiddleware
from bookshelf_api.session_locks import SessionLocks

configure_logging(
    level=settings.log_level,
    output_format=settings.log_format,
    service_name=settings.log_service_name,
)
logger = logging.getLogger(__name__)
logger.info("Application bootstrapped")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    Base.metadata.create_all(bind=engine)

    http = httpx.AsyncClient(timeout=settings.search_timeout_seconds)
    app.state.search_client = GoogleBooksClient(
        http=http,
        base_url=settings.google_books_base_url,
        api_key=settings.google_books_api_key,
        max_results=settings.suggestion_limit,
        cache_max_entries=settings.search_cache_max_entries,
        cache_ttl_seconds=settings.search_cache_ttl_seconds,
    )
    app.state.remote_store = RemoteBookStore(http=http, url=settings.remote_store_url)
    app.state.debouncer = Debouncer(delay_seconds=settings.debounce_ms / 1000)
    app.state.session_locks = SessionLocks()
    try:
        yield
    finally:
        app.state.debouncer.cancel_all()
        await http.aclose()
        logger.info("Application shut down")


app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan,
)
app.add_middleware(RequestContextMiddleware)
app.include_router(shelf_router)
app.include_router(recommendations_router)
app.include_router(catalog_router)
app.include_router(suggestions_router)
