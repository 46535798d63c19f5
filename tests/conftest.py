import os

# point the app's own engine at an in-memory database before anything imports it
os.environ.setdefault("BOOKSHELF_DATABASE_URL", "sqlite://")

from collections.abc import Iterator  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import Engine, create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from bookshelf_api.clients.remote_store import RemoteBookStore  # noqa: E402
from bookshelf_api.database import Base  # noqa: E402
from bookshelf_api.debounce import Debouncer  # noqa: E402
from bookshelf_api.dependencies.clients import (  # noqa: E402
    get_debouncer,
    get_remote_store,
    get_search_client,
)
from bookshelf_api.dependencies.shelf import get_db_session  # noqa: E402
from bookshelf_api.main import app  # noqa: E402
from bookshelf_api.repositories.catalog_repository import CatalogRepository  # noqa: E402
from bookshelf_api.services.catalog_service import CatalogService  # noqa: E402
from tests.fakes import FakeBookSearch  # noqa: E402


@pytest.fixture(autouse=True)
def clear_dependency_overrides() -> Iterator[None]:
    app.dependency_overrides.clear()
    yield
    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def db_engine() -> Engine:
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine: Engine) -> Iterator[Session]:
    connection = db_engine.connect()
    transaction = connection.begin()
    session_factory = sessionmaker(bind=connection)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def test_session_id() -> str:
    return "ses-test-123"


@pytest.fixture
def session_headers(test_session_id: str) -> dict[str, str]:
    return {"X-Session-Id": test_session_id}


@pytest.fixture
def fake_search() -> FakeBookSearch:
    return FakeBookSearch()


@pytest.fixture
def catalog_service(db_session: Session) -> CatalogService:
    return CatalogService(repo=CatalogRepository(session=db_session))


@pytest.fixture
def disabled_remote_store() -> RemoteBookStore:
    return RemoteBookStore(http=httpx.AsyncClient(), url=None)


@pytest.fixture
def client(db_session: Session, fake_search: FakeBookSearch) -> Iterator[TestClient]:
    def override_get_db_session() -> Iterator[Session]:
        yield db_session

    remote_store = RemoteBookStore(http=httpx.AsyncClient(), url=None)
    debouncer = Debouncer(delay_seconds=0.0)

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_search_client] = lambda: fake_search
    app.dependency_overrides[get_remote_store] = lambda: remote_store
    app.dependency_overrides[get_debouncer] = lambda: debouncer

    with TestClient(app) as test_client:
        yield test_client
