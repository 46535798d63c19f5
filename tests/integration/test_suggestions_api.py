import asyncio
from collections.abc import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from bookshelf_api.debounce import Debouncer
from bookshelf_api.dependencies.clients import get_debouncer, get_search_client
from bookshelf_api.dependencies.shelf import get_db_session
from bookshelf_api.main import app
from tests.fakes import FakeBookSearch, make_book


def test_title_suggestions(
    client: TestClient, session_headers, fake_search: FakeBookSearch
) -> None:
    fake_search.results[("title", "hobbit")] = [
        make_book("g-1", "The Hobbit"),
        make_book("g-2", "The Hobbit: Graphic Novel"),
    ]

    response = client.get(
        "/suggestions", params={"q": "hobbit", "field": "title"}, headers=session_headers
    )

    assert response.status_code == 200
    data = response.json()
    assert data["field"] == "title"
    assert data["query"] == "hobbit"
    assert data["superseded"] is False
    assert [(s["id"], s["title"]) for s in data["suggestions"]] == [
        ("4", "The Hobbit"),
        ("g-2", "The Hobbit: Graphic Novel"),
    ]


def test_author_suggestions(client: TestClient, session_headers) -> None:
    response = client.get(
        "/suggestions", params={"q": "orwell", "field": "author"}, headers=session_headers
    )

    assert [s["author"] for s in response.json()["suggestions"]] == ["George Orwell"]


def test_short_query_returns_no_suggestions(
    client: TestClient, session_headers, fake_search: FakeBookSearch
) -> None:
    response = client.get("/suggestions", params={"q": "ho"}, headers=session_headers)

    assert response.status_code == 200
    assert response.json() == {
        "field": "title",
        "query": "ho",
        "suggestions": [],
        "superseded": False,
    }
    assert fake_search.calls == []


def test_unknown_field_returns_422(client: TestClient, session_headers) -> None:
    response = client.get(
        "/suggestions", params={"q": "hobbit", "field": "genre"}, headers=session_headers
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_overlapping_requests_supersede_the_earlier_one(
    db_session: Session, fake_search: FakeBookSearch, session_headers
) -> None:
    def override_get_db_session() -> Iterator[Session]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_search_client] = lambda: fake_search
    debouncer = Debouncer(delay_seconds=0.2)
    app.dependency_overrides[get_debouncer] = lambda: debouncer

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        earlier = asyncio.create_task(
            http.get("/suggestions", params={"q": "hob"}, headers=session_headers)
        )
        async with asyncio.timeout(2):
            while not debouncer.is_pending((session_headers["X-Session-Id"], "title")):
                await asyncio.sleep(0.005)
        later = await http.get("/suggestions", params={"q": "hobbit"}, headers=session_headers)
        earlier_response = await earlier

    assert earlier_response.status_code == 200
    assert earlier_response.json() == {
        "field": "title",
        "query": "hob",
        "suggestions": [],
        "superseded": True,
    }
    assert later.json()["superseded"] is False
    assert [s["title"] for s in later.json()["suggestions"]] == ["The Hobbit"]
    assert fake_search.calls == [("search", "title", "hobbit")]
