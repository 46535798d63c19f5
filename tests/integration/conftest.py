from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient
from httpx import Response


@pytest.fixture
def add_book(client: TestClient, session_headers: dict[str, str]) -> Callable[..., Response]:
    def _add(title: str, rating: int = 5, author: str | None = None) -> Response:
        body: dict = {"title": title, "rating": rating}
        if author is not None:
            body["author"] = author
        return client.post("/me/books", json=body, headers=session_headers)

    return _add
