from fastapi.testclient import TestClient

from tests.fakes import FakeBookSearch, make_book


def test_empty_reading_list_flags_empty(client: TestClient, session_headers) -> None:
    response = client.get("/me/recommendations", headers=session_headers)

    assert response.status_code == 200
    assert response.json() == {"recommendations": [], "user_books_empty": True}


def test_missing_session_header_returns_401(client: TestClient) -> None:
    assert client.get("/me/recommendations").status_code == 401


def test_recommendations_exclude_read_books(
    client: TestClient, session_headers, add_book
) -> None:
    add_book("The Great Gatsby", rating=5)

    data = client.get("/me/recommendations", headers=session_headers).json()

    # Mockingbird: classic + american literature + genre bonus
    assert data["user_books_empty"] is False
    assert [(b["title"], b["score"]) for b in data["recommendations"]] == [
        ("To Kill a Mockingbird", 7),
        ("1984", 1),
    ]


def test_low_ratings_contribute_genre_only(
    client: TestClient, session_headers, add_book
) -> None:
    add_book("The Hobbit", rating=2)

    data = client.get("/me/recommendations", headers=session_headers).json()

    assert [(b["title"], b["score"]) for b in data["recommendations"]] == [
        ("Harry Potter and the Sorcerer's Stone", 5)
    ]


def test_top_genre_search_grows_the_catalog(
    client: TestClient, session_headers, fake_search: FakeBookSearch, add_book
) -> None:
    fake_search.subject_results["Fantasy"] = [
        make_book("g-wind", "The Name of the Wind", genre="Fantasy", features=["magic"]),
        make_book("g-hobbit", "The Hobbit", genre="Fantasy"),
    ]
    add_book("The Hobbit")

    data = client.get("/me/recommendations", headers=session_headers).json()

    assert [b["title"] for b in data["recommendations"]] == [
        "Harry Potter and the Sorcerer's Stone",
        "The Name of the Wind",
    ]
    catalog = client.get("/catalog", headers=session_headers).json()
    assert [b["title"] for b in catalog["items"]].count("The Hobbit") == 1
