import pytest

from bookshelf_api.domain import SessionId
from bookshelf_api.services.catalog_service import CatalogService
from bookshelf_api.services.suggestion_service import SuggestionService
from tests.fakes import FakeBookSearch, make_book

SESSION = SessionId("ses-suggest")


@pytest.mark.asyncio
async def test_title_suggestions_put_local_matches_first(catalog_service: CatalogService):
    search = FakeBookSearch(
        results={
            ("title", "the"): [
                make_book("g-1", "The Hobbit"),
                make_book("g-2", "The Road"),
                make_book("g-3", "The Stand"),
                make_book("g-4", "The Shining"),
            ]
        }
    )
    svc = SuggestionService(catalog=catalog_service, search=search)

    suggestions = await svc.suggest(SESSION, "title", "the")

    assert [s.title for s in suggestions] == [
        "The Great Gatsby",
        "The Hobbit",
        "Harry Potter and the Sorcerer's Stone",
        "The Road",
        "The Stand",
    ]
    # the local Hobbit wins over the search result with the same title
    assert suggestions[1].id == "4"


@pytest.mark.asyncio
async def test_author_suggestions_match_substring(catalog_service: CatalogService):
    search = FakeBookSearch()
    svc = SuggestionService(catalog=catalog_service, search=search)

    suggestions = await svc.suggest(SESSION, "author", "  tolk ")

    assert [s.author for s in suggestions] == ["J.R.R. Tolkien"]
    assert search.calls == [("search", "author", "tolk")]


@pytest.mark.asyncio
async def test_author_suggestions_are_unique_by_author(catalog_service: CatalogService):
    search = FakeBookSearch(
        results={("author", "rowling"): [make_book("g-9", "Chamber of Secrets", author="J.K. Rowling")]}
    )
    svc = SuggestionService(catalog=catalog_service, search=search)

    suggestions = await svc.suggest(SESSION, "author", "rowling")

    assert len(suggestions) == 1
    assert suggestions[0].title == "Harry Potter and the Sorcerer's Stone"


@pytest.mark.parametrize("query", ["", "  ", "ab", " ab "])
@pytest.mark.asyncio
async def test_short_queries_return_nothing(catalog_service: CatalogService, query: str):
    search = FakeBookSearch()
    svc = SuggestionService(catalog=catalog_service, search=search)

    assert svc.accepts(query) is False
    assert await svc.suggest(SESSION, "title", query) == []
    assert search.calls == []


def test_local_matches_are_case_insensitive(catalog_service: CatalogService):
    svc = SuggestionService(catalog=catalog_service, search=FakeBookSearch())

    matches = svc.local_matches(SESSION, "title", "HOBBIT")

    assert [b.id for b in matches] == ["4"]
