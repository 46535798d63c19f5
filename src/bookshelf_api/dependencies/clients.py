from fastapi import Request

from bookshelf_api.clients.google_books import GoogleBooksClient
from bookshelf_api.clients.remote_store import RemoteBookStore
from bookshelf_api.debounce import Debouncer
from bookshelf_api.session_locks import SessionLocks


def get_search_client(request: Request) -> GoogleBooksClient:
    return request.app.state.search_client


def get_remote_store(request: Request) -> RemoteBookStore:
    return request.app.state.remote_store


def get_debouncer(request: Request) -> Debouncer:
    return request.app.state.debouncer


def get_session_locks(request: Request) -> SessionLocks:
    return request.app.state.session_locks
