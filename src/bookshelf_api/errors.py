class BookshelfError(ValueError):
    """Base exception for all reading-list domain errors."""

    pass


class UserBookNotFoundError(BookshelfError):
    """Raised when a book id is not on the user's reading list."""

    pass


class EmptyTitleError(BookshelfError):
    """Raised when a book is added without a title."""

    pass
