from bookshelf_api.schemas.book import Book

SEED_BOOKS: tuple[Book, ...] = (
    Book(
        id="1",
        title="The Great Gatsby",
        author="F. Scott Fitzgerald",
        features=["classic", "american literature", "tragedy", "wealth", "love", "1920s"],
        genre="Literary Fiction",
        description="A portrayal of the American Dream and its decay.",
    ),
    Book(
        id="2",
        title="To Kill a Mockingbird",
        author="Harper Lee",
        features=["classic", "american literature", "coming-of-age", "racism", "justice"],
        genre="Literary Fiction",
        description="A story of racial injustice and moral growth.",
    ),
    Book(
        id="3",
        title="1984",
        author="George Orwell",
        features=["dystopian", "political", "totalitarianism", "surveillance", "classic"],
        genre="Science Fiction",
        description="A dystopian vision of a totalitarian future.",
    ),
    Book(
        id="4",
        title="The Hobbit",
        author="J.R.R. Tolkien",
        features=["fantasy", "adventure", "quest", "dragons", "magic"],
        genre="Fantasy",
        description="A fantasy adventure preceding The Lord of the Rings.",
    ),
    Book(
        id="5",
        title="Harry Potter and the Sorcerer's Stone",
        author="J.K. Rowling",
        features=["fantasy", "magic", "coming-of-age", "boarding school", "friendship"],
        genre="Fantasy",
        description="The beginning of the magical journey of Harry Potter.",
    ),
)
