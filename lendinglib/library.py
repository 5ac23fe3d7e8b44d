"""Library catalogue, membership and loans, persisted to two text files."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Tuple, Union

from .util import rshash, weighted_string_score

ADMIN_ID = -1337
ADMIN_NAME = "admin"
MAX_LOANS = 3
MIN_PASSWORD_LENGTH = 6
MEMBERS_FILE = "members.txt"
BOOKS_FILE = "books.txt"


class LibraryError(Exception):
    """Raised when a library operation is refused."""


class SearchField(Enum):
    TITLE = "title"
    AUTHOR = "author"
    GENRE = "genre"


@dataclass
class Book:
    available: bool
    id: int
    owner: int
    year: int
    lease_count: int
    author: str
    title: str
    genre: str


@dataclass
class Member:
    name: str
    challenge_code: int
    id: int
    books: List[int] = field(default_factory=list)


@dataclass
class Insights:
    """Leading books, authors and genres with their lease counts, in catalogue order."""

    books: List[Book]
    authors: List[Tuple[str, int]]
    genres: List[Tuple[str, int]]


def _split(text: str, delimiter: str) -> List[str]:
    if not text:
        return []
    parts = text.split(delimiter)
    if parts[-1] == "":
        parts.pop()
    return parts


def parse_member(line: str) -> Member:
    """Parse one record of the members file."""
    fields = _split(line.rstrip("\r\n"), ";")
    if len(fields) < 4:
        raise ValueError(f"malformed member record: {line!r}")
    return Member(
        name=fields[1],
        challenge_code=int(fields[2]),
        id=int(fields[0]),
        books=[int(token) for token in _split(fields[3], ",")],
    )


def parse_book(line: str) -> Book:
    """Parse one record of the books file."""
    fields = _split(line.rstrip("\r\n"), ";")
    if len(fields) < 8:
        raise ValueError(f"malformed book record: {line!r}")
    return Book(
        available=int(fields[0]) != 0,
        id=int(fields[1]),
        owner=int(fields[2]),
        year=int(fields[3]),
        lease_count=int(fields[4]),
        author=fields[5],
        title=fields[6],
        genre=fields[7],
    )


def format_member(member: Member) -> str:
    """Render a member as a members-file record, newline included."""
    books = ",".join(str(book_id) for book_id in member.books)
    return f"{member.id};{member.name};{member.challenge_code};{books};\n"


def format_book(book: Book) -> str:
    """Render a book as a books-file record, line ending included."""
    return (
        f"{int(book.available)};{book.id};{book.owner};{book.year};"
        f"{book.lease_count};{book.author};{book.title};{book.genre};\r\n"
    )


def _records(path: Path) -> List[str]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        lines = handle.read().split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


class Library:
    """Books and members of one library, stored under ``directory``."""

    def __init__(self, directory: Union[str, Path] = ".") -> None:
        self.directory = Path(directory)
        self.books: List[Book] = []
        self.members: List[Member] = []

    @property
    def members_path(self) -> Path:
        return self.directory / MEMBERS_FILE

    @property
    def books_path(self) -> Path:
        return self.directory / BOOKS_FILE

    def _ensure_files(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        for path in (self.members_path, self.books_path):
            path.touch(exist_ok=True)

    def load(self) -> bool:
        """Read members and books from disk; return False if there were no books."""
        self._ensure_files()
        self.members = [parse_member(line) for line in _records(self.members_path)]
        self.books = [parse_book(line) for line in _records(self.books_path)]
        return bool(self.books)

    def save(self) -> None:
        """Write members and books to disk, replacing the files."""
        self._ensure_files()
        with self.members_path.open("w", encoding="utf-8", newline="") as handle:
            handle.writelines(format_member(member) for member in self.members)
        with self.books_path.open("w", encoding="utf-8", newline="") as handle:
            handle.writelines(format_book(book) for book in self.books)

    def register_member(self, name: str, password: str) -> int:
        """Add a member and return its id."""
        if ";" in name or "," in name:
            raise LibraryError("Name cannot contain blacklisted characters (; or ,)")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise LibraryError("Password must have at least six characters.")
        lowered = name.lower()
        if lowered == ADMIN_NAME or any(m.name.lower() == lowered for m in self.members):
            raise LibraryError("A member already exists with this name.")
        member_id = len(self.members)
        self.members.append(Member(name, rshash(password), member_id, []))
        return member_id

    def add_book(self, year: int, author: str, title: str, genre: str) -> int:
        """Add an available book to the catalogue and return its index."""
        if any(";" in text for text in (author, title, genre)):
            raise LibraryError("One of the inputs failed sanitation. No using semicolons.")
        book_id = len(self.books)
        self.books.append(Book(True, book_id, -1, year, 0, author, title, genre))
        return book_id

    def login(self, name: str, password: str) -> int:
        """Return the member id for valid credentials, or ADMIN_ID for the administrator."""
        challenge = rshash(password)
        lowered = name.lower()
        for member in self.members:
            if member.name.lower() == lowered and member.challenge_code == challenge:
                return member.id
        if lowered == ADMIN_NAME and password.lower() == ADMIN_NAME:
            return ADMIN_ID
        raise LibraryError("Failed to login, invalid credentials")

    def _book(self, index: int) -> Book:
        if not 0 <= index < len(self.books):
            raise IndexError(f"no book at index {index}")
        return self.books[index]

    def borrow(self, member_id: int, index: int) -> Book:
        """Lend the book at ``index`` to a member."""
        book = self._book(index)
        member = self.members[member_id]
        if not book.available:
            raise LibraryError(
                "The book you chose is not currently available, "
                "please come back at a later date."
            )
        if len(member.books) >= MAX_LOANS:
            raise LibraryError(
                "You have borrowed 3 books, please return one before "
                "attempting to borrow another one."
            )
        book.available = False
        book.owner = member_id
        book.lease_count += 1
        member.books.append(index)
        return book

    def return_book(self, member_id: int, index: int) -> Book:
        """Take back the book at ``index`` from a member."""
        member = self.members[member_id]
        if index not in member.books:
            raise LibraryError(
                "You do not have possession of this book, nor do you owe us it. "
                "Please select a book from the list."
            )
        book = self._book(index)
        book.available = True
        member.books.remove(index)
        book.owner = -1
        return book

    def remove_book(self, index: int) -> Book:
        """Delete an available book, renumbering the rest and members' loans."""
        book = self._book(index)
        if not book.available:
            owner = self.members[book.owner].name
            raise LibraryError(
                f"The book cannot be removed, as it is currently being borrowed by {owner}"
            )
        del self.books[index]
        for new_id, remaining in enumerate(self.books):
            remaining.id = new_id
        for member in self.members:
            member.books = [b - 1 if b > index else b for b in member.books]
        return book

    def search(self, query: str, field: SearchField) -> List[Book]:
        """Return all books ordered by similarity of ``field`` to ``query``, best first."""
        return sorted(
            self.books,
            key=lambda book: weighted_string_score(query, getattr(book, field.value)),
            reverse=True,
        )

    def insights(self, limit: int = 5) -> Insights:
        """Summarise lease counts per book, author and genre."""
        authors: dict = {}
        genres: dict = {}
        for book in self.books:
            # A repeated author or genre adds one, not its lease count.
            authors[book.author] = authors[book.author] + 1 if book.author in authors else book.lease_count
            genres[book.genre] = genres[book.genre] + 1 if book.genre in genres else book.lease_count
        return Insights(
            books=self.books[:limit],
            authors=list(authors.items())[:limit],
            genres=list(genres.items())[:limit],
        )