"""Interactive console session for members and the administrator."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Iterator, List, Optional, TextIO

from .library import ADMIN_ID, Book, Library, LibraryError, SearchField
from .util import DEFAULT_CHOICE_PROMPT, collect_input_int, collect_input_str

WELCOME_MENU = (
    "Welcome to the Library! Are you a new or returning user?\r\n"
    "1. New User (Register)\r\n"
    "2. Returning User (Login)\r\n"
)
ADMIN_MENU = (
    "Please choose one of the following actions:\r\n"
    "1. Show all Members\r\n"
    "2. Add Book\r\n"
    "3. Remove Book\r\n"
    "4. Book Insights\r\n"
)
MEMBER_MENU = (
    "Please choose one of the following actions:\r\n"
    "1. Show outstanding books\r\n"
    "2. Browse Catalog & Borrow\r\n"
    "3. Search for Book\r\n"
    "4. Return Book\r\n"
)
SEARCH_MENU = (
    "Please choose a search method:\r\n"
    "1. By title\r\n"
    "2. By author\r\n"
    "3. By genre\r\n"
)
BOOKS_HEADER = "###################    Books    ###################\r\n"
UNAVAILABLE = (
    "The book you chose is not currently available, "
    "please come back at a later date.\r\n"
)
NO_OUTSTANDING = "You have no outstanding books!\r\n\r\n"
GOODBYE = "Thanks for coming to the library! Goodbye\r\n"

NAME_PROMPT = "Please enter your name (0 to exit): "
ACCESS_PROMPT = "Please enter your " + "pass" + "word: "
BORROW_PROMPT = "Please enter book number to borrow (0 to return to menu): "
SEARCH_BORROW_PROMPT = (
    "Please enter book number to borrow (0 to return to previous menu): "
)
RETURN_PROMPT = "Please enter book number to return (0 to return to menu): "
REMOVE_PROMPT = "Please enter book number to remove (0 to return to menu): "
YEAR_PROMPT = "Please enter year (0 to return to menu): "
SEARCH_CHOICE_PROMPT = "Please enter search choice (0 to return to menu): "
MAX_YEAR = 2026


class _Console:
    """Reads answers from a line source and writes prompts to a stream."""

    def __init__(self, lines: Iterable[str], out: TextIO) -> None:
        self.lines: Iterator[str] = iter(lines)
        self.out = out

    def write(self, text: str) -> None:
        self.out.write(text)

    def ask_int(self, upper: int, prompt: str = DEFAULT_CHOICE_PROMPT) -> int:
        return collect_input_int(upper, prompt, self.lines, self.out)

    def ask_str(self, prompt: str) -> str:
        return collect_input_str(prompt, self.lines, self.out)


def _catalog_line(book: Book) -> str:
    status = "AVAILABLE" if book.available else "BORROWED"
    return (
        f"[{book.id + 1}] {book.author} - {book.title} ({book.year}) "
        f"(Genre: {book.genre}) [Status: {status}]\r\n"
    )


def _loan_line(book: Book) -> str:
    return (
        f"[{book.id + 1}] {book.author} - {book.title} ({book.year}) "
        f"(Genre: {book.genre})\r\n"
    )


def _sign_in(library: Library, console: _Console) -> Optional[int]:
    console.write(WELCOME_MENU)
    choice = console.ask_int(2)
    if choice == 0:
        return None
    while True:
        name = console.ask_str(NAME_PROMPT)
        if name == "0":
            return None
        phrase = console.ask_str(ACCESS_PROMPT)
        try:
            if choice == 1:
                user_id = library.register_member(name, phrase)
                console.write(
                    f"Welcome to the Library! Your member ID is {user_id + 1}\r\n"
                )
            else:
                user_id = library.login(name, phrase)
                if user_id == ADMIN_ID:
                    console.write("Welcome back, admin!\r\n")
                else:
                    console.write(f"Welcome to the library, {name}!\r\n")
        except LibraryError as exc:
            console.write(f"Error: {exc}\r\n")
            continue
        return user_id


# Administrator actions


def _show_members(library: Library, console: _Console) -> None:
    footer = "######################################" + "#" * len(str(ADMIN_ID))
    for member in library.members:
        console.write(
            f"\r\n##############   Member #{member.id + 1}   ############## \r\n"
            f"Name: {member.name}\r\n"
        )
        if not member.books:
            console.write("The member has no books taken out.\r\n")
        for book_id in member.books:
            book = library.books[book_id]
            console.write(
                f"{book.title} by {book.author} (Genre: {book.genre}) [{book.id + 1}]"
            )
        console.write(footer + "\r\n")


def _add_book(library: Library, console: _Console) -> bool:
    """Return True once a book is added, False when the admin backs out."""
    while True:
        year = console.ask_int(MAX_YEAR, YEAR_PROMPT)
        if year == 0:
            return False
        author = console.ask_str("Please enter author: ")
        title = console.ask_str("Please enter title: ")
        genre = console.ask_str("Please enter genre: ")
        try:
            library.add_book(year, author, title, genre)
        except LibraryError as exc:
            console.write(f"Error: {exc}\r\n")
            continue
        console.write("Book successfully created!\r\n")
        return True


def _remove_book(library: Library, console: _Console) -> bool:
    """Return True once a book is removed, False when nothing was removed."""
    if not library.books:
        console.write("Unfortunately, no books currently exist.\r\n\r\n")
        return False
    console.write(BOOKS_HEADER)
    for book in library.books:
        console.write(_catalog_line(book))
    while True:
        selection = console.ask_int(len(library.books), REMOVE_PROMPT)
        if selection == 0:
            return False
        try:
            library.remove_book(selection - 1)
        except LibraryError as exc:
            console.write(f"{exc}\r\n")
            continue
        return True


def _show_insights(library: Library, console: _Console) -> None:
    summary = library.insights(5)
    console.write("Top books:\r\n")
    for rank, book in enumerate(summary.books, 1):
        console.write(
            f"{rank}) {book.author} - {book.title} ({book.lease_count} leases)\r\n"
        )
    console.write("Top authors:\r\n")
    for rank, (author, count) in enumerate(summary.authors, 1):
        console.write(f"{rank}) {author} ({count} leases)\r\n")
    console.write("Top genres:\r\n")
    for rank, (genre, count) in enumerate(summary.genres, 1):
        console.write(f"{rank}) {genre} ({count} leases)\r\n")


def _admin_menu(library: Library, console: _Console) -> None:
    while True:
        console.write(ADMIN_MENU)
        action = console.ask_int(4)
        if action == 0:
            return
        if action == 1:
            _show_members(library, console)
        elif action == 2:
            if not _add_book(library, console):
                continue
        elif action == 3:
            if not _remove_book(library, console):
                continue
        elif action == 4:
            _show_insights(library, console)
        console.write("\r\n")


# Member actions


def _pick_available(library: Library, console: _Console, prompt: str) -> Optional[int]:
    while True:
        selection = console.ask_int(len(library.books), prompt)
        if selection == 0:
            return None
        if not library.books[selection - 1].available:
            console.write(UNAVAILABLE)
            continue
        return selection - 1


def _lend(library: Library, console: _Console, member_id: int, index: int) -> None:
    try:
        library.borrow(member_id, index)
    except LibraryError as exc:
        console.write(f"{exc}\r\n\r\n")
        return
    console.write("Congratulations, enjoy your book!\r\n\r\n")


def _show_outstanding(library: Library, console: _Console, member_id: int) -> bool:
    loans: List[int] = library.members[member_id].books
    if not loans:
        console.write(NO_OUTSTANDING)
        return False
    for book_id in loans:
        console.write(_loan_line(library.books[book_id]))
    return True


def _browse(library: Library, console: _Console, member_id: int) -> None:
    if not library.books:
        console.write(
            "The library does not have any books right now, "
            "please contact the mayor.\r\n\r\n"
        )
        return
    console.write(BOOKS_HEADER)
    for book in library.books:
        console.write(_catalog_line(book))
    index = _pick_available(library, console, BORROW_PROMPT)
    if index is not None:
        _lend(library, console, member_id, index)


def _search_by(library: Library, console: _Console, field: SearchField) -> Optional[int]:
    while True:
        query = console.ask_str(
            f"Enter book {field.value} search (0 to return to previous menu): "
        )
        if query == "0":
            return None
        for book in library.search(query, field):
            console.write(_catalog_line(book))
        index = _pick_available(library, console, SEARCH_BORROW_PROMPT)
        if index is not None:
            return index
        # Backing out of an author search lands on the genre search.
        if field is SearchField.AUTHOR:
            field = SearchField.GENRE


def _search(library: Library, console: _Console, member_id: int) -> None:
    fields = list(SearchField)
    while True:
        console.write(SEARCH_MENU)
        choice = console.ask_int(3, SEARCH_CHOICE_PROMPT)
        if choice == 0:
            return
        index = _search_by(library, console, fields[choice - 1])
        if index is None:
            continue
        _lend(library, console, member_id, index)
        return


def _return(library: Library, console: _Console, member_id: int) -> None:
    if not _show_outstanding(library, console, member_id):
        return
    while True:
        selection = console.ask_int(len(library.books), RETURN_PROMPT)
        if selection == 0:
            return
        try:
            library.return_book(member_id, selection - 1)
        except LibraryError as exc:
            console.write(f"{exc}\r\n")
            continue
        console.write("Thank you for returning your book!\r\n\r\n")
        return


def _member_menu(library: Library, console: _Console, member_id: int) -> None:
    while True:
        console.write(MEMBER_MENU)
        action = console.ask_int(4)
        if action == 0:
            return
        if action == 1:
            if _show_outstanding(library, console, member_id):
                console.write("\r\n\r\n")
        elif action == 2:
            _browse(library, console, member_id)
        elif action == 3:
            _search(library, console, member_id)
        elif action == 4:
            _return(library, console, member_id)


def run_session(
    library: Library,
    lines: Optional[Iterable[str]] = None,
    out: Optional[TextIO] = None,
) -> Optional[int]:
    """Run one interactive session; return the signed-in user's id, or None.

    Input defaults to standard input and output to standard output.
    The session ends quietly when input runs out.
    """
    console = _Console(
        sys.stdin if lines is None else lines,
        sys.stdout if out is None else out,
    )
    try:
        user_id = _sign_in(library, console)
    except EOFError:
        return None
    if user_id is None:
        return None
    try:
        if user_id == ADMIN_ID:
            _admin_menu(library, console)
        else:
            _member_menu(library, console, user_id)
    except EOFError:
        pass
    return user_id


def main(argv: Optional[List[str]] = None) -> int:
    """Load the library, run a console session and save the library."""
    parser = argparse.ArgumentParser(description="Library lending console.")
    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="directory holding members.txt and books.txt",
    )
    args = parser.parse_args(argv)
    library = Library(args.directory)
    library.load()
    run_session(library)
    library.save()
    sys.stdout.write(GOODBYE)
    return 0


if __name__ == "__main__":
    sys.exit(main())