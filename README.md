# lendinglib

A small lending library that runs in the terminal. Members register and
sign in, browse the catalogue, borrow up to three books at a time, return
them, and search by title, author or genre with a fuzzy match that ranks
the closest entries first. An administrator can list members, add and
remove books, and see lease counts for books, authors and genres.

Members and books are kept in two plain text files, `members.txt` and
`books.txt`, which are read when a session starts and written back when it
ends.

## Installing

```
pip install .
```

## Running

```
lendinglib [DIRECTORY]
```

`DIRECTORY` is where `members.txt` and `books.txt` are kept; it defaults
to the current directory. Missing files (and the directory) are created.

The program asks whether you are a new or returning user, then for your
name and password. Every menu takes a number; `0` leaves the current menu
or ends the session. When input runs out the session ends as if `0` had
been chosen. Either way the library is saved before the program exits.

Names may not contain `;` or `,`, names are compared without regard to
case, and passwords must be at least six characters long. Only a 31-bit
hash of each password is stored. The name `admin` is reserved for the
administrator account, which is built in rather than registered.

## Using it from Python

The `lendinglib.library` module holds the catalogue itself:

```python
from lendinglib.library import Library, LibraryError, SearchField

library = Library(".")
library.load()

book_index = library.add_book(1965, "Frank Herbert", "Dune", "Science fiction")
password = "password"
member_id = library.register_member("alice", password)
library.borrow(member_id, book_index)

for book in library.search("dune", SearchField.TITLE):
    print(book.title, book.available)

library.save()
```

Operations that the library refuses, such as a duplicate member name, a
short password, invalid credentials, a book that is already borrowed or a
fourth loan, raise `LibraryError` with a message saying why. An index
outside the catalogue raises `IndexError`.

The `Library` class:

- `load()` reads both files and returns whether any books were found;
  `save()` writes them back, replacing their contents.
- `register_member(name, password)` returns the new member's id;
  `login(name, password)` returns a member id, or `ADMIN_ID` for the
  administrator.
- `add_book(year, author, title, genre)` returns the book's index.
- `borrow(member_id, index)` and `return_book(member_id, index)` manage
  loans and return the `Book` concerned.
- `remove_book(index)` deletes an available book and renumbers the
  remaining books and members' loans.
- `search(query, field)` returns every book, ordered by similarity of the
  chosen `SearchField` (`TITLE`, `AUTHOR` or `GENRE`) to `query`.
- `insights(limit)` returns an `Insights` with the first `limit` books,
  authors and genres in catalogue order, with their lease counts. An
  author's or genre's count starts at the lease count of its first book
  and goes up by one for each further book.

Records can be read and written one line at a time with `parse_member`,
`parse_book`, `format_member` and `format_book`.

`lendinglib.cli` provides `run_session(library, lines, out)`, which runs
one interactive session against any iterable of input lines and any text
stream, and `main(argv)`, the command above.

`lendinglib.util` has the helpers these are built on: `rshash`,
`levenshtein`, `weighted_string_score`, `collect_input_str` and
`collect_input_int`.

## What it does not do

There is no network access or multi-user locking: the data files are read
once at the start and overwritten at the end, so two sessions running at
once on the same directory will lose each other's changes. There are no
due dates or overdue tracking, and members cannot be removed.

## Running the tests

```
pip install .[test]
pytest
```