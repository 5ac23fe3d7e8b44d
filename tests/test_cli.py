import io

import pytest

from lendinglib.cli import main, run_session
from lendinglib.library import ADMIN_ID, Library


def _run(library, lines):
    out = io.StringIO()
    result = run_session(library, lines, out)
    return result, out.getvalue()


@pytest.fixture
def library(tmp_path):
    lib = Library(tmp_path)
    password = "password"
    lib.register_member("alice", password)
    lib.add_book(1965, "Frank Herbert", "Dune", "Science Fiction")
    lib.add_book(1815, "Jane Austen", "Emma", "Romance")
    return lib


def _login(*rest):
    return ["2", "alice", "password", *rest]


def _admin(*rest):
    return ["2", "admin", "admin", *rest]


def test_register_new_member(tmp_path):
    lib = Library(tmp_path)
    result, out = _run(lib, ["1", "bob", "password", "0"])
    assert result == 0
    assert [m.name for m in lib.members] == ["bob"]
    assert "Welcome to the Library! Your member ID is 1" in out


def test_register_short_password_retries(tmp_path):
    lib = Library(tmp_path)
    result, out = _run(lib, ["1", "bob", "token", "bob", "secret", "0"])
    assert "Error: Password must have at least six characters." in out
    assert result == 0
    assert len(lib.members) == 1


def test_exit_at_first_menu(library):
    result, out = _run(library, ["0"])
    assert result is None
    assert out.startswith("Welcome to the Library! Are you a new or returning user?")


def test_failed_login_then_exit(library):
    result, out = _run(library, ["2", "bob", "password", "0"])
    assert result is None
    assert "Error: Failed to login, invalid credentials" in out


def test_member_login_greets_by_name(library):
    result, out = _run(library, _login("0"))
    assert result == 0
    assert "Welcome to the library, alice!" in out


def test_input_running_out_ends_session(library):
    result, _ = _run(library, ["1"])
    assert result is None


def test_borrow_from_catalog(library):
    _, out = _run(library, _login("2", "1", "0"))
    assert library.members[0].books == [0]
    assert library.books[0].available is False
    assert library.books[0].lease_count == 1
    assert "Congratulations, enjoy your book!" in out


def test_borrow_unavailable_book_asks_again(library, tmp_path):
    password = "password"
    library.register_member("carol", password)
    library.borrow(1, 0)
    _, out = _run(library, _login("2", "1", "2", "0"))
    assert "The book you chose is not currently available" in out
    assert library.members[0].books == [1]


def test_borrow_limit(library):
    library.add_book(2000, "A", "Third", "G")
    library.add_book(2001, "B", "Fourth", "G")
    _, out = _run(library, _login("2", "1", "2", "2", "2", "3", "2", "4", "0"))
    assert len(library.members[0].books) == 3
    assert library.books[3].available is True
    assert "You have borrowed 3 books" in out


def test_show_outstanding_books(library):
    library.borrow(0, 1)
    _, out = _run(library, _login("1", "0"))
    assert "[2] Jane Austen - Emma (1815) (Genre: Romance)" in out


def test_no_outstanding_books(library):
    _, out = _run(library, _login("1", "0"))
    assert "You have no outstanding books!" in out


def test_return_book(library):
    library.borrow(0, 0)
    _, out = _run(library, _login("4", "1", "0"))
    assert library.members[0].books == []
    assert library.books[0].available is True
    assert library.books[0].owner == -1
    assert "Thank you for returning your book!" in out


def test_return_book_not_held(library):
    library.borrow(0, 0)
    _, out = _run(library, _login("4", "2", "1", "0"))
    assert "You do not have possession of this book" in out
    assert library.members[0].books == []


def test_search_by_title_orders_and_borrows(library):
    _, out = _run(library, _login("3", "1", "Emma", "2", "0"))
    assert out.index("Jane Austen - Emma") < out.index("Frank Herbert - Dune")
    assert library.members[0].books == [1]


def test_author_search_backs_out_to_genre_search(library):
    _, out = _run(library, _login("3", "2", "Austen", "0", "0", "0", "0"))
    assert "Enter book genre search (0 to return to previous menu): " in out
    assert library.members[0].books == []


def test_admin_login(library):
    result, out = _run(library, _admin("0"))
    assert result == ADMIN_ID
    assert "Welcome back, admin!" in out


def test_admin_adds_book(library):
    _run(library, _admin("2", "1999", "Author", "Title", "Genre", "0"))
    assert library.books[-1].title == "Title"
    assert library.books[-1].year == 1999
    assert library.books[-1].available is True


def test_admin_add_book_rejects_semicolon(library):
    _, out = _run(library, _admin("2", "1999", "Au;thor", "T", "G", "0", "0"))
    assert "Error: One of the inputs failed sanitation" in out
    assert len(library.books) == 2


def test_admin_removes_book(library):
    _run(library, _admin("3", "2", "0"))
    assert [b.title for b in library.books] == ["Dune"]


def test_admin_cannot_remove_borrowed_book(library):
    library.borrow(0, 0)
    _, out = _run(library, _admin("3", "1", "0", "0"))
    assert "currently being borrowed by alice" in out
    assert len(library.books) == 2


def test_admin_shows_members(library):
    _, out = _run(library, _admin("1", "0"))
    assert "Name: alice" in out
    assert "The member has no books taken out." in out


def test_admin_insights(library):
    library.borrow(0, 0)
    _, out = _run(library, _admin("4", "0"))
    assert "Top books:" in out
    assert "1) Frank Herbert - Dune (1 leases)" in out
    assert out.index("Top authors:") < out.index("Top genres:")


def test_main_saves_and_says_goodbye(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1\nalice\npassword\n0\n"))
    assert main([str(tmp_path)]) == 0
    assert "Thanks for coming to the library! Goodbye" in capsys.readouterr().out
    reloaded = Library(tmp_path)
    reloaded.load()
    assert [m.name for m in reloaded.members] == ["alice"]