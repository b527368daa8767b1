import sqlite3

import pytest

from zbplug.funny import JokeBook, tell_joke


def _make_db(path, texts):
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE jokes (id INTEGER PRIMARY KEY NOT NULL, text TEXT NOT NULL)")
    conn.executemany("INSERT INTO jokes (text) VALUES (?)", [(t,) for t in texts])
    conn.commit()
    conn.close()


def test_count_and_pick(tmp_path):
    path = tmp_path / "jokes.db"
    texts = ["one", "two", "three"]
    _make_db(path, texts)
    with JokeBook(path) as book:
        assert book.count() == len(texts)
        assert book.pick() in texts


def test_empty_book_raises(tmp_path):
    book = JokeBook(tmp_path / "empty.db")
    try:
        assert book.count() == 0
        with pytest.raises(LookupError):
            book.pick()
    finally:
        book.close()


def test_tell_joke_replaces_name(tmp_path):
    path = tmp_path / "jokes.db"
    _make_db(path, ["%name walks in, %name walks out"])
    with JokeBook(path) as book:
        assert tell_joke(book, "Ann") == "Ann walks in, Ann walks out"


def test_closed_book_rejects_use(tmp_path):
    book = JokeBook(tmp_path / "j.db")
    book.close()
    with pytest.raises(sqlite3.ProgrammingError):
        book.count()