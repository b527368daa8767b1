"""Jokes picked at random from a SQLite table."""

from __future__ import annotations

import sqlite3
from os import PathLike
from types import TracebackType


class JokeBook:
    """A SQLite database holding a ``jokes`` table."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self._conn = sqlite3.connect(path)
        self._conn.execute(
            "CREATE TABLE IF NOT EXISTS jokes ("
            "id INTEGER PRIMARY KEY NOT NULL, text TEXT NOT NULL)"
        )
        self._conn.commit()

    def count(self) -> int:
        """Return the number of jokes."""
        (total,) = self._conn.execute("SELECT COUNT(*) FROM jokes").fetchone()
        return total

    def pick(self) -> str:
        """Return the text of a random joke."""
        row = self._conn.execute("SELECT text FROM jokes ORDER BY RANDOM() LIMIT 1").fetchone()
        if row is None:
            raise LookupError("no jokes in the database")
        return row[0]

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> JokeBook:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def tell_joke(book: JokeBook, name: str) -> str:
    """Pick a joke and put the given name in place of ``%name``."""
    return book.pick().replace("%name", name)