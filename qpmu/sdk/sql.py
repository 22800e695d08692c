"""The plugin's sqlite database, used to track how often items are activated."""

from __future__ import annotations

from datetime import datetime, timezone

import aiosqlite

_CREATE_TABLE = """
    CREATE TABLE IF NOT EXISTS activations (
        id INTEGER PRIMARY KEY NOT NULL,
        title TEXT NOT NULL UNIQUE,
        frequency INTEGER NOT NULL,
        last_use DATETIME NOT NULL
    )
"""

_INCREMENT = """
    INSERT INTO activations (title, frequency, last_use)
    VALUES (?, 1, ?)
    ON CONFLICT (title) DO UPDATE SET
        frequency = frequency + 1,
        last_use = excluded.last_use
"""

_SELECT = "SELECT title, frequency, last_use FROM activations"


class _Database:
    """Holds the one open connection of the plugin process."""

    connection: aiosqlite.Connection | None = None


_db = _Database()


def _path_of(url: str) -> str:
    for scheme in ("sqlite://", "sqlite:"):
        if url.startswith(scheme):
            path = url[len(scheme):]
            if not path:
                raise ValueError(f"sqlite URL has no path: {url!r}")
            return path
    raise ValueError(f"not a sqlite URL: {url!r}")


def _connection() -> aiosqlite.Connection:
    if _db.connection is None:
        raise RuntimeError("init must be called first to open the database")
    return _db.connection


async def init(url: str) -> None:
    """Open the database at ``url`` and create the activations table.

    If a database is already open it is kept and only the table is ensured.
    """
    path = _path_of(url)
    if _db.connection is None:
        _db.connection = await aiosqlite.connect(path)
    connection = _db.connection
    await connection.execute(_CREATE_TABLE)
    await connection.commit()


async def close() -> None:
    """Close the database, if one is open."""
    connection, _db.connection = _db.connection, None
    if connection is not None:
        await connection.close()


async def increment_frequency_table(title: str) -> None:
    """Count one more activation of ``title`` and record it as used now."""
    connection = _connection()
    await connection.execute(_INCREMENT, (title, datetime.now(timezone.utc).isoformat()))
    await connection.commit()


async def fetch_activations() -> dict[str, tuple[int, datetime]]:
    """Map each activated title to its activation count and last use."""
    connection = _connection()
    async with connection.execute(_SELECT) as cursor:
        rows = await cursor.fetchall()
    return {
        title: (max(int(frequency), 0), datetime.fromisoformat(last_use))
        for title, frequency, last_use in rows
    }