"""SQLite connection with the sqlite-vec extension loaded."""

from pathlib import Path

import aiosqlite
import sqlite_vec

MEMORY_DATABASE = ":memory:"


async def open_connection(database_path: str) -> aiosqlite.Connection:
    """Open (creating if needed) a SQLite database and load sqlite-vec.

    Parent directories of a file database are created. Foreign keys are enforced.
    """
    if database_path != MEMORY_DATABASE:
        Path(database_path).parent.mkdir(parents=True, exist_ok=True)
    conn = await aiosqlite.connect(database_path)
    try:
        await conn.enable_load_extension(True)
        await conn.load_extension(sqlite_vec.loadable_path())
        await conn.enable_load_extension(False)
        await conn.execute("PRAGMA foreign_keys = ON")
    except BaseException:
        await conn.close()
        raise
    return conn


def serialize_vector(vector: list[float]) -> bytes:
    """Pack a vector as float32 bytes for vec0 columns."""
    return sqlite_vec.serialize_float32(vector)
