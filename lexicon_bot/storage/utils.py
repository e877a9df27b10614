from __future__ import annotations

import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import aiosqlite


# ISO-8601 UTC with milliseconds, e.g. 2026-10-18T08:50:00.123Z
SQL_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ', 'now')"


def _sqlite_busy_timeout_ms() -> int:
    raw = os.getenv("LEXICON_SQLITE_BUSY_TIMEOUT_MS", "5000").strip()
    try:
        timeout = int(raw)
    except ValueError:
        timeout = 5000
    return max(0, min(timeout, 60000))


@asynccontextmanager
async def _sqlite_connection(db_path: str | Path) -> AsyncIterator[aiosqlite.Connection]:
    # Autocommit mode: transactions are opened explicitly with BEGIN.
    async with aiosqlite.connect(db_path, isolation_level=None) as db:
        db.row_factory = aiosqlite.Row
        await db.execute("PRAGMA foreign_keys=ON")
        timeout_ms = _sqlite_busy_timeout_ms()
        if timeout_ms > 0:
            await db.execute(f"PRAGMA busy_timeout={timeout_ms}")
        yield db


@asynccontextmanager
async def _sqlite_transaction(db_path: str | Path) -> AsyncIterator[aiosqlite.Connection]:
    async with _sqlite_connection(db_path) as db:
        await db.execute("BEGIN IMMEDIATE")
        try:
            yield db
        except BaseException:
            await db.rollback()
            raise
        await db.commit()


@asynccontextmanager
async def _reuse_or_connect(
    db_path: str | Path,
    db: aiosqlite.Connection | None,
) -> AsyncIterator[aiosqlite.Connection]:
    if db is not None:
        yield db
        return
    async with _sqlite_connection(db_path) as conn:
        yield conn
