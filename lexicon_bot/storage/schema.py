from __future__ import annotations

import os
from pathlib import Path

import aiosqlite

from .utils import SQL_NOW, _sqlite_connection


class SchemaMixin:
    SCHEMA_VERSION = 1

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _allow_destructive_reset_on_mismatch() -> bool:
        raw = os.getenv("LEXICON_SQLITE_RESET_ON_SCHEMA_MISMATCH", "")
        return raw.strip().lower() in {"1", "true", "yes", "y", "on"}

    async def _has_user_tables(self, db: aiosqlite.Connection) -> bool:
        async with db.execute(
            """
            SELECT 1
            FROM sqlite_master
            WHERE type = 'table'
              AND name NOT LIKE 'sqlite_%'
            LIMIT 1
            """
        ) as cursor:
            row = await cursor.fetchone()
        return bool(row)

    async def init(self) -> None:
        async with _sqlite_connection(self.db_path) as db:
            await db.execute("PRAGMA journal_mode=WAL")
            async with db.execute("PRAGMA user_version") as cursor:
                row = await cursor.fetchone()
            version = int(row[0]) if row else 0
            has_tables = await self._has_user_tables(db)

            if version > self.SCHEMA_VERSION and has_tables and not self._allow_destructive_reset_on_mismatch():
                raise RuntimeError(
                    "SQLite schema version mismatch detected (database is newer than this bot build). "
                    f"Found user_version={version}, supported={self.SCHEMA_VERSION}. "
                    "Set LEXICON_SQLITE_RESET_ON_SCHEMA_MISMATCH=1 to allow destructive reset."
                )

            await db.execute("BEGIN IMMEDIATE")
            try:
                if has_tables and version != self.SCHEMA_VERSION and self._allow_destructive_reset_on_mismatch():
                    await self._reset_schema(db)
                else:
                    await self._create_schema(db)
                await db.execute(f"PRAGMA user_version = {self.SCHEMA_VERSION}")
            except BaseException:
                await db.rollback()
                raise
            await db.commit()

    async def _reset_schema(self, db: aiosqlite.Connection) -> None:
        for table in ("lexicon_entries", "common_words", "users"):
            await db.execute(f"DROP TABLE IF EXISTS {table}")
        await self._create_schema(db)

    async def _create_schema(self, db: aiosqlite.Connection) -> None:
        await db.execute(
            f"""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                external_id TEXT NOT NULL UNIQUE,
                created_at TEXT NOT NULL DEFAULT ({SQL_NOW})
            )
            """
        )
        await db.execute(
            f"""
            CREATE TABLE IF NOT EXISTS lexicon_entries (
                user_id INTEGER NOT NULL REFERENCES users(id),
                root TEXT NOT NULL,
                uses INTEGER NOT NULL DEFAULT 1 CHECK (uses >= 1),
                validated INTEGER NOT NULL DEFAULT 0,
                created_at TEXT NOT NULL DEFAULT ({SQL_NOW}),
                updated_at TEXT NOT NULL DEFAULT ({SQL_NOW}),
                PRIMARY KEY (user_id, root)
            )
            """
        )
        await db.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_lexicon_entries_root
            ON lexicon_entries(root)
            """
        )
        await db.execute(
            """
            CREATE TABLE IF NOT EXISTS common_words (
                root TEXT PRIMARY KEY
            )
            """
        )
