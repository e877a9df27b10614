from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import aiosqlite

from .utils import SQL_NOW, _reuse_or_connect, _sqlite_transaction


logger = logging.getLogger("lexicon_bot")


class WordValidator(Protocol):
    async def validate(self, word: str) -> tuple[bool, str]: ...


@dataclass(slots=True)
class WordStats:
    known: bool
    other_users: int
    uses: int = 0
    validated: bool = False
    created_at: str | None = None
    updated_at: str | None = None


class LedgerMixin:
    async def record_use(
        self,
        db: aiosqlite.Connection,
        user_id: int,
        root: str,
        validator: WordValidator,
    ) -> bool:
        """Count one use of ``root``; returns True when this was the first use.

        Must run inside the caller's transaction. Validation happens only for
        new entries and its outcome is stored once.
        """
        cursor = await db.execute(
            f"""
            UPDATE lexicon_entries
            SET uses = uses + 1, updated_at = {SQL_NOW}
            WHERE user_id = ? AND root = ?
            """,
            (int(user_id), root),
        )
        if cursor.rowcount > 0:
            return False

        validated, canonical = await validator.validate(root)
        if canonical != root:
            logger.debug("Validated %r through correction %r", root, canonical)
        await db.execute(
            f"""
            INSERT INTO lexicon_entries (user_id, root, uses, validated, created_at, updated_at)
            VALUES (?, ?, 1, ?, {SQL_NOW}, {SQL_NOW})
            ON CONFLICT(user_id, root) DO UPDATE SET
                uses = lexicon_entries.uses + 1,
                updated_at = excluded.updated_at
            """,
            (int(user_id), root, 1 if validated else 0),
        )
        async with db.execute(
            "SELECT uses FROM lexicon_entries WHERE user_id = ? AND root = ?",
            (int(user_id), root),
        ) as cursor:
            row = await cursor.fetchone()
        created = row is not None and int(row["uses"]) == 1
        if not created:
            logger.info("Concurrent first use of %r for user=%s counted as repeat use", root, user_id)
        return created

    async def stats_for(
        self,
        user_id: int,
        root: str,
        db: aiosqlite.Connection | None = None,
    ) -> WordStats:
        async with _reuse_or_connect(self.db_path, db) as conn:
            async with conn.execute(
                """
                SELECT uses, validated, created_at, updated_at
                FROM lexicon_entries
                WHERE user_id = ? AND root = ?
                """,
                (int(user_id), root),
            ) as cursor:
                row = await cursor.fetchone()
            async with conn.execute(
                """
                SELECT COUNT(DISTINCT user_id)
                FROM lexicon_entries
                WHERE root = ? AND user_id <> ?
                """,
                (root, int(user_id)),
            ) as cursor:
                count_row = await cursor.fetchone()

        others = int(count_row[0]) if count_row else 0
        if row is None:
            return WordStats(known=False, other_users=others)
        return WordStats(
            known=True,
            other_users=others,
            uses=int(row["uses"]),
            validated=bool(row["validated"]),
            created_at=str(row["created_at"]),
            updated_at=str(row["updated_at"]),
        )

    async def top_words(
        self,
        user_id: int,
        limit: int = 10,
        db: aiosqlite.Connection | None = None,
    ) -> list[tuple[str, int]]:
        async with _reuse_or_connect(self.db_path, db) as conn:
            async with conn.execute(
                """
                SELECT root, uses
                FROM lexicon_entries
                WHERE user_id = ?
                  AND validated = 1
                  AND root NOT IN (SELECT root FROM common_words)
                ORDER BY uses DESC, rowid ASC
                LIMIT ?
                """,
                (int(user_id), max(0, int(limit))),
            ) as cursor:
                rows = await cursor.fetchall()
        return [(str(row["root"]), int(row["uses"])) for row in rows]

    async def total_word_count(self, user_id: int, db: aiosqlite.Connection | None = None) -> int:
        async with _reuse_or_connect(self.db_path, db) as conn:
            async with conn.execute(
                "SELECT COUNT(*) FROM lexicon_entries WHERE user_id = ?",
                (int(user_id),),
            ) as cursor:
                row = await cursor.fetchone()
        return int(row[0]) if row else 0

    async def revalidate(self, user_id: int, root: str, validator: WordValidator) -> bool | None:
        """Re-run validation for one stored entry and overwrite its flag.

        This is the only code path that changes ``validated`` after insert.
        Returns the new flag, or None when the user never used ``root``.
        """
        async with _sqlite_transaction(self.db_path) as db:
            async with db.execute(
                "SELECT validated FROM lexicon_entries WHERE user_id = ? AND root = ?",
                (int(user_id), root),
            ) as cursor:
                row = await cursor.fetchone()
            if row is None:
                return None
            validated, _ = await validator.validate(root)
            await db.execute(
                "UPDATE lexicon_entries SET validated = ? WHERE user_id = ? AND root = ?",
                (1 if validated else 0, int(user_id), root),
            )
        if bool(row["validated"]) != validated:
            logger.info("Revalidated %r for user=%s: %s -> %s", root, user_id, bool(row["validated"]), validated)
        return validated
