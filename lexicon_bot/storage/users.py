from __future__ import annotations

from dataclasses import dataclass

import aiosqlite


@dataclass(slots=True, frozen=True)
class User:
    id: int
    external_id: str
    created_at: str


class UsersMixin:
    async def resolve_user(self, db: aiosqlite.Connection, external_id: str) -> User:
        """Find or create the user for a platform id inside the caller's transaction."""
        key = str(external_id)
        await db.execute(
            """
            INSERT INTO users (external_id)
            VALUES (?)
            ON CONFLICT(external_id) DO NOTHING
            """,
            (key,),
        )
        async with db.execute(
            "SELECT id, external_id, created_at FROM users WHERE external_id = ?",
            (key,),
        ) as cursor:
            row = await cursor.fetchone()
        if row is None:
            raise RuntimeError(f"User row for external id {key} is missing after insert")
        return User(id=int(row["id"]), external_id=str(row["external_id"]), created_at=str(row["created_at"]))
