from __future__ import annotations

import logging
from typing import Iterable

from .utils import _sqlite_connection, _sqlite_transaction


logger = logging.getLogger("lexicon_bot")


class CommonWordsMixin:
    async def replace_common_words(self, words: Iterable[str]) -> int:
        """Swap the persisted CommonWord set for ``words`` in one transaction."""
        roots = [(word,) for word in dict.fromkeys(str(w).strip().lower() for w in words) if word]
        async with _sqlite_transaction(self.db_path) as db:
            await db.execute("DELETE FROM common_words")
            await db.executemany("INSERT INTO common_words (root) VALUES (?)", roots)
        logger.info("Seeded %s common words", len(roots))
        return len(roots)

    async def get_common_words(self) -> set[str]:
        async with _sqlite_connection(self.db_path) as db:
            async with db.execute("SELECT root FROM common_words") as cursor:
                rows = await cursor.fetchall()
        return {str(row["root"]) for row in rows}
