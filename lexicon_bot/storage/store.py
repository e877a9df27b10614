from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import aiosqlite

from .common_words import CommonWordsMixin
from .ledger import LedgerMixin
from .schema import SchemaMixin
from .users import UsersMixin
from .utils import _sqlite_connection, _sqlite_transaction


class VocabularyStore(
    SchemaMixin,
    UsersMixin,
    LedgerMixin,
    CommonWordsMixin,
):
    """SQLite store for users, their per-word usage ledger and the common-word set."""

    backend_name = "sqlite"

    async def ping(self) -> None:
        async with _sqlite_connection(self.db_path) as db:
            await db.execute("SELECT 1")

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Write transaction: committed when the block exits cleanly, rolled back otherwise."""
        async with _sqlite_transaction(self.db_path) as db:
            yield db
