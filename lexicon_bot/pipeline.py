from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import ClassVar, Union

import aiosqlite

from .formatting import (
    FAILURE_REPLY,
    fit_reply,
    format_definitions,
    format_top_words,
    format_word_stats,
)
from .lexicon.tokenizer import normalize_word, tokenize_message
from .lexicon.validator import LexicalValidator
from .storage.store import VocabularyStore
from .storage.users import User


logger = logging.getLogger("lexicon_bot")


@dataclass(frozen=True, slots=True)
class LookupIntent:
    word: str
    ingests: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class ListWordsIntent:
    ingests: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class StatsIntent:
    # Stats are answered on the pre-ingestion state, then the command text is
    # ingested like any other message.
    word: str
    ingests: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class PlainIntent:
    ingests: ClassVar[bool] = True


Intent = Union[LookupIntent, ListWordsIntent, StatsIntent, PlainIntent]


class IntentRouter:
    """Classifies lower-cased message text; the first matching pattern wins."""

    def __init__(self, prefix: str = "!") -> None:
        escaped = re.escape(prefix.strip().lower())
        self._lookup = re.compile(rf"^{escaped}lookup\s+(.*)$", flags=re.DOTALL)
        self._words = re.compile(rf"^{escaped}words$")
        self._stats = re.compile(rf"^{escaped}word\s+(.*)$", flags=re.DOTALL)

    def route(self, content: str) -> Intent:
        match = self._lookup.match(content)
        if match is not None:
            return LookupIntent(word=normalize_word(match.group(1)))
        if self._words.match(content) is not None:
            return ListWordsIntent()
        match = self._stats.match(content)
        if match is not None:
            return StatsIntent(word=normalize_word(match.group(1)))
        return PlainIntent()


class IngestionPipeline:
    def __init__(
        self,
        store: VocabularyStore,
        validator: LexicalValidator,
        *,
        command_prefix: str = "!",
        top_words_limit: int = 10,
        max_reply_chars: int = 2000,
    ) -> None:
        self.store = store
        self.validator = validator
        self.router = IntentRouter(command_prefix)
        self.top_words_limit = top_words_limit
        self.max_reply_chars = max_reply_chars
        # SQLite admits one writer at a time; messages queue here instead of
        # waiting out the busy timeout at BEGIN IMMEDIATE.
        self._write_lock = asyncio.Lock()

    async def handle_message(self, external_id: str, text: str) -> str | None:
        """Process one inbound message; returns the reply text, if any.

        All ledger writes for the message share one transaction that commits
        only if every step succeeds.
        """
        content = (text or "").strip().lower()
        if not content:
            # Attachment-only messages carry nothing to route or ingest, so no
            # user row is created for them.
            return None
        intent = self.router.route(content)
        user_key = str(external_id)

        async with self._write_lock:
            try:
                async with self.store.transaction() as db:
                    user = await self.store.resolve_user(db, user_key)
                    reply = await self._answer(db, user, intent)
                    if intent.ingests:
                        await self._ingest(db, user, content)
            except Exception:
                logger.exception("Message processing failed for user=%s intent=%s", user_key, type(intent).__name__)
                return FAILURE_REPLY

        return fit_reply(reply, self.max_reply_chars)

    async def _answer(self, db: aiosqlite.Connection, user: User, intent: Intent) -> str | None:
        if isinstance(intent, LookupIntent):
            return await self.lookup_reply(intent.word)
        if isinstance(intent, ListWordsIntent):
            return await self.top_words_reply(user, db)
        if isinstance(intent, StatsIntent):
            return await self.stats_reply(user, intent.word, db)
        return None

    async def _ingest(self, db: aiosqlite.Connection, user: User, content: str) -> int:
        created = 0
        for token in tokenize_message(content):
            if await self.store.record_use(db, user.id, token, self.validator):
                created += 1
        return created

    async def lookup_reply(self, word: str) -> str:
        entries, _ = await self.validator.lookup(word)
        return format_definitions(word, entries)

    async def top_words_reply(self, user: User, db: aiosqlite.Connection | None = None) -> str:
        words = await self.store.top_words(user.id, self.top_words_limit, db=db)
        total = await self.store.total_word_count(user.id, db=db)
        return format_top_words(total, words)

    async def stats_reply(self, user: User, word: str, db: aiosqlite.Connection | None = None) -> str:
        stats = await self.store.stats_for(user.id, word, db=db)
        return format_word_stats(word, stats)
