from __future__ import annotations

import logging
from typing import Protocol, Sequence

from .common_words import CommonWordSet
from .wordnet import LexicalEntry


logger = logging.getLogger("lexicon_bot")


class LexicalResource(Protocol):
    async def lookup(self, word: str) -> Sequence[LexicalEntry]: ...


class SpellingBackend(Protocol):
    def correct(self, word: str, limit: int = 1) -> Sequence[str]: ...


class LexicalValidator:
    """Decides whether a token is a real word.

    Tiers are tried cheapest first: common-word membership, a dictionary lookup,
    then a dictionary lookup of the best spelling correction. Collaborator
    failures count as "not found" for that tier.
    """

    def __init__(
        self,
        common_words: CommonWordSet,
        resource: LexicalResource,
        speller: SpellingBackend,
    ) -> None:
        self.common_words = common_words
        self.resource = resource
        self.speller = speller

    async def _safe_lookup(self, word: str) -> list[LexicalEntry]:
        try:
            return list(await self.resource.lookup(word))
        except Exception as exc:
            logger.warning("Lexical lookup failed for %r: %s", word, exc)
            return []

    def _best_correction(self, word: str) -> str | None:
        try:
            corrections = self.speller.correct(word, 1)
        except Exception as exc:
            logger.warning("Spelling correction failed for %r: %s", word, exc)
            return None
        return corrections[0] if corrections else None

    async def lookup(self, word: str) -> tuple[list[LexicalEntry], str]:
        entries = await self._safe_lookup(word)
        if entries:
            return entries, word
        correction = self._best_correction(word)
        if correction and correction != word:
            corrected_entries = await self._safe_lookup(correction)
            if corrected_entries:
                return corrected_entries, correction
        return [], word

    async def validate(self, word: str) -> tuple[bool, str]:
        if word in self.common_words:
            return True, word
        entries, canonical = await self.lookup(word)
        if entries:
            return True, canonical
        return False, word
