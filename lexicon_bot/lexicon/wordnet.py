from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import nltk
from nltk.corpus import wordnet


logger = logging.getLogger("lexicon_bot")

_REQUIRED_CORPORA = (
    ("corpora/wordnet", "wordnet"),
    ("corpora/omw-1.4", "omw-1.4"),
)


@dataclass(slots=True)
class LexicalEntry:
    lemma: str
    definition: str
    gloss: str = ""
    synonyms: list[str] = field(default_factory=list)


def _entry_from_synset(synset: Any) -> LexicalEntry:
    names = [str(name).replace("_", " ") for name in synset.lemma_names()]
    examples = [f'"{example}"' for example in synset.examples()]
    return LexicalEntry(
        lemma=names[0] if names else str(synset.name()),
        definition=str(synset.definition()),
        gloss="; ".join(examples),
        synonyms=names,
    )


class WordNetResource:
    def __init__(self, *, auto_download: bool = True) -> None:
        self.auto_download = auto_download

    async def start(self) -> None:
        loop = asyncio.get_running_loop()
        for resource_path, package in _REQUIRED_CORPORA:
            try:
                nltk.data.find(resource_path)
                continue
            except LookupError:
                if not self.auto_download:
                    logger.warning("NLTK data %s is missing and auto download is disabled", package)
                    continue
            logger.info("Downloading NLTK data: %s", package)
            ok = await loop.run_in_executor(None, lambda: nltk.download(package, quiet=True))
            if not ok:
                logger.error("Failed to download NLTK data: %s; lookups will report no entries", package)

        # The corpus reader loads lazily on first access; do it now so the
        # first lookup does not stall a message transaction.
        try:
            await loop.run_in_executor(None, wordnet.ensure_loaded)
        except LookupError:
            logger.error("WordNet data is unavailable; lookups will report no entries")
        else:
            logger.info("WordNet loaded")

    async def lookup(self, word: str) -> list[LexicalEntry]:
        loop = asyncio.get_running_loop()
        synsets = await loop.run_in_executor(None, wordnet.synsets, word)
        return [_entry_from_synset(synset) for synset in synsets]
