from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, Iterator, Sequence

from wordfreq import top_n_list


logger = logging.getLogger("lexicon_bot")

DEFAULT_REALLY_COMMON_COUNT = 100


def _normalize_words(words: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for raw in words:
        word = str(raw or "").strip().lower()
        if not word or word in seen:
            continue
        seen.add(word)
        ordered.append(word)
    return ordered


class CommonWordSet:
    """Ordered, read-only list of frequent English words.

    Membership covers the whole corpus; ``really_common`` is the head of the
    list that seeds the persisted CommonWord table and is excluded from rankings.
    """

    def __init__(self, words: Iterable[str], really_common_count: int = DEFAULT_REALLY_COMMON_COUNT) -> None:
        self._words = tuple(_normalize_words(words))
        if not self._words:
            raise ValueError("Common word corpus is empty")
        self._lookup = frozenset(self._words)
        self._really_common_count = max(1, int(really_common_count))

    @classmethod
    def from_file(cls, path: str | Path, really_common_count: int = DEFAULT_REALLY_COMMON_COUNT) -> "CommonWordSet":
        corpus_path = Path(path)
        with corpus_path.open(encoding="utf-8", newline="") as handle:
            words = [row[0] for row in csv.reader(handle) if row]
        logger.info("Loaded %s common words from %s", len(words), corpus_path)
        return cls(words, really_common_count)

    @classmethod
    def from_wordfreq(
        cls,
        size: int,
        really_common_count: int = DEFAULT_REALLY_COMMON_COUNT,
        lang: str = "en",
    ) -> "CommonWordSet":
        words = top_n_list(lang, size)
        logger.info("Loaded %s common words from wordfreq (%s)", len(words), lang)
        return cls(words, really_common_count)

    @property
    def words(self) -> Sequence[str]:
        return self._words

    @property
    def really_common(self) -> list[str]:
        return list(self._words[: self._really_common_count])

    def __contains__(self, word: object) -> bool:
        return word in self._lookup

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)
