from __future__ import annotations

from typing import Iterable, Sequence

_LETTERS = "abcdefghijklmnopqrstuvwxyz"

# Edit-distance 2 expands to O(n^2 * 26^2) candidates; long tokens are left alone.
MAX_CORRECTABLE_LENGTH = 20


def edits1(word: str) -> set[str]:
    splits = [(word[:i], word[i:]) for i in range(len(word) + 1)]
    deletes = [left + right[1:] for left, right in splits if right]
    transposes = [left + right[1] + right[0] + right[2:] for left, right in splits if len(right) > 1]
    replaces = [left + c + right[1:] for left, right in splits if right for c in _LETTERS]
    inserts = [left + c + right for left, right in splits for c in _LETTERS]
    return set(deletes + transposes + replaces + inserts)


class SpellingCorrector:
    """Edit-distance corrector over a fixed, frequency-ordered corpus.

    Candidates closer in edit distance win; among equals the more frequent
    (earlier) corpus word wins.
    """

    def __init__(self, corpus: Iterable[str], max_distance: int = 1) -> None:
        self._rank: dict[str, int] = {}
        for index, word in enumerate(corpus):
            self._rank.setdefault(word, index)
        self.max_distance = max(1, int(max_distance))

    def __contains__(self, word: object) -> bool:
        return word in self._rank

    def _known(self, words: Iterable[str]) -> list[str]:
        return sorted({w for w in words if w in self._rank}, key=self._rank.__getitem__)

    def correct(self, word: str, limit: int = 1) -> Sequence[str]:
        candidate = (word or "").strip().lower()
        if not candidate or limit < 1:
            return []
        if candidate in self._rank:
            return [candidate]
        if len(candidate) > MAX_CORRECTABLE_LENGTH:
            return []

        results: list[str] = []
        frontier = {candidate}
        seen = {candidate}
        for _ in range(self.max_distance):
            next_frontier: set[str] = set()
            for item in frontier:
                next_frontier.update(edits1(item))
            next_frontier -= seen
            seen |= next_frontier
            results.extend(self._known(next_frontier))
            if len(results) >= limit:
                break
            frontier = next_frontier
        return results[:limit]
