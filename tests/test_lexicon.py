from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from lexicon_bot.lexicon import wordnet as wordnet_mod  # noqa: E402
from lexicon_bot.lexicon.common_words import CommonWordSet  # noqa: E402
from lexicon_bot.lexicon.spelling import SpellingCorrector  # noqa: E402
from lexicon_bot.lexicon.tokenizer import normalize_word, tokenize_message  # noqa: E402
from lexicon_bot.lexicon.validator import LexicalValidator  # noqa: E402
from lexicon_bot.lexicon.wordnet import LexicalEntry  # noqa: E402


CORPUS = ["the", "of", "and", "hello", "world", "help", "quick"]


class _FakeResource:
    def __init__(self, known: dict[str, list[LexicalEntry]] | None = None, *, fail: bool = False) -> None:
        self.known = known or {}
        self.fail = fail
        self.calls: list[str] = []

    async def lookup(self, word: str) -> list[LexicalEntry]:
        self.calls.append(word)
        if self.fail:
            raise LookupError("wordnet data missing")
        return list(self.known.get(word, []))


class _FakeSpeller:
    def __init__(self, corrections: dict[str, str] | None = None, *, fail: bool = False) -> None:
        self.corrections = corrections or {}
        self.fail = fail
        self.calls: list[str] = []

    def correct(self, word: str, limit: int = 1) -> list[str]:
        self.calls.append(word)
        if self.fail:
            raise RuntimeError("speller broken")
        correction = self.corrections.get(word)
        return [correction] if correction else []


def _entry(lemma: str) -> LexicalEntry:
    return LexicalEntry(lemma=lemma, definition=f"meaning of {lemma}", gloss="", synonyms=[lemma])


def test_common_word_set_normalizes_and_keeps_order() -> None:
    words = CommonWordSet([" The ", "of", "THE", "", "and"], really_common_count=2)

    assert list(words) == ["the", "of", "and"]
    assert "the" in words
    assert "The" not in words
    assert words.really_common == ["the", "of"]
    assert len(words) == 3


def test_common_word_set_reads_first_csv_column(tmp_path: Path) -> None:
    corpus = tmp_path / "common_corpus.csv"
    corpus.write_text("the,5\nof,4\n\nand\n", encoding="utf-8")

    words = CommonWordSet.from_file(corpus, really_common_count=100)

    assert list(words) == ["the", "of", "and"]
    assert words.really_common == ["the", "of", "and"]


def test_empty_corpus_is_fatal(tmp_path: Path) -> None:
    corpus = tmp_path / "empty.csv"
    corpus.write_text("\n\n", encoding="utf-8")

    with pytest.raises(ValueError, match="empty"):
        CommonWordSet.from_file(corpus)


def test_spelling_corrector_prefers_frequent_words() -> None:
    speller = SpellingCorrector(["hello", "hallo", "help"], max_distance=1)

    assert speller.correct("helo") == ["hello"]
    assert speller.correct("hello") == ["hello"]
    assert speller.correct("xqzv") == []
    assert speller.correct("helo", limit=3) == ["hello", "help"]


def test_spelling_corrector_second_distance_is_opt_in() -> None:
    assert SpellingCorrector(["world"], max_distance=1).correct("wrlx") == []
    assert SpellingCorrector(["world"], max_distance=2).correct("wrlx") == ["world"]


def test_tokenizer_lowercases_and_drops_punctuation() -> None:
    assert tokenize_message("The quick brown fox the") == ["the", "quick", "brown", "fox", "the"]
    assert tokenize_message("!word fox") == ["word", "fox"]
    assert tokenize_message("Hello, world. Bye!") == ["hello", "world", "bye"]
    assert tokenize_message("...") == []


def test_normalize_word_matches_stored_tokens() -> None:
    assert normalize_word("Fox?") == "fox"
    assert normalize_word("  fox!!  ") == "fox"
    assert normalize_word("ice-cream.") == "ice-cream"
    assert normalize_word("brown, fox") == "brown fox"


def test_common_words_skip_collaborators() -> None:
    resource = _FakeResource()
    speller = _FakeSpeller()
    validator = LexicalValidator(CommonWordSet(CORPUS), resource, speller)

    for word in CORPUS:
        assert asyncio.run(validator.validate(word)) == (True, word)
    assert resource.calls == []
    assert speller.calls == []


def test_dictionary_hit_keeps_typed_word() -> None:
    resource = _FakeResource({"fox": [_entry("fox")]})
    speller = _FakeSpeller()
    validator = LexicalValidator(CommonWordSet(CORPUS), resource, speller)

    assert asyncio.run(validator.validate("fox")) == (True, "fox")
    assert speller.calls == []


def test_correction_fallback_returns_corrected_word() -> None:
    resource = _FakeResource({"brown": [_entry("brown")]})
    speller = _FakeSpeller({"browm": "brown"})
    validator = LexicalValidator(CommonWordSet(CORPUS), resource, speller)

    assert asyncio.run(validator.validate("browm")) == (True, "brown")
    assert resource.calls == ["browm", "brown"]


def test_unknown_word_is_not_valid() -> None:
    validator = LexicalValidator(CommonWordSet(CORPUS), _FakeResource(), _FakeSpeller({"xyzzy": "fuzzy"}))

    assert asyncio.run(validator.validate("xyzzy")) == (False, "xyzzy")


def test_collaborator_failures_degrade_to_not_found() -> None:
    validator = LexicalValidator(
        CommonWordSet(CORPUS),
        _FakeResource(fail=True),
        _FakeSpeller(fail=True),
    )

    assert asyncio.run(validator.validate("fox")) == (False, "fox")
    assert asyncio.run(validator.validate("the")) == (True, "the")
    assert asyncio.run(validator.lookup("fox")) == ([], "fox")


def test_wordnet_start_loads_corpus_before_first_lookup(monkeypatch: pytest.MonkeyPatch) -> None:
    loaded: list[bool] = []
    monkeypatch.setattr(wordnet_mod.nltk.data, "find", lambda path: path)
    monkeypatch.setattr(wordnet_mod, "wordnet", SimpleNamespace(ensure_loaded=lambda: loaded.append(True)))

    asyncio.run(wordnet_mod.WordNetResource(auto_download=False).start())

    assert loaded == [True]


def test_wordnet_start_survives_missing_corpus(monkeypatch: pytest.MonkeyPatch) -> None:
    def _missing() -> None:
        raise LookupError("Resource wordnet not found.")

    monkeypatch.setattr(wordnet_mod.nltk.data, "find", lambda path: path)
    monkeypatch.setattr(wordnet_mod, "wordnet", SimpleNamespace(ensure_loaded=_missing))

    asyncio.run(wordnet_mod.WordNetResource(auto_download=False).start())
