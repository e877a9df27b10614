from __future__ import annotations

import re

from nltk.tokenize import TreebankWordTokenizer


_SENTENCE_PUNCTUATION = re.compile(r"[.!?,;:]+")
_WORD_CHAR = re.compile(r"\w", flags=re.UNICODE)

_treebank = TreebankWordTokenizer()


def tokenize_message(text: str) -> list[str]:
    cleaned = _SENTENCE_PUNCTUATION.sub(" ", (text or "").lower())
    return [token for token in _treebank.tokenize(cleaned) if _WORD_CHAR.search(token)]


def normalize_word(text: str) -> str:
    """Reduces a command argument to the form ``tokenize_message`` stores."""
    return " ".join(_SENTENCE_PUNCTUATION.sub(" ", (text or "").lower()).split())
