from .common_words import CommonWordSet
from .spelling import SpellingCorrector
from .tokenizer import tokenize_message
from .validator import LexicalValidator
from .wordnet import LexicalEntry, WordNetResource

__all__ = [
    "CommonWordSet",
    "LexicalEntry",
    "LexicalValidator",
    "SpellingCorrector",
    "WordNetResource",
    "tokenize_message",
]
