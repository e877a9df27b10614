from .ledger import WordStats
from .store import VocabularyStore
from .users import User

__all__ = ["User", "VocabularyStore", "WordStats"]
