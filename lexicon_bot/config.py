from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


load_dotenv()


def _env_lookup(name: str, aliases: tuple[str, ...] = ()) -> str | None:
    for key in (name, *aliases):
        # Be tolerant to UTF-8 BOM accidentally saved in .env key names.
        for candidate in (key, f"\ufeff{key}"):
            raw = os.getenv(candidate)
            if raw is not None:
                return raw
    return None


def _env_bool(name: str, default: bool, aliases: tuple[str, ...] = ()) -> bool:
    raw = _env_lookup(name, aliases)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int, aliases: tuple[str, ...] = ()) -> int:
    raw = _env_lookup(name, aliases)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str, aliases: tuple[str, ...] = ()) -> str:
    raw = _env_lookup(name, aliases)
    if raw is None:
        return default
    value = raw.strip()
    return value if value else default


def _clean_token(value: str) -> str:
    cleaned = value.strip()
    if (cleaned.startswith('"') and cleaned.endswith('"')) or (
        cleaned.startswith("'") and cleaned.endswith("'")
    ):
        cleaned = cleaned[1:-1].strip()
    return cleaned


@dataclass(slots=True)
class Settings:
    discord_token: str
    command_prefix: str
    discord_message_content_intent: bool

    sqlite_path: Path

    common_corpus_path: Path | None
    common_corpus_size: int
    really_common_word_count: int
    spelling_max_edit_distance: int
    nltk_auto_download: bool

    top_words_limit: int
    max_reply_chars: int

    @classmethod
    def from_env(cls) -> "Settings":
        corpus_raw = _env_str("COMMON_CORPUS_PATH", "")
        return cls(
            discord_token=_clean_token(_env_lookup("DISCORD_TOKEN", aliases=("DISCORD_SECRET",)) or ""),
            command_prefix=_env_str("DISCORD_COMMAND_PREFIX", "!"),
            discord_message_content_intent=_env_bool("DISCORD_MESSAGE_CONTENT_INTENT", True),
            sqlite_path=Path(_env_str("SQLITE_PATH", "./data/lexicon.db")).expanduser(),
            common_corpus_path=Path(corpus_raw).expanduser() if corpus_raw else None,
            common_corpus_size=_env_int("COMMON_CORPUS_SIZE", 10000),
            really_common_word_count=_env_int("REALLY_COMMON_WORD_COUNT", 100),
            spelling_max_edit_distance=_env_int("SPELLING_MAX_EDIT_DISTANCE", 1),
            nltk_auto_download=_env_bool("NLTK_AUTO_DOWNLOAD", True),
            top_words_limit=_env_int("TOP_WORDS_LIMIT", 10),
            max_reply_chars=_env_int("MAX_REPLY_CHARS", 2000),
        )

    def validate(self) -> None:
        if not self.discord_token:
            raise ValueError("DISCORD_TOKEN is required")
        if self.discord_token == "put_your_discord_bot_token_here":
            raise ValueError("DISCORD_TOKEN is still placeholder")
        if not self.command_prefix.strip():
            raise ValueError("DISCORD_COMMAND_PREFIX cannot be empty")

        if self.common_corpus_path is not None and not self.common_corpus_path.is_file():
            raise ValueError(f"COMMON_CORPUS_PATH does not exist: {self.common_corpus_path}")
        if self.common_corpus_size < 100:
            raise ValueError("COMMON_CORPUS_SIZE must be >= 100")
        if self.really_common_word_count < 1:
            raise ValueError("REALLY_COMMON_WORD_COUNT must be >= 1")
        if self.spelling_max_edit_distance not in {1, 2}:
            raise ValueError("SPELLING_MAX_EDIT_DISTANCE must be 1 or 2")

        if self.top_words_limit < 1:
            raise ValueError("TOP_WORDS_LIMIT must be >= 1")
        if self.max_reply_chars < 200:
            raise ValueError("MAX_REPLY_CHARS must be >= 200")
