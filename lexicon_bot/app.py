from __future__ import annotations

import asyncio
import contextlib
import logging
import os
from pathlib import Path

from .config import Settings
from .discord.client import LexiconDiscordBot
from .lexicon.common_words import CommonWordSet
from .lexicon.spelling import SpellingCorrector
from .lexicon.validator import LexicalValidator
from .lexicon.wordnet import WordNetResource
from .pipeline import IngestionPipeline
from .storage.store import VocabularyStore

logger = logging.getLogger("lexicon_bot")


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logging.getLogger("discord.gateway").setLevel(logging.WARNING)
    logging.getLogger("discord.client").setLevel(logging.WARNING)
    logging.getLogger("nltk").setLevel(logging.WARNING)


def _is_process_alive(pid: int) -> bool:
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    except OSError:
        return False
    return True


def _acquire_instance_lock(lock_path: Path) -> None:
    # One ingestion path per database.
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    if lock_path.exists():
        stale_pid = 0
        with contextlib.suppress(ValueError, OSError):
            stale_pid = int(lock_path.read_text(encoding="utf-8").strip() or "0")
        if stale_pid > 0 and stale_pid != os.getpid() and _is_process_alive(stale_pid):
            raise RuntimeError(f"Bot is already running (pid={stale_pid}). Stop it before starting a new one.")
        with contextlib.suppress(OSError):
            lock_path.unlink()

    lock_path.write_text(str(os.getpid()), encoding="utf-8")


def _release_instance_lock(lock_path: Path) -> None:
    with contextlib.suppress(OSError):
        if lock_path.exists():
            lock_path.unlink()


def load_common_words(settings: Settings) -> CommonWordSet:
    if settings.common_corpus_path is not None:
        return CommonWordSet.from_file(settings.common_corpus_path, settings.really_common_word_count)
    return CommonWordSet.from_wordfreq(settings.common_corpus_size, settings.really_common_word_count)


def build_bot(settings: Settings) -> LexiconDiscordBot:
    common_words = load_common_words(settings)
    speller = SpellingCorrector(common_words.words, max_distance=settings.spelling_max_edit_distance)
    resource = WordNetResource(auto_download=settings.nltk_auto_download)
    validator = LexicalValidator(common_words, resource, speller)
    store = VocabularyStore(settings.sqlite_path)
    pipeline = IngestionPipeline(
        store,
        validator,
        command_prefix=settings.command_prefix,
        top_words_limit=settings.top_words_limit,
        max_reply_chars=settings.max_reply_chars,
    )
    return LexiconDiscordBot(
        settings=settings,
        store=store,
        pipeline=pipeline,
        common_words=common_words,
        resource=resource,
    )


async def _run_bot(settings: Settings) -> None:
    bot = build_bot(settings)
    async with bot:
        await bot.start(settings.discord_token)


def main() -> None:
    configure_logging()
    settings = Settings.from_env()
    settings.validate()
    lock_path = settings.sqlite_path.parent / "lexicon_bot.pid"
    _acquire_instance_lock(lock_path)
    try:
        asyncio.run(_run_bot(settings))
    except KeyboardInterrupt:
        logger.info("Shutdown requested, exiting.")
    finally:
        _release_instance_lock(lock_path)
