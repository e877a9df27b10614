from __future__ import annotations

import logging
from typing import Sequence

import pendulum

from .lexicon.wordnet import LexicalEntry
from .storage.ledger import WordStats


logger = logging.getLogger("lexicon_bot")

TOO_LONG_REPLY = "Results are too long to post :("
FAILURE_REPLY = "Sorry, I couldn't process that message."


def fit_reply(text: str | None, limit: int) -> str | None:
    if text is None:
        return None
    if len(text) >= limit:
        return TOO_LONG_REPLY
    return text


def relative_time(timestamp: str | None) -> str:
    if not timestamp:
        return "at an unknown time"
    try:
        return pendulum.parse(timestamp).diff_for_humans()
    except Exception:
        logger.debug("Unparseable timestamp %r", timestamp, exc_info=True)
        return f"at {timestamp}"


def format_definitions(word: str, entries: Sequence[LexicalEntry]) -> str:
    if not entries:
        return f'\nNo definitions found for "{word}".'
    definitions = []
    for entry in entries:
        head = f"{entry.lemma}: {entry.definition}."
        if entry.gloss:
            head += f" {entry.gloss}"
        definitions.append(f"{head}\nsynonyms: {', '.join(entry.synonyms)}")
    return f"\n{word}: \n" + "\n\n".join(definitions)


def format_word_stats(root: str, stats: WordStats) -> str:
    text = ""
    if not stats.known:
        text += f'I don\'t have any record of you using "{root}". '
    else:
        if not stats.validated:
            text += f"I don't know what {root} means. "
        text += (
            f'You have used the word "{root}" {stats.uses} time{"s" if stats.uses != 1 else ""}. '
            f"You first used the word {relative_time(stats.created_at)}. "
            f'You last used "{root}" {relative_time(stats.updated_at)}. '
        )
    others = stats.other_users
    text += f"{others} other user{'s' if others != 1 else ''} know{'' if others != 1 else 's'} this word."
    return text


def format_top_words(total: int, words: Sequence[tuple[str, int]]) -> str:
    lines = [
        "",
        f"You have a total of `{total}` different words stored",
        f"Here are your top {len(words)} words:",
    ]
    lines.extend(f"{root} - {uses}" for root, uses in words)
    return "\n".join(lines)
