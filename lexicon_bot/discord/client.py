from __future__ import annotations

import logging

import discord

from ..config import Settings
from ..lexicon.common_words import CommonWordSet
from ..lexicon.wordnet import WordNetResource
from ..pipeline import IngestionPipeline
from ..storage.store import VocabularyStore

logger = logging.getLogger("lexicon_bot")


class LexiconDiscordBot(discord.Client):
    def __init__(
        self,
        settings: Settings,
        store: VocabularyStore,
        pipeline: IngestionPipeline,
        common_words: CommonWordSet,
        resource: WordNetResource,
    ) -> None:
        intents = discord.Intents.default()
        intents.message_content = settings.discord_message_content_intent

        super().__init__(intents=intents)

        self.settings = settings
        self.store = store
        self.pipeline = pipeline
        self.common_words = common_words
        self.resource = resource

    async def setup_hook(self) -> None:
        await self.store.init()
        await self.store.replace_common_words(self.common_words.really_common)
        await self.resource.start()

    async def on_ready(self) -> None:
        if self.user:
            logger.info("Logged in as %s (%s)", self.user, self.user.id)

    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot:
            return

        reply = await self.pipeline.handle_message(str(message.author.id), message.content)
        logger.info("%s: %s", message.author, message.content)
        if not reply:
            return
        try:
            await message.reply(reply)
        except discord.HTTPException as exc:
            logger.warning("Failed to send reply in channel=%s: %s", message.channel.id, exc)
