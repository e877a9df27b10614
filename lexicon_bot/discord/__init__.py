from .client import LexiconDiscordBot

__all__ = ["LexiconDiscordBot"]
