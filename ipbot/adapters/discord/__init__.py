from ipbot.adapters.discord.legacy_bot import LegacyCommandBot
from ipbot.adapters.discord.slash_bot import SlashCommandBot

__all__ = ["LegacyCommandBot", "SlashCommandBot"]
