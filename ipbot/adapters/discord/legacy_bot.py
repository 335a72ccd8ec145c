"""Legacy front-end — ``!command`` text messages on discord.Client."""

import sys

import discord

from ipbot.domain.dispatcher import Dispatcher
from ipbot.ports.inbound import IncomingMessage


def _log(msg: str):
    print(msg, file=sys.stderr)


class LegacyCommandBot(discord.Client):
    """Reads guild and DM messages and hands them to the Dispatcher.

    Replies go to the channel the command came from.
    """

    def __init__(self, dispatcher: Dispatcher, **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)
        self.dispatcher = dispatcher

    async def on_ready(self):
        _log(f"[ipbot] logged in as {self.user} (legacy commands)")
        self.dispatcher.own_id = str(self.user.id)

    @staticmethod
    def to_incoming(message: discord.Message) -> IncomingMessage:
        """Convert a Discord message to platform-agnostic IncomingMessage."""
        return IncomingMessage(
            content=message.content,
            channel_id=message.channel.id,
            author_id=str(message.author.id),
            author_name=str(message.author),
        )

    async def on_message(self, message: discord.Message):
        # Guard: self.user can be None before on_ready fires
        if not self.user or message.author.id == self.user.id:
            return

        await self.dispatcher.handle_message(self.to_incoming(message), message.channel.send)
