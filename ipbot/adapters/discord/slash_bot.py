"""Slash command front-end — application commands via discord.app_commands."""

import sys
from typing import List

import discord
from discord import app_commands

from ipbot.domain.dispatcher import Dispatcher
from ipbot.domain.errors import CommandRegistrationError
from ipbot.domain.models import (
    CommandContext,
    CommandDescriptor,
    InstallScope,
    RegisteredCommand,
)
from ipbot.ports.inbound import IncomingInteraction


def _log(msg: str):
    print(msg, file=sys.stderr)


def to_app_command_context(descriptor: CommandDescriptor) -> app_commands.AppCommandContext:
    return app_commands.AppCommandContext(
        guild=CommandContext.GUILD in descriptor.contexts,
        dm_channel=CommandContext.BOT_DM in descriptor.contexts,
        private_channel=CommandContext.PRIVATE_CHANNEL in descriptor.contexts,
    )


def to_installation_type(descriptor: CommandDescriptor) -> app_commands.AppInstallationType:
    return app_commands.AppInstallationType(
        guild=InstallScope.GUILD in descriptor.installs,
        user=InstallScope.USER in descriptor.installs,
    )


class SlashCommandBot(discord.Client):
    """Registers every descriptor as a global slash command at login.

    Registration failures abort startup. With ``unregister_on_shutdown`` the
    commands are removed again before the connection closes; otherwise they
    stay registered across restarts.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        unregister_on_shutdown: bool = False,
        **discord_kwargs,
    ):
        super().__init__(intents=discord.Intents.default(), **discord_kwargs)
        self.dispatcher = dispatcher
        self.unregister_on_shutdown = unregister_on_shutdown
        self.tree = app_commands.CommandTree(self)
        self.registered_commands: List[RegisteredCommand] = []
        for descriptor in dispatcher.registry.descriptors():
            self.tree.add_command(self._build_app_command(descriptor))

    def _build_app_command(self, descriptor: CommandDescriptor) -> app_commands.Command:
        name = descriptor.name

        async def callback(interaction: discord.Interaction) -> None:
            await self.handle_interaction(name, interaction)

        command = app_commands.Command(
            name=name,
            description=descriptor.description,
            callback=callback,
        )
        command.allowed_contexts = to_app_command_context(descriptor)
        command.allowed_installs = to_installation_type(descriptor)
        return command

    async def handle_interaction(self, command_name: str, interaction: discord.Interaction) -> None:
        # interaction.user is a Member in guilds and a User elsewhere; both carry the id
        incoming = IncomingInteraction(
            command_name=command_name,
            caller_id=str(interaction.user.id),
            caller_name=str(interaction.user),
        )
        deferred = False

        # Discord drops interactions not acknowledged within 3 seconds
        async def acknowledge() -> None:
            nonlocal deferred
            await interaction.response.defer(thinking=True)
            deferred = True

        async def reply(text: str) -> None:
            if deferred:
                await interaction.followup.send(text)
            else:
                await interaction.response.send_message(text)

        await self.dispatcher.handle_interaction(incoming, reply, acknowledge)

    async def setup_hook(self) -> None:
        try:
            synced = await self.tree.sync()
        except discord.DiscordException as e:
            raise CommandRegistrationError(f"Cannot create slash commands: {e}") from e

        self.registered_commands = [RegisteredCommand(id=c.id, name=c.name) for c in synced]
        missing = {d.name for d in self.dispatcher.registry.descriptors()} - {
            c.name for c in self.registered_commands
        }
        if missing:
            raise CommandRegistrationError(
                f"Discord did not register: {', '.join(sorted(missing))}"
            )
        for c in self.registered_commands:
            _log(f"[ipbot] registered /{c.name} (id={c.id})")

    async def on_ready(self):
        _log(f"[ipbot] logged in as {self.user} (slash commands)")

    async def close(self) -> None:
        if self.unregister_on_shutdown and self.registered_commands and not self.is_closed():
            await self._unregister_commands()
        await super().close()

    async def _unregister_commands(self) -> None:
        self.tree.clear_commands(guild=None)
        try:
            await self.tree.sync()
        except discord.DiscordException as e:
            _log(f"[ipbot] failed to remove slash commands: {e}")
            return
        _log(f"[ipbot] removed {len(self.registered_commands)} slash command(s)")
        self.registered_commands = []
