"""Dispatcher — turns inbound events into at most one reply.

Two front-ends share the same authorization gate and command table:

- legacy: plain messages matched against ``!name`` tokens. Unauthorized
  callers are only logged and success replies come from the handler payload.
- slash: application command interactions. Every authorized invocation gets
  exactly one reply, success or failure, and denials are reported back.
"""

import sys
from typing import Optional

from ipbot.domain.auth import AuthorizationGate
from ipbot.domain.commands import Command, CommandRegistry
from ipbot.domain.errors import NotAuthorized
from ipbot.ports.inbound import IncomingInteraction, IncomingMessage
from ipbot.ports.outbound import AcknowledgePort, ReplyPort


def _log(msg: str):
    print(msg, file=sys.stderr)


class Dispatcher:
    def __init__(
        self,
        registry: CommandRegistry,
        gate: AuthorizationGate,
        own_id: Optional[str] = None,
    ):
        self.registry = registry
        self.gate = gate
        # Set once the platform session knows who we are.
        self.own_id = own_id

    # ── legacy text commands ──────────────────────────────

    async def handle_message(self, message: IncomingMessage, reply: ReplyPort) -> Optional[str]:
        """Handle a plain message. Returns the reply sent, if any."""
        if self.own_id is not None and message.author_id == self.own_id:
            return None

        if not self.gate.authorize(message.author_id, message.content):
            return None

        command = self.registry.match_text(message.content)
        if command is None:
            return None

        author = message.author_name or message.author_id
        _log(f'[dispatch] running command "{message.content}" for "{author}" in channel {message.channel_id}')
        try:
            payload = await command.run()
        except Exception as e:
            _log(f"[dispatch] error running command: {e}")
            text = f"Error running command: {e}"
        else:
            text = self._render_legacy(command, payload)

        await reply(text)
        return text

    @staticmethod
    def _render_legacy(command: Command, payload: str) -> str:
        if command.family is None:
            return payload
        return f"Public IP Address: {payload}"

    # ── slash commands ────────────────────────────────────

    async def handle_interaction(
        self,
        interaction: IncomingInteraction,
        reply: ReplyPort,
        acknowledge: Optional[AcknowledgePort] = None,
    ) -> Optional[str]:
        """Handle an application command. Returns the reply sent, if any.

        ``acknowledge`` runs after authorization and before the command, so
        platforms with a short response deadline can hold the interaction open
        while a slow lookup completes.
        """
        command = self.registry.get(interaction.command_name)
        if command is None:
            return None

        try:
            self.gate.require(interaction.caller_id, command.name)
        except NotAuthorized as e:
            text = f"Error: {e.reason}"
            await reply(text)
            return text

        caller = interaction.caller_name or interaction.caller_id
        _log(f'[dispatch] running slash command "/{command.name}" for "{caller}"')
        if acknowledge is not None:
            await acknowledge()
        try:
            payload = await command.run()
        except Exception as e:
            _log(f'[dispatch] "/{command.name}" failed: {e}')
            text = self._render_slash_error(command, e)
        else:
            text = self._render_slash(command, payload)

        await reply(text)
        return text

    @staticmethod
    def _render_slash(command: Command, payload: str) -> str:
        if command.family is None:
            return payload
        return f"{command.family.label}: {payload}"

    @staticmethod
    def _render_slash_error(command: Command, error: Exception) -> str:
        if command.family is None:
            return f"Error: {error}"
        return f"Error fetching {command.family.label}: {error}"
