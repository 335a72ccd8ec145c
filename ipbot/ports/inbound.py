"""Inbound ports — platform-agnostic event representation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IncomingMessage:
    """Plain chat message parsed for a command sigil."""

    content: str
    channel_id: int
    author_id: str
    author_name: str = ""


@dataclass(frozen=True)
class IncomingInteraction:
    """Structured, platform-native command invocation."""

    command_name: str
    caller_id: str
    caller_name: str = ""
