"""Domain layer — pure Python, no framework dependencies."""

from ipbot.domain.errors import (
    CommandRegistrationError,
    ConfigError,
    IpBotError,
    NetworkError,
    NotAuthorized,
    PlatformConnectionError,
)
from ipbot.domain.models import (
    AddressFamily,
    AuthDecision,
    CommandContext,
    CommandDescriptor,
    InstallScope,
    RegisteredCommand,
)
from ipbot.domain.auth import AuthorizationGate
from ipbot.domain.commands import Command, CommandRegistry, build_default_registry
from ipbot.domain.dispatcher import Dispatcher

__all__ = [
    "AddressFamily",
    "AuthDecision",
    "AuthorizationGate",
    "Command",
    "CommandContext",
    "CommandDescriptor",
    "CommandRegistrationError",
    "CommandRegistry",
    "ConfigError",
    "Dispatcher",
    "InstallScope",
    "IpBotError",
    "NetworkError",
    "NotAuthorized",
    "PlatformConnectionError",
    "RegisteredCommand",
    "build_default_registry",
]
