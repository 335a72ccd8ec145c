"""IpBot — Discord bot that reports the host's public IP address."""

__version__ = "0.1.0"

from ipbot.config import BotConfig, load_config, parse_auth_users
from ipbot.domain.auth import AuthorizationGate
from ipbot.domain.commands import Command, CommandRegistry, build_default_registry
from ipbot.domain.dispatcher import Dispatcher
from ipbot.domain.models import AddressFamily, CommandDescriptor
from ipbot.adapters.ip import IpifyResolver

__all__ = [
    "AddressFamily",
    "AuthorizationGate",
    "BotConfig",
    "Command",
    "CommandDescriptor",
    "CommandRegistry",
    "Dispatcher",
    "IpifyResolver",
    "build_default_registry",
    "load_config",
    "parse_auth_users",
]
