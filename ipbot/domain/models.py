"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional


class AddressFamily(Enum):
    IPV4 = "IPv4"
    IPV6 = "IPv6"

    @property
    def label(self) -> str:
        return self.value


class CommandContext(Enum):
    """Surfaces a slash command may be invoked from."""

    GUILD = "guild"
    BOT_DM = "bot_dm"
    PRIVATE_CHANNEL = "private_channel"


class InstallScope(Enum):
    GUILD = "guild"
    USER = "user"


ALL_CONTEXTS = frozenset(CommandContext)
ALL_INSTALLS = frozenset(InstallScope)


@dataclass(frozen=True)
class CommandDescriptor:
    """Static metadata for a registrable command."""

    name: str
    description: str
    contexts: FrozenSet[CommandContext] = field(default=ALL_CONTEXTS)
    installs: FrozenSet[InstallScope] = field(default=ALL_INSTALLS)


@dataclass(frozen=True)
class RegisteredCommand:
    """Handle returned by the platform for a registered descriptor."""

    id: int
    name: str


@dataclass(frozen=True)
class AuthDecision:
    """Result of an allow-list check. Truthy iff the caller is allowed."""

    allowed: bool
    caller_id: str
    command_name: str
    reason: Optional[str] = None

    def __bool__(self) -> bool:
        return self.allowed
