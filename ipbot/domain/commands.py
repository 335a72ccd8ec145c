"""Command registry — static mapping from command name to handler."""

from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Iterator, List, Optional

from ipbot.domain.models import AddressFamily, CommandDescriptor
from ipbot.ports.outbound import IPResolverPort

PONG = "Pong!"

Handler = Callable[[], Awaitable[str]]


@dataclass(frozen=True)
class Command:
    """A descriptor bound to the coroutine that produces its payload.

    ``family`` is set for IP lookups so front-ends can label the reply.
    """

    descriptor: CommandDescriptor
    handler: Handler
    family: Optional[AddressFamily] = None

    @property
    def name(self) -> str:
        return self.descriptor.name

    async def run(self) -> str:
        return await self.handler()


class CommandRegistry:
    """Name-keyed command table, read-only once the bot is running."""

    def __init__(self, prefix: str = "!"):
        self.prefix = prefix
        self._commands: Dict[str, Command] = {}

    def register(self, command: Command) -> None:
        if command.name in self._commands:
            raise ValueError(f"duplicate command name: {command.name!r}")
        self._commands[command.name] = command

    def get(self, name: str) -> Optional[Command]:
        return self._commands.get(name)

    def match_text(self, content: str) -> Optional[Command]:
        """Exact match of a message against ``prefix + name``."""
        if not content.startswith(self.prefix):
            return None
        return self._commands.get(content[len(self.prefix):])

    def descriptors(self) -> List[CommandDescriptor]:
        return [c.descriptor for c in self._commands.values()]

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)


async def _ping() -> str:
    return PONG


def _ip_handler(resolver: IPResolverPort, family: AddressFamily) -> Handler:
    async def handler() -> str:
        return await resolver.resolve(family)
    return handler


def build_default_registry(resolver: IPResolverPort, prefix: str = "!") -> CommandRegistry:
    """Create the ping / ip / ipv6 command table."""
    registry = CommandRegistry(prefix=prefix)
    registry.register(Command(
        descriptor=CommandDescriptor("ping", "Check that the bot is alive."),
        handler=_ping,
    ))
    registry.register(Command(
        descriptor=CommandDescriptor("ip", "Show the host's public IPv4 address."),
        handler=_ip_handler(resolver, AddressFamily.IPV4),
        family=AddressFamily.IPV4,
    ))
    registry.register(Command(
        descriptor=CommandDescriptor("ipv6", "Show the host's public IPv6 address."),
        handler=_ip_handler(resolver, AddressFamily.IPV6),
        family=AddressFamily.IPV6,
    ))
    return registry
