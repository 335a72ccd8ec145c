"""Outbound ports — interfaces for external system adapters."""

from typing import Awaitable, Callable, Protocol, runtime_checkable

from ipbot.domain.models import AddressFamily

# Sends one reply for the event being handled.
ReplyPort = Callable[[str], Awaitable[None]]

# Tells the platform a reply is on its way (e.g. a deferred interaction).
AcknowledgePort = Callable[[], Awaitable[None]]


@runtime_checkable
class IPResolverPort(Protocol):
    """Interface for public IP lookup backends."""

    async def resolve(self, family: AddressFamily) -> str: ...
