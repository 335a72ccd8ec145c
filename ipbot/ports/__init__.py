"""Port interfaces (Hexagonal Architecture)."""

from ipbot.ports.inbound import IncomingInteraction, IncomingMessage
from ipbot.ports.outbound import AcknowledgePort, IPResolverPort, ReplyPort

__all__ = [
    "AcknowledgePort",
    "IncomingInteraction",
    "IncomingMessage",
    "IPResolverPort",
    "ReplyPort",
]
