"""Error taxonomy for the bot."""

from typing import Optional


class IpBotError(Exception):
    """Base class for all bot errors"""
    pass


class ConfigError(IpBotError):
    """Raised when required configuration is missing or invalid"""
    pass


class PlatformConnectionError(IpBotError):
    """Raised when the Discord session cannot be created or opened"""
    pass


class CommandRegistrationError(IpBotError):
    """Raised when slash commands cannot be registered with Discord"""
    pass


class NotAuthorized(IpBotError):
    """Raised when a caller is not on the allow-list"""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NetworkError(IpBotError):
    """Raised when the public IP lookup fails.

    The underlying exception is kept on ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
