"""Configuration and startup settings.

Sources, later overrides earlier:
1. Built-in defaults
2. Environment variables (a local .env file is loaded first)
3. Command line flags
"""

import argparse
import os
import re
import sys
from dataclasses import dataclass, replace
from typing import FrozenSet, Iterable, Mapping, Optional, Sequence

from dotenv import load_dotenv

from ipbot.adapters.ip.ipify import DEFAULT_PROVIDER
from ipbot.domain.errors import ConfigError

load_dotenv()

MODES = ("legacy", "slash")

_AUTH_SEPARATORS = re.compile(r"[:,;]")
_TRUTHY = ("1", "true", "yes", "on")


def _log(msg: str):
    print(msg, file=sys.stderr)


def parse_auth_users(raw: Optional[str]) -> FrozenSet[str]:
    """Split an allow-list on ``:``, ``,`` or ``;``. Blank items are dropped."""
    if not raw:
        return frozenset()
    return _clean(_AUTH_SEPARATORS.split(raw))


def _clean(values: Iterable[str]) -> FrozenSet[str]:
    return frozenset(v.strip() for v in values if v and v.strip())


def _env_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _env_float(name: str, value: Optional[str]) -> float:
    if not value:
        return 0.0
    try:
        return float(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e


@dataclass(frozen=True)
class BotConfig:
    """Read-only process configuration, built once at startup."""

    token: str = ""
    auth_users: FrozenSet[str] = frozenset()
    mode: str = "legacy"
    command_prefix: str = "!"
    ip_provider: str = DEFAULT_PROVIDER
    http_timeout: float = 0.0
    unregister_on_shutdown: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BotConfig":
        """Create BotConfig from environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            token=env.get("IPBOT_TOKEN", "").strip(),
            auth_users=parse_auth_users(env.get("IPBOT_AUTH_USERS", "")),
            mode=env.get("IPBOT_MODE", "legacy").strip().lower(),
            command_prefix=env.get("IPBOT_COMMAND_PREFIX", "!"),
            ip_provider=env.get("IPBOT_IP_PROVIDER", DEFAULT_PROVIDER).strip(),
            http_timeout=_env_float("IPBOT_HTTP_TIMEOUT", env.get("IPBOT_HTTP_TIMEOUT")),
            unregister_on_shutdown=_env_bool(env.get("IPBOT_UNREGISTER_ON_SHUTDOWN")),
        )

    def merge_cli_args(self, args: argparse.Namespace) -> "BotConfig":
        """Return a copy with command line flags applied (CLI takes precedence)."""
        config = self
        if getattr(args, "token", None):
            config = replace(config, token=args.token.strip())
        cli_auth = _clean(getattr(args, "auth", None) or [])
        if cli_auth:
            config = replace(config, auth_users=cli_auth)
        if getattr(args, "mode", None):
            config = replace(config, mode=args.mode.lower())
        if getattr(args, "unregister", False):
            config = replace(config, unregister_on_shutdown=True)
        return config

    def validate(self) -> "BotConfig":
        """Raise ConfigError on fatal problems, warn on an empty allow-list."""
        if not self.token:
            raise ConfigError("IPBOT_TOKEN environment variable not set.")
        if self.mode not in MODES:
            raise ConfigError(f"Unsupported mode {self.mode!r}, expected one of {', '.join(MODES)}")
        if not self.command_prefix:
            raise ConfigError("IPBOT_COMMAND_PREFIX must not be empty")
        if not self.auth_users:
            _log("[config] warning: no authorized users configured, all commands will be denied")
        return self


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ipbot",
        description="Discord bot that reports the host's public IP address.",
        epilog="Flags override IPBOT_TOKEN / IPBOT_AUTH_USERS / IPBOT_MODE.",
    )
    parser.add_argument("-token", "--token", help="Discord API token.")
    parser.add_argument(
        "-auth", "--auth",
        action="append",
        metavar="USER_ID",
        help="Append a user ID to the authorized users list (repeatable).",
    )
    parser.add_argument("-mode", "--mode", choices=MODES, help="Command front-end to run.")
    parser.add_argument(
        "-unregister", "--unregister",
        action="store_true",
        help="Remove slash commands from Discord on shutdown.",
    )
    return parser


def load_config(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> BotConfig:
    """Build and validate the configuration for this process."""
    args = build_arg_parser().parse_args(argv)
    return BotConfig.from_env(environ).merge_cli_args(args).validate()
