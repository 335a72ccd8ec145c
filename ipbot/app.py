"""Process lifecycle — load config, connect, wait for a signal, close."""

import asyncio
import signal
import sys
from typing import Optional, Sequence

import discord

from ipbot.adapters.discord import LegacyCommandBot, SlashCommandBot
from ipbot.adapters.ip import IpifyResolver
from ipbot.config import BotConfig, load_config
from ipbot.domain.auth import AuthorizationGate
from ipbot.domain.commands import build_default_registry
from ipbot.domain.dispatcher import Dispatcher
from ipbot.domain.errors import ConfigError, IpBotError, PlatformConnectionError

_SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def _log(msg: str):
    print(msg, file=sys.stderr)


def build_dispatcher(config: BotConfig) -> Dispatcher:
    resolver = IpifyResolver(provider=config.ip_provider, timeout=config.http_timeout or None)
    registry = build_default_registry(resolver, prefix=config.command_prefix)
    return Dispatcher(registry, AuthorizationGate(config.auth_users))


def build_bot(config: BotConfig) -> discord.Client:
    """Instantiate the front-end selected by ``config.mode``."""
    dispatcher = build_dispatcher(config)
    if config.mode == "slash":
        return SlashCommandBot(dispatcher, unregister_on_shutdown=config.unregister_on_shutdown)
    return LegacyCommandBot(dispatcher)


def _install_signal_handlers(loop: asyncio.AbstractEventLoop, stop: asyncio.Event) -> list:
    installed = []
    for sig in _SHUTDOWN_SIGNALS:
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):
            # Not supported on this platform or outside the main thread
            continue
        installed.append(sig)
    return installed


async def run_bot(
    bot: discord.Client,
    token: str,
    stop: Optional[asyncio.Event] = None,
) -> None:
    """Log in, stay connected until SIGINT/SIGTERM, then close the client."""
    loop = asyncio.get_running_loop()
    stop = stop or asyncio.Event()
    installed = _install_signal_handlers(loop, stop)
    tasks = []
    try:
        try:
            await bot.login(token)
        except (discord.LoginFailure, discord.HTTPException) as e:
            raise PlatformConnectionError(f"Error creating Discord session: {e}") from e

        connect_task = asyncio.create_task(bot.connect())
        stop_task = asyncio.create_task(stop.wait())
        tasks = [connect_task, stop_task]
        _log("IpBot is now running. CTRL+C to exit.")

        await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        if connect_task.done() and not connect_task.cancelled():
            exc = connect_task.exception()
            if exc is not None:
                raise PlatformConnectionError(f"Error opening connection: {exc}") from exc
    finally:
        await bot.close()
        pending = [t for t in tasks if not t.done()]
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for sig in installed:
            loop.remove_signal_handler(sig)


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        config = load_config(argv)
    except ConfigError as e:
        _log(str(e))
        return 1

    _log(f"[ipbot] mode={config.mode} authorized users={len(config.auth_users)}")
    bot = build_bot(config)
    try:
        asyncio.run(run_bot(bot, config.token))
    except IpBotError as e:
        _log(str(e))
        return 1

    _log("Shutdown.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
