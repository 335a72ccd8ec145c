"""Tests for the process lifecycle (build, run, shutdown, exit codes)."""

import asyncio
import os
import signal
from unittest.mock import AsyncMock, MagicMock, patch

import discord
import pytest

from ipbot.adapters.discord import LegacyCommandBot, SlashCommandBot
from ipbot.app import build_bot, build_dispatcher, main, run_bot
from ipbot.config import BotConfig
from ipbot.domain.errors import CommandRegistrationError, PlatformConnectionError


def _fake_bot(connect=None):
    bot = MagicMock()
    bot.login = AsyncMock()
    bot.close = AsyncMock()
    bot.connect = connect or MagicMock(side_effect=lambda: asyncio.sleep(3600))
    return bot


class TestBuild:
    def test_legacy_default(self):
        bot = build_bot(BotConfig(token="t", auth_users=frozenset({"1"})))
        assert isinstance(bot, LegacyCommandBot)
        assert bot.dispatcher.gate.allowed_users == {"1"}

    def test_slash_mode(self):
        bot = build_bot(BotConfig(token="t", mode="slash", unregister_on_shutdown=True))
        assert isinstance(bot, SlashCommandBot)
        assert bot.unregister_on_shutdown is True

    def test_dispatcher_uses_config(self):
        dispatcher = build_dispatcher(BotConfig(token="t", command_prefix="?"))
        assert dispatcher.registry.prefix == "?"
        assert [c.name for c in dispatcher.registry] == ["ping", "ip", "ipv6"]


class TestRunBot:
    @pytest.mark.asyncio
    async def test_stop_closes_connection(self, capsys):
        bot = _fake_bot()
        stop = asyncio.Event()
        stop.set()
        await run_bot(bot, "tok", stop=stop)
        bot.login.assert_awaited_once_with("tok")
        bot.connect.assert_called_once()
        bot.close.assert_awaited_once()
        assert "IpBot is now running" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_stop_set_later(self):
        bot = _fake_bot()
        stop = asyncio.Event()
        asyncio.get_running_loop().call_later(0.01, stop.set)
        await run_bot(bot, "tok", stop=stop)
        bot.close.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sig", [signal.SIGTERM, signal.SIGINT])
    async def test_signal_triggers_shutdown(self, sig):
        previous = signal.getsignal(sig)
        bot = _fake_bot()
        loop = asyncio.get_running_loop()
        try:
            loop.call_later(0.01, os.kill, os.getpid(), sig)
            await asyncio.wait_for(run_bot(bot, "tok"), timeout=5)
            bot.close.assert_awaited_once()
            # Handlers are removed again once the bot has closed
            assert not loop.remove_signal_handler(sig)
        finally:
            signal.signal(sig, previous)

    @pytest.mark.asyncio
    async def test_login_failure(self):
        bot = _fake_bot()
        bot.login.side_effect = discord.LoginFailure("Improper token has been passed.")
        with pytest.raises(PlatformConnectionError) as exc_info:
            await run_bot(bot, "bad", stop=asyncio.Event())
        assert "Improper token" in str(exc_info.value)
        bot.connect.assert_not_called()
        bot.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connect_failure(self):
        bot = _fake_bot(connect=AsyncMock(side_effect=RuntimeError("gateway down")))
        with pytest.raises(PlatformConnectionError) as exc_info:
            await run_bot(bot, "tok", stop=asyncio.Event())
        assert "gateway down" in str(exc_info.value)
        bot.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_registration_error_propagates(self):
        bot = _fake_bot()
        bot.login.side_effect = CommandRegistrationError("Cannot create slash commands")
        with pytest.raises(CommandRegistrationError):
            await run_bot(bot, "tok", stop=asyncio.Event())
        bot.close.assert_awaited_once()


class TestMain:
    def test_missing_token_exits_1(self, monkeypatch, capsys):
        monkeypatch.delenv("IPBOT_TOKEN", raising=False)
        assert main([]) == 1
        assert "IPBOT_TOKEN" in capsys.readouterr().err

    def test_normal_shutdown(self, monkeypatch, capsys):
        monkeypatch.delenv("IPBOT_TOKEN", raising=False)
        with patch("ipbot.app.build_bot") as build, patch("ipbot.app.run_bot", AsyncMock()) as run:
            assert main(["-token", "t", "-auth", "1"]) == 0
        run.assert_awaited_once_with(build.return_value, "t")
        assert "Shutdown." in capsys.readouterr().err

    def test_connection_error_exits_1(self, monkeypatch, capsys):
        monkeypatch.setenv("IPBOT_TOKEN", "t")
        failing = AsyncMock(side_effect=PlatformConnectionError("Error opening connection: boom"))
        with patch("ipbot.app.build_bot"), patch("ipbot.app.run_bot", failing):
            assert main([]) == 1
        err = capsys.readouterr().err
        assert "boom" in err
        assert "Shutdown." not in err
