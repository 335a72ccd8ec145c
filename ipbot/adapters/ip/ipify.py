"""Public IP lookup via ipify using aiohttp."""

import asyncio
from typing import Optional

import aiohttp

from ipbot.domain.errors import NetworkError
from ipbot.domain.models import AddressFamily

DEFAULT_PROVIDER = "ipify.org"

# Each family has its own API subdomain.
ENDPOINTS = {
    AddressFamily.IPV4: "api",
    AddressFamily.IPV6: "api64",
}


class IpifyResolver:
    """Resolves the host's public address with one GET per call.

    The response body is returned verbatim; nothing is cached or retried.
    """

    def __init__(self, provider: str = DEFAULT_PROVIDER, timeout: Optional[float] = None):
        self.provider = provider
        self.timeout = timeout

    def url_for(self, family: AddressFamily) -> str:
        return f"https://{ENDPOINTS[family]}.{self.provider}/?format=text"

    def _session_kwargs(self) -> dict:
        if not self.timeout:
            return {}
        return {"timeout": aiohttp.ClientTimeout(total=self.timeout)}

    async def resolve(self, family: AddressFamily) -> str:
        url = self.url_for(family)
        try:
            async with aiohttp.ClientSession(**self._session_kwargs()) as session:
                async with session.get(url) as resp:
                    return await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            raise NetworkError(str(e) or e.__class__.__name__, cause=e) from e
