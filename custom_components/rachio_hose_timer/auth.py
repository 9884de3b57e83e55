"""Authentication for Rachio cloud requests."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp
from aiohttp import ClientSession

from .const import HEADER_RATE_LIMIT, HEADER_RATE_REMAINING, HEADER_RATE_RESET
from .errors import AuthError, MalformedResponseError, TransportError

_LOGGER = logging.getLogger(__name__)


class RachioAuth:
    """Class to make authenticated requests to Rachio APIs."""

    def __init__(self, session: ClientSession, api_key: str | None) -> None:
        """Initialize Rachio authentication."""
        self.session = session
        self.api_key = api_key or ""
        self.headers = {"Authorization": f"Bearer {self.api_key}"}

    def _log_rate_limits(self, resp, url: str) -> None:
        """Log rate limit information from response headers."""
        limit = resp.headers.get(HEADER_RATE_LIMIT, "unknown")
        remaining = resp.headers.get(HEADER_RATE_REMAINING, "unknown")
        reset = resp.headers.get(HEADER_RATE_RESET, "unknown")
        if resp.status == 429:
            _LOGGER.warning(
                "Rate limited! Limit=%s, Remaining=%s, Reset=%s",
                limit, remaining, reset
            )
            return
        _LOGGER.debug(
            "API %s - Rate limits: limit=%s, remaining=%s, reset=%s",
            url.split("/")[-1], limit, remaining, reset
        )

    async def _request(
        self,
        method: str,
        url: str,
        json_data: dict[str, Any] | None = None,
        parse: bool = True,
    ) -> Any:
        """Make a request and return the decoded JSON body."""
        if not self.api_key:
            raise AuthError("No Rachio API key configured")

        try:
            async with self.session.request(
                method, url, headers=self.headers, json=json_data
            ) as resp:
                self._log_rate_limits(resp, url)
                if resp.status in (401, 403):
                    raise AuthError(f"Rachio rejected the API key ({resp.status})")
                if resp.status == 429:
                    raise TransportError("Rate limited by Rachio API", status=resp.status)
                if resp.status >= 400:
                    raise TransportError(
                        f"{method} {url} failed with status {resp.status}", status=resp.status
                    )
                if not parse:
                    return None
                try:
                    return await resp.json(content_type=None)
                except ValueError as err:
                    raise MalformedResponseError(f"Invalid JSON from {url}") from err
        except (aiohttp.ClientError, asyncio.TimeoutError) as err:
            raise TransportError(f"Error communicating with Rachio: {err}") from err
