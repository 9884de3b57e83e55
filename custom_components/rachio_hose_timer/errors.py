"""Errors raised by the Rachio Smart Hose Timer integration."""
from __future__ import annotations

from homeassistant.exceptions import HomeAssistantError


class RachioError(HomeAssistantError):
    """Base class for Rachio errors."""


class AuthError(RachioError):
    """The API key is missing or was rejected."""


class TransportError(RachioError):
    """A request to the Rachio cloud failed."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class MalformedResponseError(TransportError):
    """The Rachio cloud answered with a payload we cannot use."""


class CommandError(RachioError):
    """A start or stop command was rejected or never reached the valve."""


class ConfigurationError(RachioError):
    """The integration is not wired up for the requested operation."""
