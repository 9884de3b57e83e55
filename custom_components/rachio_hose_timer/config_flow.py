"""Config flow for Rachio Smart Hose Timer integration."""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol
from homeassistant import config_entries
from homeassistant.core import HomeAssistant, callback
from homeassistant.data_entry_flow import FlowResult
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import RachioCatalogClient
from .const import (
    CONF_API_KEY,
    CONF_DURATION,
    DEFAULT_DURATION,
    DEFAULT_NAME,
    DOMAIN,
    MAX_DURATION,
    MIN_DURATION,
)
from .errors import AuthError, TransportError
from .models import RachioUser

_LOGGER = logging.getLogger(__name__)


async def validate_input(hass: HomeAssistant, data: dict[str, Any]) -> RachioUser:
    """Validate the user input allows us to connect."""
    client = RachioCatalogClient(async_get_clientsession(hass), data[CONF_API_KEY])
    user = await client.async_get_user_info()
    if not user.id:
        raise AuthError("Rachio did not return a user for this API key")
    return user


class RachioConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Rachio Smart Hose Timer."""

    VERSION = 1

    @staticmethod
    @callback
    def async_get_options_flow(
        config_entry: config_entries.ConfigEntry,
    ) -> RachioOptionsFlow:
        return RachioOptionsFlow()

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Handle the initial step."""
        errors = {}

        if user_input is not None:
            try:
                user = await validate_input(self.hass, user_input)
            except AuthError:
                errors["base"] = "invalid_auth"
            except TransportError as err:
                if err.status == 429:
                    _LOGGER.error("Rate limited by Rachio API - please wait a few minutes and try again")
                    errors["base"] = "rate_limit"
                else:
                    _LOGGER.error("Failed to connect to Rachio: %s", err)
                    errors["base"] = "cannot_connect"
            except Exception:  # noqa: BLE001
                _LOGGER.exception("Unexpected error validating Rachio API key")
                errors["base"] = "unknown"
            else:
                await self.async_set_unique_id(user.id)
                self._abort_if_unique_id_configured()
                return self.async_create_entry(
                    title=f"{DEFAULT_NAME} ({user.username or user.id})",
                    data=user_input,
                )

        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema({
                vol.Required(CONF_API_KEY): str,
            }),
            errors=errors,
        )


class RachioOptionsFlow(config_entries.OptionsFlow):
    """Change the API key or the default watering duration."""

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        if user_input is not None:
            # A cleared key field is omitted by the frontend
            return self.async_create_entry(
                title="",
                data={
                    CONF_API_KEY: user_input.get(CONF_API_KEY, ""),
                    CONF_DURATION: user_input.get(CONF_DURATION, DEFAULT_DURATION),
                },
            )

        entry = self.config_entry
        current_key = entry.options.get(CONF_API_KEY, entry.data.get(CONF_API_KEY, ""))
        return self.async_show_form(
            step_id="init",
            data_schema=vol.Schema({
                vol.Optional(CONF_API_KEY, description={"suggested_value": current_key}): str,
                vol.Optional(
                    CONF_DURATION,
                    default=entry.options.get(CONF_DURATION, DEFAULT_DURATION),
                ): vol.All(vol.Coerce(int), vol.Range(min=MIN_DURATION, max=MAX_DURATION)),
            }),
        )
