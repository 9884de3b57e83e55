"""The Rachio Smart Hose Timer integration."""
from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.const import Platform
from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import RachioValveClient
from .const import CONF_API_KEY, CONF_DURATION, DEFAULT_DURATION, DOMAIN
from .discovery import ValveDiscovery
from .registry import ValveRegistry

_LOGGER = logging.getLogger(__name__)
PLATFORMS: list[Platform] = [Platform.SWITCH]


def get_api_key(entry: ConfigEntry) -> str:
    """Return the API key, preferring the one set in options."""
    return entry.options.get(CONF_API_KEY, entry.data.get(CONF_API_KEY)) or ""


def get_duration(entry: ConfigEntry) -> int:
    return entry.options.get(CONF_DURATION, DEFAULT_DURATION)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Rachio Smart Hose Timer from config entry."""
    api_key = get_api_key(entry)
    session = async_get_clientsession(hass)
    registry = ValveRegistry()
    discovery = ValveDiscovery(session, registry)

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = {
        CONF_API_KEY: api_key,
        CONF_DURATION: get_duration(entry),
        "valve_client": RachioValveClient(session, api_key),
        "registry": registry,
        "discovery": discovery,
    }

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    entry.async_on_unload(entry.add_update_listener(_async_update_listener))

    await discovery.async_run(api_key)
    return True


async def _async_update_listener(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Apply new options; a changed API key triggers a fresh discovery."""
    entry_data = hass.data[DOMAIN][entry.entry_id]
    entry_data[CONF_DURATION] = get_duration(entry)

    api_key = get_api_key(entry)
    if api_key == entry_data[CONF_API_KEY]:
        return

    _LOGGER.info("Rachio API key updated, refreshing valves")
    entry_data[CONF_API_KEY] = api_key
    entry_data["valve_client"] = RachioValveClient(async_get_clientsession(hass), api_key)
    await entry_data["discovery"].async_run(api_key)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    if unload_ok := await hass.config_entries.async_unload_platforms(entry, PLATFORMS):
        hass.data[DOMAIN].pop(entry.entry_id)
    return unload_ok
