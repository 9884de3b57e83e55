"""Support for Rachio Smart Hose Timer valve switches."""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant.components.switch import SwitchEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.entity_platform import AddEntitiesCallback, async_get_current_platform

from .const import (
    CONF_DURATION,
    DEVICE_TYPE_IRRIGATION_VALVE,
    DOMAIN,
    MANUFACTURER,
    MAX_DURATION,
    MIN_DURATION,
    MODEL_SMART_HOSE_TIMER,
    SERVICE_START_WATERING,
)
from .errors import ConfigurationError
from .models import Valve

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    config_entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the Rachio valve switches from config entry."""
    entry_data = hass.data[DOMAIN][config_entry.entry_id]
    entry_data["registry"].async_bind(
        async_add_entities, lambda valve: RachioValveSwitch(entry_data, valve)
    )

    # Register 'duration' as a parameter for starting a valve with a one-off runtime
    platform = async_get_current_platform()
    platform.async_register_entity_service(
        SERVICE_START_WATERING,
        {
            vol.Required(CONF_DURATION): vol.All(
                vol.Coerce(int), vol.Range(min=MIN_DURATION, max=MAX_DURATION)
            )
        },
        "async_turn_on",
    )


class RachioValveSwitch(SwitchEntity):
    """Representation of a Smart Hose Timer valve.

    The switch does not track watering state: commands are sent to Rachio and
    the valve enforces the runtime.
    """

    _attr_has_entity_name = True
    _attr_assumed_state = True
    _attr_should_poll = False
    _attr_icon = "mdi:water"

    device_type = DEVICE_TYPE_IRRIGATION_VALVE

    def __init__(self, entry_data: dict[str, Any], valve: Valve) -> None:
        """Initialize the valve switch."""
        self._entry_data = entry_data
        self._valve = valve
        self.valve_id = valve.id
        self._attr_name = valve.name
        self._attr_unique_id = valve.id
        self._attr_is_on = None

    @property
    def device_info(self):
        """Return device info for the base station the valve is paired with."""
        return {
            "identifiers": {(DOMAIN, self._valve.base_station_id)},
            "name": f"{MODEL_SMART_HOSE_TIMER} {self._valve.base_station_serial}",
            "model": MODEL_SMART_HOSE_TIMER,
            "manufacturer": MANUFACTURER,
        }

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        return {
            "valve_id": self.valve_id,
            "base_station_serial": self._valve.base_station_serial,
            "device_type": self.device_type,
        }

    @callback
    def async_update_valve(self, valve: Valve) -> None:
        """Pick up catalog changes for the same valve id."""
        self._valve = valve
        if valve.name == self._attr_name:
            return
        _LOGGER.info("Valve %s renamed from %s to %s", valve.id, self._attr_name, valve.name)
        self._attr_name = valve.name
        if self.hass is not None:
            self.async_write_ha_state()

    def _require_valve_id(self) -> str:
        if not self.valve_id:
            raise ConfigurationError("No valve Id has been set")
        return self.valve_id

    async def async_turn_on(self, **kwargs: Any) -> None:
        """Start watering for the given or configured duration."""
        valve_id = self._require_valve_id()
        duration = kwargs.get(CONF_DURATION)
        if duration is None:
            duration = self._entry_data[CONF_DURATION]
        await self._entry_data["valve_client"].async_start_watering(valve_id, duration)

    async def async_turn_off(self, **kwargs: Any) -> None:
        """Stop watering, whatever the last known state."""
        valve_id = self._require_valve_id()
        await self._entry_data["valve_client"].async_stop_watering(valve_id)

    async def async_will_remove_from_hass(self) -> None:
        """Release the valve so a later discovery can add it again."""
        _LOGGER.debug("Releasing device %s", self.valve_id)
        self._entry_data["registry"].async_release(self.valve_id)
