"""Rachio cloud clients for the Smart Hose Timer catalog and valve commands."""
from __future__ import annotations

import logging

from .auth import RachioAuth
from .const import (
    API_BASE_URL,
    CLOUD_BASE_URL,
    DEFAULT_DURATION,
    PERSON_INFO_ENDPOINT,
    VALVE_LIST_BASE_STATIONS_ENDPOINT,
    VALVE_LIST_VALVES_ENDPOINT,
    VALVE_START,
    VALVE_STOP,
)
from .errors import CommandError, RachioError
from .models import BaseStation, RachioUser, Valve

_LOGGER = logging.getLogger(__name__)


class RachioCatalogClient(RachioAuth):
    """Read the user -> base station -> valve catalog.

    Every call is a single idempotent read. Failures are raised as they happen,
    nothing is retried here.
    """

    async def async_get_user_info(self) -> RachioUser:
        """Get user info from Rachio API."""
        data = await self._request("GET", f"{API_BASE_URL}/{PERSON_INFO_ENDPOINT}")
        return RachioUser.from_api(data)

    async def async_resolve_user(self) -> str:
        """Return the id of the person owning the API key."""
        user = await self.async_get_user_info()
        return user.id

    async def async_list_base_stations(self, user_id: str) -> list[BaseStation]:
        """List the base stations registered to a user."""
        url = f"{CLOUD_BASE_URL}{VALVE_LIST_BASE_STATIONS_ENDPOINT.format(userId=user_id)}"
        data = await self._request("GET", url)
        return BaseStation.list_from_api(data)

    async def async_list_valves(self, station: BaseStation) -> list[Valve]:
        """List the valves paired with a base station."""
        url = f"{CLOUD_BASE_URL}{VALVE_LIST_VALVES_ENDPOINT.format(baseStationId=station.id)}"
        data = await self._request("GET", url)
        return Valve.list_from_api(data, station)


class RachioValveClient(RachioAuth):
    """Start and stop watering on a single valve."""

    async def async_start_watering(
        self, valve_id: str, duration_seconds: int = DEFAULT_DURATION
    ) -> None:
        """Open the valve; the timer itself closes it after the duration."""
        payload = {"valveId": valve_id, "durationSeconds": duration_seconds}
        _LOGGER.info("Starting valve %s for %s seconds", valve_id, duration_seconds)
        await self._async_command(VALVE_START, payload)

    async def async_stop_watering(self, valve_id: str) -> None:
        """Close the valve. Stopping a stopped valve is left to Rachio."""
        _LOGGER.info("Stopping valve %s", valve_id)
        await self._async_command(VALVE_STOP, {"valveId": valve_id})

    async def _async_command(self, endpoint: str, payload: dict) -> None:
        url = f"{CLOUD_BASE_URL}/{endpoint}"
        try:
            await self._request("PUT", url, json_data=payload, parse=False)
        except RachioError as err:
            _LOGGER.error("Error sending %s for valve %s: %s", endpoint, payload["valveId"], err)
            raise CommandError(f"Rachio did not accept {endpoint} for valve {payload['valveId']}") from err
