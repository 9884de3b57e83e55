"""Discover Smart Hose Timer valves reachable with an API key."""
from __future__ import annotations

import asyncio
from collections.abc import Callable
import logging

from aiohttp import ClientSession

from .api import RachioCatalogClient
from .errors import RachioError
from .models import BaseStation, Valve
from .registry import ValveRegistry

_LOGGER = logging.getLogger(__name__)


class ValveDiscovery:
    """Walk user -> base stations -> valves and feed the result to the registry."""

    def __init__(
        self,
        session: ClientSession,
        registry: ValveRegistry,
        catalog_factory: Callable[[ClientSession, str], RachioCatalogClient] = RachioCatalogClient,
    ) -> None:
        self.session = session
        self.registry = registry
        self._catalog_factory = catalog_factory
        self._generation = 0
        self.user_id: str | None = None

    async def async_discover(self, api_key: str | None) -> list[Valve]:
        """Return every valve reachable with the API key.

        A failure while listing any base station fails the whole run.
        """
        _LOGGER.info("Preparing to get a list of Rachio Valves")
        if not api_key:
            _LOGGER.info("Please enter your API key.")
            return []

        catalog = self._catalog_factory(self.session, api_key)

        user_id = await catalog.async_resolve_user()
        if not user_id:
            _LOGGER.warning("Failed to get Rachio user")
            return []
        self.user_id = user_id

        stations = await catalog.async_list_base_stations(user_id)
        if not stations:
            _LOGGER.warning("No Rachio Base Stations found for user %s", user_id)
            return []

        tasks = [
            asyncio.ensure_future(self._async_station_valves(catalog, station))
            for station in stations
        ]
        try:
            per_station = await asyncio.gather(*tasks)
        except BaseException:
            # Sibling listings are abandoned once one station fails
            for task in tasks:
                task.cancel()
            raise

        valves: dict[str, Valve] = {}
        for station_valves in per_station:
            for valve in station_valves:
                if valve.id in valves:
                    _LOGGER.warning("Valve %s reported by more than one base station", valve.id)
                    continue
                valves[valve.id] = valve

        _LOGGER.info("Found %d valves total", len(valves))
        return list(valves.values())

    async def _async_station_valves(
        self, catalog: RachioCatalogClient, station: BaseStation
    ) -> list[Valve]:
        _LOGGER.info("Getting valves for Base Station %s", station.serial_number)
        station_valves = await catalog.async_list_valves(station)
        _LOGGER.info(
            "Found %d valves for Base Station %s", len(station_valves), station.serial_number
        )
        return station_valves

    async def async_run(self, api_key: str | None) -> bool:
        """Discover and register valves; return True if the registry was updated.

        Errors end the run without touching the registry. A run that is
        overtaken by a newer one drops its result.
        """
        self._generation += 1
        generation = self._generation

        try:
            valves = await self.async_discover(api_key)
            if generation != self._generation:
                _LOGGER.debug("Discovery run %d superseded by run %d", generation, self._generation)
                return False
            self.registry.async_reconcile(valves)
        except RachioError as err:
            _LOGGER.error("Rachio valve discovery failed: %s", err)
            return False
        return True
