"""Map discovered valves onto Home Assistant switch entities."""
from __future__ import annotations

from collections.abc import Callable, Iterable
import logging
from typing import Any

from homeassistant.core import callback

from .errors import ConfigurationError
from .models import Valve

_LOGGER = logging.getLogger(__name__)


class ValveRegistry:
    """Own the valve id -> entity mapping for the life of a config entry.

    Reconciliation is additive: a valve that disappears from the Rachio
    catalog keeps its entity until the user removes it.
    """

    def __init__(self) -> None:
        self._devices: dict[str, Any] = {}
        self._add_entities: Callable[[list[Any]], None] | None = None
        self._factory: Callable[[Valve], Any] | None = None

    @property
    def valve_ids(self) -> set[str]:
        return set(self._devices)

    @callback
    def async_bind(
        self,
        add_entities: Callable[[list[Any]], None],
        factory: Callable[[Valve], Any],
    ) -> None:
        """Attach the platform callback used to register new entities."""
        self._add_entities = add_entities
        self._factory = factory

    @callback
    def async_reconcile(self, valves: Iterable[Valve]) -> list[str]:
        """Register new valves in one batch and rename known ones in place."""
        valves = list(valves)
        if not valves:
            return []
        if self._add_entities is None or self._factory is None:
            raise ConfigurationError("Switch platform has not been set up")

        new_entities = []
        added = []
        for valve in valves:
            existing = self._devices.get(valve.id)
            if existing is not None:
                existing.async_update_valve(valve)
                continue
            _LOGGER.info("Adding valve: %s", valve.name)
            entity = self._factory(valve)
            self._devices[valve.id] = entity
            new_entities.append(entity)
            added.append(valve.id)

        if new_entities:
            self._add_entities(new_entities)
        return added

    def get_device(self, valve_id: str) -> Any | None:
        """Return the live entity for a valve id."""
        return self._devices.get(valve_id)

    @callback
    def async_release(self, valve_id: str) -> None:
        """Forget an entity the host is discarding."""
        if self._devices.pop(valve_id, None) is not None:
            _LOGGER.debug("Released valve %s", valve_id)
