"""Typed views of Rachio API payloads."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import MalformedResponseError


def _require_id(item: Any, kind: str) -> str:
    if not isinstance(item, dict):
        raise MalformedResponseError(f"Expected a {kind} object, got {type(item).__name__}")
    item_id = item.get("id")
    if not isinstance(item_id, str) or not item_id:
        raise MalformedResponseError(f"{kind} without a valid id: {item!r}")
    return item_id


def _list_field(payload: Any, key: str) -> list[Any]:
    """Return payload[key] as a list; a missing key is an empty list."""
    if not isinstance(payload, dict):
        raise MalformedResponseError(f"Expected an object holding '{key}', got {type(payload).__name__}")
    items = payload.get(key)
    if items is None:
        return []
    if not isinstance(items, list):
        raise MalformedResponseError(f"'{key}' is not a list")
    return items


@dataclass(frozen=True)
class RachioUser:
    """The person that owns the API key."""

    id: str
    username: str | None = None

    @classmethod
    def from_api(cls, payload: Any) -> RachioUser:
        if not isinstance(payload, dict):
            raise MalformedResponseError("Person info is not an object")
        user_id = payload.get("id")
        if user_id is not None and not isinstance(user_id, str):
            raise MalformedResponseError(f"Person id is not a string: {user_id!r}")
        return cls(id=user_id or "", username=payload.get("username"))


@dataclass(frozen=True)
class BaseStation:
    """A Smart Hose Timer hub."""

    id: str
    serial_number: str

    @classmethod
    def from_api(cls, item: Any) -> BaseStation:
        station_id = _require_id(item, "base station")
        return cls(id=station_id, serial_number=item.get("serialNumber") or station_id)

    @classmethod
    def list_from_api(cls, payload: Any) -> list[BaseStation]:
        return [cls.from_api(item) for item in _list_field(payload, "baseStations")]


@dataclass(frozen=True)
class Valve:
    """A single hose timer valve. The id is stable across discovery runs."""

    id: str
    name: str
    base_station_id: str
    base_station_serial: str

    @classmethod
    def from_api(cls, item: Any, station: BaseStation) -> Valve:
        valve_id = _require_id(item, "valve")
        return cls(
            id=valve_id,
            name=item.get("name") or f"Valve {valve_id}",
            base_station_id=station.id,
            base_station_serial=station.serial_number,
        )

    @classmethod
    def list_from_api(cls, payload: Any, station: BaseStation) -> list[Valve]:
        return [cls.from_api(item, station) for item in _list_field(payload, "valves")]
