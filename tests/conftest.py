"""Fixtures for Rachio Smart Hose Timer tests."""
from __future__ import annotations

import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.rachio_hose_timer.const import (
    API_BASE_URL,
    CLOUD_BASE_URL,
    CONF_API_KEY,
    DOMAIN,
    PERSON_INFO_ENDPOINT,
    VALVE_LIST_BASE_STATIONS_ENDPOINT,
    VALVE_LIST_VALVES_ENDPOINT,
    VALVE_START,
    VALVE_STOP,
)

API_KEY = "abc123"
USER_ID = "u1"

PERSON_URL = f"{API_BASE_URL}/{PERSON_INFO_ENDPOINT}"
START_URL = f"{CLOUD_BASE_URL}/{VALVE_START}"
STOP_URL = f"{CLOUD_BASE_URL}/{VALVE_STOP}"


def stations_url(user_id: str) -> str:
    return f"{CLOUD_BASE_URL}{VALVE_LIST_BASE_STATIONS_ENDPOINT.format(userId=user_id)}"


def valves_url(station_id: str) -> str:
    return f"{CLOUD_BASE_URL}{VALVE_LIST_VALVES_ENDPOINT.format(baseStationId=station_id)}"


def mock_catalog(aioclient_mock, stations: dict[str, list[dict]], user_id: str = USER_ID) -> None:
    """Register person, base station and valve responses."""
    aioclient_mock.get(PERSON_URL, json={"id": user_id, "username": "gardener"})
    aioclient_mock.get(
        stations_url(user_id),
        json={
            "baseStations": [
                {"id": station_id, "serialNumber": f"SN-{station_id}"} for station_id in stations
            ]
        },
    )
    for station_id, valves in stations.items():
        aioclient_mock.get(valves_url(station_id), json={"valves": valves})


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations):
    """Load the integration from custom_components."""
    yield


@pytest.fixture
def config_entry(hass) -> MockConfigEntry:
    entry = MockConfigEntry(
        domain=DOMAIN,
        title="Rachio (gardener)",
        data={CONF_API_KEY: API_KEY},
        unique_id=USER_ID,
    )
    entry.add_to_hass(hass)
    return entry


@pytest.fixture
def single_station(aioclient_mock):
    """One base station s1 with valves v1 and v2."""
    mock_catalog(
        aioclient_mock,
        {"s1": [{"id": "v1", "name": "Front Yard"}, {"id": "v2", "name": "Back Yard"}]},
    )
    return aioclient_mock
