"""Tests for the Rachio catalog and valve clients."""
from __future__ import annotations

import aiohttp
import pytest

from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from custom_components.rachio_hose_timer.api import RachioCatalogClient, RachioValveClient
from custom_components.rachio_hose_timer.errors import (
    AuthError,
    CommandError,
    MalformedResponseError,
    TransportError,
)
from custom_components.rachio_hose_timer.models import BaseStation, Valve

from .conftest import API_KEY, PERSON_URL, START_URL, STOP_URL, stations_url, valves_url

STATION = BaseStation(id="s1", serial_number="SN-s1")


async def test_resolve_user_sends_bearer_token(hass: HomeAssistant, aioclient_mock) -> None:
    aioclient_mock.get(PERSON_URL, json={"id": "u1", "username": "gardener"})
    client = RachioCatalogClient(async_get_clientsession(hass), API_KEY)

    assert await client.async_resolve_user() == "u1"
    assert aioclient_mock.call_count == 1
    headers = aioclient_mock.mock_calls[0][3]
    assert headers["Authorization"] == f"Bearer {API_KEY}"


async def test_user_info_without_id(hass: HomeAssistant, aioclient_mock) -> None:
    aioclient_mock.get(PERSON_URL, json={"username": "gardener"})
    client = RachioCatalogClient(async_get_clientsession(hass), API_KEY)

    user = await client.async_get_user_info()
    assert user.id == ""
    assert user.username == "gardener"


async def test_missing_key_raises_without_request(hass: HomeAssistant, aioclient_mock) -> None:
    client = RachioCatalogClient(async_get_clientsession(hass), "")

    with pytest.raises(AuthError):
        await client.async_resolve_user()
    assert aioclient_mock.call_count == 0


@pytest.mark.parametrize("status", [401, 403])
async def test_rejected_key(hass: HomeAssistant, aioclient_mock, status: int) -> None:
    aioclient_mock.get(PERSON_URL, status=status)
    client = RachioCatalogClient(async_get_clientsession(hass), API_KEY)

    with pytest.raises(AuthError):
        await client.async_resolve_user()


async def test_server_error(hass: HomeAssistant, aioclient_mock) -> None:
    aioclient_mock.get(stations_url("u1"), status=503)
    client = RachioCatalogClient(async_get_clientsession(hass), API_KEY)

    with pytest.raises(TransportError) as err:
        await client.async_list_base_stations("u1")
    assert err.value.status == 503
    assert not isinstance(err.value, MalformedResponseError)


async def test_rate_limited(hass: HomeAssistant, aioclient_mock) -> None:
    aioclient_mock.get(
        stations_url("u1"),
        status=429,
        headers={"X-RateLimit-Limit": "1700", "X-RateLimit-Remaining": "0"},
    )
    client = RachioCatalogClient(async_get_clientsession(hass), API_KEY)

    with pytest.raises(TransportError) as err:
        await client.async_list_base_stations("u1")
    assert err.value.status == 429


async def test_network_error(hass: HomeAssistant, aioclient_mock) -> None:
    aioclient_mock.get(valves_url("s1"), exc=aiohttp.ClientConnectionError())
    client = RachioCatalogClient(async_get_clientsession(hass), API_KEY)

    with pytest.raises(TransportError):
        await client.async_list_valves(STATION)


async def test_list_base_stations(hass: HomeAssistant, aioclient_mock) -> None:
    aioclient_mock.get(
        stations_url("u1"),
        json={"baseStations": [{"id": "s1", "serialNumber": "ABC"}, {"id": "s2"}]},
    )
    client = RachioCatalogClient(async_get_clientsession(hass), API_KEY)

    stations = await client.async_list_base_stations("u1")
    assert stations == [
        BaseStation(id="s1", serial_number="ABC"),
        BaseStation(id="s2", serial_number="s2"),
    ]


async def test_list_base_stations_empty(hass: HomeAssistant, aioclient_mock) -> None:
    aioclient_mock.get(stations_url("u1"), json={})
    client = RachioCatalogClient(async_get_clientsession(hass), API_KEY)

    assert await client.async_list_base_stations("u1") == []


async def test_list_valves(hass: HomeAssistant, aioclient_mock) -> None:
    aioclient_mock.get(
        valves_url("s1"),
        json={"valves": [{"id": "v1", "name": "Front Yard"}, {"id": "v2"}]},
    )
    client = RachioCatalogClient(async_get_clientsession(hass), API_KEY)

    valves = await client.async_list_valves(STATION)
    assert valves == [
        Valve(id="v1", name="Front Yard", base_station_id="s1", base_station_serial="SN-s1"),
        Valve(id="v2", name="Valve v2", base_station_id="s1", base_station_serial="SN-s1"),
    ]


@pytest.mark.parametrize(
    "payload",
    [
        {"valves": "v1"},
        {"valves": ["v1"]},
        {"valves": [{"name": "No id"}]},
        {"valves": [{"id": 42, "name": "Numeric id"}]},
        ["v1"],
    ],
)
async def test_malformed_valves(hass: HomeAssistant, aioclient_mock, payload) -> None:
    aioclient_mock.get(valves_url("s1"), json=payload)
    client = RachioCatalogClient(async_get_clientsession(hass), API_KEY)

    with pytest.raises(MalformedResponseError):
        await client.async_list_valves(STATION)


async def test_invalid_json(hass: HomeAssistant, aioclient_mock) -> None:
    aioclient_mock.get(PERSON_URL, text="<html>maintenance</html>")
    client = RachioCatalogClient(async_get_clientsession(hass), API_KEY)

    with pytest.raises(MalformedResponseError):
        await client.async_resolve_user()


async def test_start_watering_default_duration(hass: HomeAssistant, aioclient_mock) -> None:
    aioclient_mock.put(START_URL)
    client = RachioValveClient(async_get_clientsession(hass), API_KEY)

    await client.async_start_watering("v1")

    assert aioclient_mock.call_count == 1
    method, url, data, _ = aioclient_mock.mock_calls[0]
    assert method.upper() == "PUT"
    assert str(url) == START_URL
    assert data == {"valveId": "v1", "durationSeconds": 1800}


async def test_stop_watering_has_no_duration(hass: HomeAssistant, aioclient_mock) -> None:
    aioclient_mock.put(STOP_URL)
    client = RachioValveClient(async_get_clientsession(hass), API_KEY)

    await client.async_stop_watering("v1")

    assert aioclient_mock.call_count == 1
    _, url, data, _ = aioclient_mock.mock_calls[0]
    assert str(url) == STOP_URL
    assert data == {"valveId": "v1"}


async def test_rejected_command(hass: HomeAssistant, aioclient_mock) -> None:
    aioclient_mock.put(START_URL, status=404)
    client = RachioValveClient(async_get_clientsession(hass), API_KEY)

    with pytest.raises(CommandError) as err:
        await client.async_start_watering("unknown")
    assert isinstance(err.value.__cause__, TransportError)


async def test_command_without_key(hass: HomeAssistant, aioclient_mock) -> None:
    client = RachioValveClient(async_get_clientsession(hass), None)

    with pytest.raises(CommandError) as err:
        await client.async_stop_watering("v1")
    assert isinstance(err.value.__cause__, AuthError)
    assert aioclient_mock.call_count == 0
