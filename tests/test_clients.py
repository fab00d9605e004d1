"""
tests.test_clients

Outbound clients against fake providers.

Responsibilities:
- Success paths return the extracted value.
- Each failure kind maps to the right `UpstreamError` subclass and message.
"""

from __future__ import annotations

import httpx
import pytest

from cep_weather.clients.downstream import DownstreamClient
from cep_weather.clients.errors import (
    NotFoundError,
    TransportError,
    UpstreamError,
    UpstreamStatusError,
)
from cep_weather.clients.geocode import GeocodeClient
from cep_weather.clients.weather import WeatherClient
from cep_weather.domain.temperature import Temperatures

from tests.fakes import geocode_handler, refuse, weather_handler


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_geocode_resolves_city(calls: list[httpx.Request]) -> None:
    async with _client(geocode_handler(calls)) as http:
        city = await GeocodeClient(http=http, base_url="http://viacep.test/").city_for("01001000")

    assert city == "São Paulo"
    assert len(calls) == 1
    assert str(calls[0].url) == "http://viacep.test/ws/01001000/json/"


@pytest.mark.asyncio
async def test_geocode_unknown_cep_is_not_found(calls: list[httpx.Request]) -> None:
    async with _client(geocode_handler(calls)) as http:
        with pytest.raises(NotFoundError) as exc:
            await GeocodeClient(http=http, base_url="http://viacep.test").city_for("99999999")

    assert exc.value.message == "can not find zipcode"
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_geocode_empty_locality_is_not_found(calls: list[httpx.Request]) -> None:
    async with _client(geocode_handler(calls, {"01001000": ""})) as http:
        with pytest.raises(NotFoundError):
            await GeocodeClient(http=http, base_url="http://viacep.test").city_for("01001000")


@pytest.mark.asyncio
async def test_geocode_non_200_is_status_error() -> None:
    async with _client(lambda r: httpx.Response(400, text="Bad Request")) as http:
        with pytest.raises(UpstreamStatusError) as exc:
            await GeocodeClient(http=http, base_url="http://viacep.test").city_for("0100100x")

    assert exc.value.status_code == 400
    assert exc.value.message == "can not find zipcode"


@pytest.mark.asyncio
async def test_geocode_transport_failure() -> None:
    async with _client(refuse) as http:
        with pytest.raises(TransportError) as exc:
            await GeocodeClient(http=http, base_url="http://viacep.test").city_for("01001000")

    assert exc.value.message == "connection refused"
    assert isinstance(exc.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_weather_sends_key_and_encoded_city(calls: list[httpx.Request]) -> None:
    async with _client(weather_handler(calls)) as http:
        client = WeatherClient(http=http, base_url="http://weather.test", api_key="secret")
        celsius = await client.celsius_for("São Paulo")

    assert celsius == 25.0
    assert calls[0].url.path == "/v1/current.json"
    assert calls[0].url.params["key"] == "secret"
    assert calls[0].url.params["q"] == "São Paulo"


@pytest.mark.asyncio
async def test_weather_zero_reading_is_accepted(calls: list[httpx.Request]) -> None:
    async with _client(weather_handler(calls, {"Curitiba": 0})) as http:
        client = WeatherClient(http=http, base_url="http://weather.test", api_key="k")
        assert await client.celsius_for("Curitiba") == 0.0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(401, json={"error": {"code": 2006, "message": "API key is invalid."}}),
        httpx.Response(200, json={"current": {}}),
        httpx.Response(200, json={"current": {"temp_c": "hot"}}),
        httpx.Response(200, text="<html>oops</html>"),
    ],
)
async def test_weather_failures_share_message(response: httpx.Response) -> None:
    async with _client(lambda r: response) as http:
        client = WeatherClient(http=http, base_url="http://weather.test", api_key="k")
        with pytest.raises(UpstreamError) as exc:
            await client.celsius_for("São Paulo")

    assert exc.value.message == "can not find weather data"
    assert not isinstance(exc.value, TransportError)


@pytest.mark.asyncio
async def test_downstream_forwards_cep_and_headers() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"temp_C": 25.0, "temp_F": 77.0, "temp_K": 298.0})

    async with _client(handler) as http:
        client = DownstreamClient(http=http, base_url="http://downstream.test")
        temps = await client.temperatures_for("01001000", headers={"traceparent": "00-x"})

    assert temps == Temperatures(25.0, 77.0, 298.0)
    assert seen[0].url.params["cep"] == "01001000"
    assert seen[0].headers["traceparent"] == "00-x"


@pytest.mark.asyncio
async def test_downstream_error_status_decodes_to_zero() -> None:
    # Plain-text error pages do not decode, so the temperatures stay at zero.
    async with _client(lambda r: httpx.Response(404, text="can not find weather data\n")) as http:
        client = DownstreamClient(http=http, base_url="http://downstream.test")
        temps = await client.temperatures_for("01001000", headers={})

    assert temps == Temperatures(0.0, 0.0, 0.0)


@pytest.mark.asyncio
async def test_downstream_error_status_strict_mode_relays_body() -> None:
    async with _client(lambda r: httpx.Response(404, text="can not find weather data\n")) as http:
        client = DownstreamClient(
            http=http, base_url="http://downstream.test", strict_decoding=True
        )
        with pytest.raises(UpstreamStatusError) as exc:
            await client.temperatures_for("01001000", headers={})

    assert exc.value.status_code == 404
    assert exc.value.message == "can not find weather data"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="not json"),
        httpx.Response(200, json=[1, 2, 3]),
        httpx.Response(200, json={"temp_C": "warm"}),
    ],
)
async def test_downstream_malformed_body_decodes_to_zero(response: httpx.Response) -> None:
    async with _client(lambda r: response) as http:
        client = DownstreamClient(http=http, base_url="http://downstream.test")
        temps = await client.temperatures_for("01001000", headers={})

    assert temps == Temperatures(0.0, 0.0, 0.0)


@pytest.mark.asyncio
async def test_downstream_malformed_body_strict_mode() -> None:
    async with _client(lambda r: httpx.Response(200, text="not json")) as http:
        client = DownstreamClient(
            http=http, base_url="http://downstream.test", strict_decoding=True
        )
        with pytest.raises(NotFoundError):
            await client.temperatures_for("01001000", headers={})


@pytest.mark.asyncio
async def test_downstream_unreachable() -> None:
    async with _client(refuse) as http:
        client = DownstreamClient(http=http, base_url="http://downstream.test")
        with pytest.raises(TransportError):
            await client.temperatures_for("01001000", headers={})
