"""
cep_weather.clients.weather

Weather client: city name -> current temperature (Celsius) via WeatherAPI.

Responsibilities:
- Call `/v1/current.json` with the configured API key.
- Extract `current.temp_c`; any other shape is a not-found.
"""

from __future__ import annotations

import httpx

from cep_weather.clients.errors import (
    NotFoundError,
    TransportError,
    UpstreamStatusError,
    transport_message,
)

NOT_FOUND_MESSAGE = "can not find weather data"


class WeatherClient:
    def __init__(self, *, http: httpx.AsyncClient, base_url: str, api_key: str) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key

    async def celsius_for(self, city: str) -> float:
        # A missing key is not checked here; the provider rejects it with a non-200.
        try:
            r = await self._http.get(
                f"{self._base_url}/v1/current.json",
                params={"key": self._api_key, "q": city},
            )
        except httpx.HTTPError as e:
            raise TransportError(transport_message(e)) from e

        if r.status_code != httpx.codes.OK:
            raise UpstreamStatusError(NOT_FOUND_MESSAGE, status_code=r.status_code)

        try:
            payload = r.json()
        except ValueError as e:
            raise NotFoundError(NOT_FOUND_MESSAGE) from e

        current = payload.get("current") if isinstance(payload, dict) else None
        temp_c = current.get("temp_c") if isinstance(current, dict) else None
        # bool is an int subclass; reject it explicitly.
        if isinstance(temp_c, bool) or not isinstance(temp_c, (int, float)):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return float(temp_c)
