"""
cep_weather.clients.geocode

Geocode client: CEP -> city name via the ViaCEP API.
"""

from __future__ import annotations

import httpx

from cep_weather.clients.errors import (
    NotFoundError,
    TransportError,
    UpstreamStatusError,
    transport_message,
)

NOT_FOUND_MESSAGE = "can not find zipcode"


class GeocodeClient:
    def __init__(self, *, http: httpx.AsyncClient, base_url: str) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")

    async def city_for(self, cep: str) -> str:
        # Single attempt; no retry.
        try:
            r = await self._http.get(f"{self._base_url}/ws/{cep}/json/")
        except httpx.HTTPError as e:
            raise TransportError(transport_message(e)) from e

        if r.status_code != httpx.codes.OK:
            raise UpstreamStatusError(NOT_FOUND_MESSAGE, status_code=r.status_code)

        try:
            payload = r.json()
        except ValueError as e:
            raise NotFoundError(NOT_FOUND_MESSAGE) from e

        # Unknown CEPs come back as 200 {"erro": true}, i.e. without "localidade".
        city = payload.get("localidade") if isinstance(payload, dict) else None
        if not isinstance(city, str) or not city:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return city
