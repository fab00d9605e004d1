"""
cep_weather.clients.downstream

Gateway-side client for the downstream temperature service.

Responsibilities:
- Delegate one CEP to `GET {downstream}/?cep=...` carrying trace headers.
- Decode `{temp_C, temp_F, temp_K}`; leniently by default, strictly on request.

Lenient mode treats every answer, whatever its status, as a body to decode: a
plain-text error page decodes to zero temperatures and the gateway still answers
200. Strict mode turns non-2xx answers and undecodable bodies into errors.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from cep_weather.clients.errors import (
    NotFoundError,
    TransportError,
    UpstreamStatusError,
    transport_message,
)
from cep_weather.domain.temperature import Temperatures

_FIELDS = ("temp_C", "temp_F", "temp_K")


class DownstreamClient:
    """
    No auth between the two services; the only extra headers are the trace carrier.
    """

    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        base_url: str,
        strict_decoding: bool = False,
    ) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._strict = strict_decoding

    async def temperatures_for(self, cep: str, *, headers: Mapping[str, str]) -> Temperatures:
        try:
            r = await self._http.get(
                f"{self._base_url}/",
                params={"cep": cep},
                headers=dict(headers),
            )
        except httpx.HTTPError as e:
            raise TransportError(transport_message(e)) from e

        if r.is_error and self._strict:
            # Downstream errors are plain text; relay its message as-is.
            message = r.text.strip() or r.reason_phrase
            raise UpstreamStatusError(message, status_code=r.status_code)

        return self._decode(r)

    def _decode(self, r: httpx.Response) -> Temperatures:
        try:
            payload: Any = r.json()
        except ValueError as e:
            if self._strict:
                raise NotFoundError("invalid downstream response") from e
            payload = {}

        if not isinstance(payload, dict):
            if self._strict:
                raise NotFoundError("invalid downstream response")
            payload = {}

        values = [_number(payload.get(k)) for k in _FIELDS]
        if self._strict and any(v is None for v in values):
            raise NotFoundError("invalid downstream response")

        # Lenient mode: absent or non-numeric fields decode as zero.
        c, f, k = (v if v is not None else 0.0 for v in values)
        return Temperatures(celsius=c, fahrenheit=f, kelvin=k)


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)
