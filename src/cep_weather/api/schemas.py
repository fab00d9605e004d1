"""
cep_weather.api.schemas

Request/response bodies for both HTTP surfaces.
"""

from __future__ import annotations

import json
from typing import Any

import pydantic
from pydantic import BaseModel


class CepRequest(BaseModel):
    cep: str = ""


class TemperatureResponse(BaseModel):
    temp_C: float
    temp_F: float
    temp_K: float


class CityWeatherResponse(BaseModel):
    city: str
    temp_C: float
    temp_F: float
    temp_K: float


class InvalidRequestBody(ValueError):
    def __init__(self) -> None:
        super().__init__("invalid request body")


def decode_cep_request(raw: bytes, *, strict: bool) -> CepRequest:
    """
    Strict: the body must be exactly one `CepRequest` document, else 400.

    Lenient (default): read the first JSON value and ignore whatever follows it,
    match the `cep` key case-insensitively (last match wins) and skip non-string
    values. Anything undecodable yields an empty CEP, later rejected with 422.
    """

    if strict:
        try:
            return CepRequest.model_validate_json(raw)
        except pydantic.ValidationError as e:
            raise InvalidRequestBody() from e

    payload = _first_json_value(raw)
    cep = ""
    if isinstance(payload, dict):
        for key, value in payload.items():
            if key.lower() == "cep" and isinstance(value, str):
                cep = value
    return CepRequest(cep=cep)


def _first_json_value(raw: bytes) -> Any:
    try:
        text = raw.decode("utf-8").lstrip()
        value, _ = json.JSONDecoder().raw_decode(text)
    except ValueError:
        # UnicodeDecodeError and JSONDecodeError are both ValueErrors.
        return None
    return value
