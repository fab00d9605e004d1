"""
cep_weather.api.routers.cep

Gateway endpoint: `POST /cep` with `{"cep": "<8 chars>"}`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from cep_weather.api.deps import gateway_service, settings_from_app, tracing_from_app
from cep_weather.api.disconnect import run_until_disconnect
from cep_weather.api.schemas import CityWeatherResponse, decode_cep_request
from cep_weather.observability.tracing import Tracing
from cep_weather.services.gateway_service import GatewayService
from cep_weather.settings import Settings

router = APIRouter(tags=["gateway"])


@router.post("/cep", response_model=CityWeatherResponse)
async def lookup_cep(
    request: Request,
    service: GatewayService = Depends(gateway_service),
    tracing: Tracing = Depends(tracing_from_app),
    settings: Settings = Depends(settings_from_app),
) -> CityWeatherResponse:
    # Raw body on purpose: FastAPI's own validation would answer malformed JSON with
    # its JSON 422 instead of falling through to the CEP length check.
    body = decode_cep_request(await request.body(), strict=settings.strict_decoding)
    context = tracing.extract(request.headers)

    result = await run_until_disconnect(
        request, lambda: service.city_weather(body.cep, context=context)
    )
    temps = result.temperatures
    return CityWeatherResponse(
        city=result.city,
        temp_C=temps.celsius,
        temp_F=temps.fahrenheit,
        temp_K=temps.kelvin,
    )
