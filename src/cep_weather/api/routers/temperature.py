"""
cep_weather.api.routers.temperature

Downstream endpoint: `GET /?cep=<8 chars>`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from cep_weather.api.deps import downstream_service, tracing_from_app
from cep_weather.api.disconnect import run_until_disconnect
from cep_weather.api.schemas import TemperatureResponse
from cep_weather.observability.tracing import Tracing
from cep_weather.services.downstream_service import DownstreamService

router = APIRouter(tags=["downstream"])


@router.get("/", response_model=TemperatureResponse)
async def temperature_for_cep(
    request: Request,
    cep: str = "",
    service: DownstreamService = Depends(downstream_service),
    tracing: Tracing = Depends(tracing_from_app),
) -> TemperatureResponse:
    # Continue the caller's trace when it sent one.
    context = tracing.extract(request.headers)

    temps = await run_until_disconnect(
        request, lambda: service.temperatures(cep, context=context)
    )
    return TemperatureResponse(
        temp_C=temps.celsius,
        temp_F=temps.fahrenheit,
        temp_K=temps.kelvin,
    )
