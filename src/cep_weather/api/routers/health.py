"""
cep_weather.api.routers.health

Health and readiness endpoints (mounted on both services).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from cep_weather.api.deps import tracing_from_app
from cep_weather.observability.tracing import Tracing

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(tracing: Tracing = Depends(tracing_from_app)) -> dict[str, str]:
    # Ready once the lifespan has started the tracer provider.
    return {"status": "ready" if tracing.started else "starting"}
