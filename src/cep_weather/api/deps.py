"""
cep_weather.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Encapsulate app.state access patterns (settings, tracing, services).
"""

from __future__ import annotations

from fastapi import Request

from cep_weather.observability.tracing import Tracing
from cep_weather.services.downstream_service import DownstreamService
from cep_weather.services.gateway_service import GatewayService
from cep_weather.settings import Settings


def settings_from_app(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def tracing_from_app(request: Request) -> Tracing:
    return request.app.state.tracing  # type: ignore[attr-defined]


def gateway_service(request: Request) -> GatewayService:
    # Built once in the gateway app's lifespan (see `cep_weather.api.app`).
    return request.app.state.gateway_service  # type: ignore[attr-defined]


def downstream_service(request: Request) -> DownstreamService:
    return request.app.state.downstream_service  # type: ignore[attr-defined]
