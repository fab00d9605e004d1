"""
cep_weather.api.app

FastAPI app factories for the gateway and downstream services.

Responsibilities:
- Build each FastAPI application and register routers/middleware/error handlers.
- Own per-process infrastructure: the shared httpx client and the tracing handle.
- Provide the composition root where clients and services are wired together.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from cep_weather.api.errors import install_exception_handlers
from cep_weather.api.routers.cep import router as cep_router
from cep_weather.api.routers.health import router as health_router
from cep_weather.api.routers.temperature import router as temperature_router
from cep_weather.clients.downstream import DownstreamClient
from cep_weather.clients.geocode import GeocodeClient
from cep_weather.clients.weather import WeatherClient
from cep_weather.observability.logging import configure_logging, get_logger
from cep_weather.observability.middleware import RequestContextMiddleware
from cep_weather.observability.tracing import Tracing
from cep_weather.services.downstream_service import DownstreamService
from cep_weather.services.gateway_service import GatewayService
from cep_weather.settings import Settings

log = get_logger(__name__)

_Wire = Callable[[FastAPI, httpx.AsyncClient, Tracing, Settings], None]


def create_gateway_app(
    *,
    settings: Settings,
    tracing: Tracing | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    def wire(app: FastAPI, http: httpx.AsyncClient, tr: Tracing, s: Settings) -> None:
        app.state.gateway_service = GatewayService(
            geocode=GeocodeClient(http=http, base_url=s.geocode_base_url),
            downstream=DownstreamClient(
                http=http,
                base_url=s.downstream_base_url,
                strict_decoding=s.strict_decoding,
            ),
            tracing=tr,
        )

    app = _build_app(
        title="CEP Weather Gateway",
        settings=settings,
        tracing=tracing,
        transport=transport,
        wire=wire,
    )
    app.include_router(cep_router)
    return app


def create_downstream_app(
    *,
    settings: Settings,
    tracing: Tracing | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    def wire(app: FastAPI, http: httpx.AsyncClient, tr: Tracing, s: Settings) -> None:
        app.state.downstream_service = DownstreamService(
            geocode=GeocodeClient(http=http, base_url=s.geocode_base_url),
            weather=WeatherClient(
                http=http,
                base_url=s.weather_base_url,
                api_key=s.weather_api_key,
            ),
            tracing=tr,
        )

    app = _build_app(
        title="CEP Weather Downstream",
        settings=settings,
        tracing=tracing,
        transport=transport,
        wire=wire,
    )
    app.include_router(temperature_router)
    return app


def _build_app(
    *,
    title: str,
    settings: Settings,
    tracing: Tracing | None,
    transport: httpx.AsyncBaseTransport | None,
    wire: _Wire,
) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    tr = tracing or Tracing(
        service_name=settings.service_name,
        otlp_endpoint=settings.otlp_endpoint,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        tr.init()
        # No explicit timeout: single attempt, transport defaults only.
        async with httpx.AsyncClient(transport=transport) as http:
            wire(app, http, tr, settings)
            log.info("startup", env=settings.env, role=settings.service)
            try:
                yield
            finally:
                tr.shutdown()
                log.info("shutdown")

    app = FastAPI(
        title=title,
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.tracing = tr

    app.add_middleware(RequestContextMiddleware)
    install_exception_handlers(app)
    app.include_router(health_router, tags=["health"])
    return app


# --- Module Notes -----------------------------------------------------------
# The two services share every layer below this module; only the wiring and the
# mounted router differ.
