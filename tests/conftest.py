"""
tests.conftest

Shared fixtures: fake providers, in-memory span capture and test settings.
"""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from cep_weather.observability.tracing import Tracing
from cep_weather.settings import Settings
from tests.fakes import (
    DOWNSTREAM_HOST,
    GEOCODE_HOST,
    WEATHER_HOST,
    RoutingTransport,
    geocode_handler,
    weather_handler,
)


@pytest.fixture
def calls() -> list[httpx.Request]:
    return []


@pytest.fixture
def providers(calls: list[httpx.Request]) -> RoutingTransport:
    return RoutingTransport(
        {
            GEOCODE_HOST: httpx.MockTransport(geocode_handler(calls)),
            WEATHER_HOST: httpx.MockTransport(weather_handler(calls)),
        }
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        env="test",
        geocode_base_url=f"http://{GEOCODE_HOST}",
        weather_base_url=f"http://{WEATHER_HOST}",
        weather_api_key="test-key",
        downstream_base_url=f"http://{DOWNSTREAM_HOST}",
        otlp_endpoint="",
    )


@pytest.fixture
def exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def make_tracing(exporter: InMemorySpanExporter) -> Callable[[str], Tracing]:
    def make(service_name: str) -> Tracing:
        return Tracing(service_name=service_name, span_processor=SimpleSpanProcessor(exporter))

    return make


# --- Module Notes -----------------------------------------------------------
# Every outbound request made through the fake providers is appended to `calls`,
# so tests can assert that validation failures never reach the network.
