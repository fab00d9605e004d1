"""
tests.test_smoke

Minimal smoke tests to validate both services can boot and serve core endpoints.

Responsibilities:
- Ensure each FastAPI app starts and its health/readiness endpoints answer.
- Ensure request ids are generated or echoed back.
"""

from __future__ import annotations

import httpx
import pytest

from cep_weather.api.app import create_downstream_app, create_gateway_app
from cep_weather.settings import Settings


@pytest.mark.asyncio
@pytest.mark.parametrize("factory", [create_gateway_app, create_downstream_app])
async def test_health_endpoints(factory, settings, make_tracing) -> None:
    tracing = make_tracing("smoke")
    app = factory(settings=settings, tracing=tracing)

    # httpx ASGITransport does not manage lifespan automatically; do it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.get("/healthz")
            assert r.status_code == 200
            assert r.json()["status"] == "ok"

            r = await client.get("/readyz")
            assert r.status_code == 200
            assert r.json()["status"] == "ready"

            r = await client.get("/healthz", headers={"x-request-id": "req-123"})
            assert r.headers["x-request-id"] == "req-123"

    # Lifespan shutdown tears the tracer provider down.
    assert not tracing.started


def test_default_settings_point_at_real_providers() -> None:
    s = Settings(_env_file=None)
    assert s.geocode_base_url == "http://viacep.com.br"
    assert s.weather_base_url == "http://api.weatherapi.com"
    assert s.downstream_base_url == "http://service_b:4444"
    assert "weather_api_key" not in repr(s)


def test_weather_key_read_from_plain_env(monkeypatch) -> None:
    monkeypatch.setenv("WEATHER_API_KEY", "from-env")
    assert Settings(_env_file=None).weather_api_key == "from-env"


@pytest.mark.parametrize(
    ("role", "name", "port"),
    [("gateway", "cep-weather-gateway", 3333), ("downstream", "cep-weather-downstream", 4444)],
)
def test_role_selects_default_name_and_port(monkeypatch, role, name, port) -> None:
    monkeypatch.setenv("CEPW_SERVICE", role)
    s = Settings(_env_file=None)

    assert (s.service, s.service_name, s.api_port) == (role, name, port)


def test_explicit_name_and_port_win_over_role_defaults(monkeypatch) -> None:
    monkeypatch.setenv("CEPW_SERVICE", "downstream")
    monkeypatch.setenv("CEPW_API_PORT", "8080")
    s = Settings(_env_file=None, service_name="weather-b")

    assert (s.service_name, s.api_port) == ("weather-b", 8080)


# --- Module Notes -----------------------------------------------------------
# Provider calls are covered in test_downstream_api / test_gateway_api with fakes.
