"""
cep_weather.services.downstream_service

Downstream pipeline: CEP -> city -> Celsius reading -> three scales.

Responsibilities:
- Validate the CEP before any outbound call.
- Resolve the city and the current temperature, one attempt each, in order.
- Record an outer span for the whole lookup and an inner span for the
  weather fetch + conversion, both under the caller-supplied context.
"""

from __future__ import annotations

from opentelemetry.context import Context

from cep_weather.clients.errors import UpstreamError
from cep_weather.clients.geocode import GeocodeClient
from cep_weather.clients.weather import WeatherClient
from cep_weather.domain.cep import validate_cep
from cep_weather.domain.temperature import Temperatures, convert
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import Tracing, trace_id_of

log = get_logger(__name__)


class DownstreamService:
    def __init__(
        self,
        *,
        geocode: GeocodeClient,
        weather: WeatherClient,
        tracing: Tracing,
    ) -> None:
        self._geocode = geocode
        self._weather = weather
        self._tracing = tracing

    async def temperatures(self, cep: str, *, context: Context) -> Temperatures:
        # `context` is whatever the inbound headers carried (possibly empty -> new trace).
        with self._tracing.span("downstream.lookup_cep", parent=context) as ctx:
            req_log = log.bind(trace_id=trace_id_of(ctx), cep=cep)
            validate_cep(cep)

            try:
                city = await self._geocode.city_for(cep)
            except UpstreamError as e:
                req_log.warning("geocode_failed", error=e.message, kind=type(e).__name__)
                raise
            req_log.info("city_resolved", city=city)

            with self._tracing.span("downstream.fetch_temperature", parent=ctx):
                try:
                    celsius = await self._weather.celsius_for(city)
                except UpstreamError as e:
                    req_log.warning(
                        "weather_failed", city=city, error=e.message, kind=type(e).__name__
                    )
                    raise
                temps = convert(celsius)

            req_log.info("temperature_resolved", city=city, temp_c=temps.celsius)
            return temps
