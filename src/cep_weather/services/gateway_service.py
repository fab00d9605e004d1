"""
cep_weather.services.gateway_service

Gateway pipeline: validate -> geocode -> delegate to downstream -> aggregate.

Responsibilities:
- Resolve the city locally (the downstream service resolves it again on its own).
- Delegate the temperature lookup, injecting the delegation span's context into
  the outbound headers so both services share one trace.
- Merge the locally resolved city with the downstream temperatures.
"""

from __future__ import annotations

from dataclasses import dataclass

from opentelemetry.context import Context

from cep_weather.clients.downstream import DownstreamClient
from cep_weather.clients.errors import UpstreamError
from cep_weather.clients.geocode import GeocodeClient
from cep_weather.domain.cep import validate_cep
from cep_weather.domain.temperature import Temperatures
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import Tracing, trace_id_of

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CityWeather:
    city: str
    temperatures: Temperatures


class GatewayService:
    def __init__(
        self,
        *,
        geocode: GeocodeClient,
        downstream: DownstreamClient,
        tracing: Tracing,
    ) -> None:
        self._geocode = geocode
        self._downstream = downstream
        self._tracing = tracing

    async def city_weather(self, cep: str, *, context: Context) -> CityWeather:
        with self._tracing.span("gateway.lookup_cep", parent=context) as ctx:
            req_log = log.bind(trace_id=trace_id_of(ctx), cep=cep)
            validate_cep(cep)

            try:
                city = await self._geocode.city_for(cep)
            except UpstreamError as e:
                req_log.warning("geocode_failed", error=e.message, kind=type(e).__name__)
                raise
            req_log.info("city_resolved", city=city)

            with self._tracing.span("gateway.fetch_temperature", parent=ctx) as delegate_ctx:
                carrier = self._tracing.inject(delegate_ctx)
                try:
                    temps = await self._downstream.temperatures_for(cep, headers=carrier)
                except UpstreamError as e:
                    req_log.warning("delegation_failed", error=e.message, kind=type(e).__name__)
                    raise

            req_log.info("temperature_resolved", city=city, temp_c=temps.celsius)
            # City always comes from this service's own lookup, not the downstream one.
            return CityWeather(city=city, temperatures=temps)
