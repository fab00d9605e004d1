"""
cep_weather.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for both services (gateway and downstream).
- Hide the weather provider credential from repr/logging.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    One settings model for both processes; `service` selects which app the
    entrypoint builds.
    """

    model_config = SettingsConfigDict(
        env_prefix="CEPW_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service: Literal["gateway", "downstream"] = "gateway"
    # Both default per role (see `_role_defaults`) unless set explicitly.
    service_name: str = "cep-weather-gateway"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 3333

    # Outbound providers
    geocode_base_url: str = "http://viacep.com.br"
    weather_base_url: str = "http://api.weatherapi.com"
    weather_api_key: str = Field(
        default="",
        repr=False,
        validation_alias=AliasChoices("CEPW_WEATHER_API_KEY", "WEATHER_API_KEY"),
    )

    # Gateway -> downstream hop
    downstream_base_url: str = "http://service_b:4444"

    # Tracing; an empty endpoint keeps spans in-process only.
    otlp_endpoint: str = "otel-collector:4317"

    # Off: malformed JSON decodes to zero values, as the services always did.
    strict_decoding: bool = False

    @model_validator(mode="after")
    def _role_defaults(self) -> Settings:
        name, port = _ROLE_DEFAULTS[self.service]
        if "service_name" not in self.model_fields_set:
            self.service_name = name
        if "api_port" not in self.model_fields_set:
            self.api_port = port
        return self


_ROLE_DEFAULTS: dict[str, tuple[str, int]] = {
    "gateway": ("cep-weather-gateway", 3333),
    "downstream": ("cep-weather-downstream", 4444),
}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# CEPW_SERVICE=downstream alone is enough to start the downstream process on 4444,
# where `downstream_base_url` expects it.
