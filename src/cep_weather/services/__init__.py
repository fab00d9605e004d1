"""
cep_weather.services

Request pipelines for the two services.

Responsibilities:
- Gateway: validate -> geocode -> delegate -> aggregate.
- Downstream: validate -> geocode -> weather -> convert.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services are framework-agnostic: HTTP mapping lives in `cep_weather.api`.
