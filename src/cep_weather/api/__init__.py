"""
cep_weather.api

API package for the gateway and downstream services.

Responsibilities:
- FastAPI app factories and router modules.
- API-layer dependency wiring, request/response models and error mapping.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: decode + trace extraction + delegation to services.
