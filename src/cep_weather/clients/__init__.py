"""
cep_weather.clients

Outbound HTTP client package.

Responsibilities:
- Geocode (ViaCEP) and weather (WeatherAPI) provider clients.
- Gateway-side client for the downstream temperature service.
- The shared error taxonomy every client raises.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services depend on these boundaries, never on httpx directly.
