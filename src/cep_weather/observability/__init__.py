"""
cep_weather.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for consistent log enrichment.
- Explicit tracing handle (span creation and W3C trace-context propagation).
"""

# Package marker.
