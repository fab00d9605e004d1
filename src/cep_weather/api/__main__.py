"""
cep_weather.api.__main__

Entrypoint for `python -m cep_weather.api`.

Responsibilities:
- Load settings.
- Create the app selected by `CEPW_SERVICE` (gateway or downstream).
- Start uvicorn with structlog-compatible logging config.
"""

from __future__ import annotations

import uvicorn

from cep_weather.api.app import create_downstream_app, create_gateway_app
from cep_weather.settings import get_settings


def main() -> None:
    settings = get_settings()
    if settings.service == "downstream":
        app = create_downstream_app(settings=settings)
    else:
        app = create_gateway_app(settings=settings)

    # uvicorn handles SIGINT/SIGTERM and runs the lifespan shutdown (tracer flush).
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,  # structlog
    )


if __name__ == "__main__":
    main()
