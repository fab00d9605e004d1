"""
cep_weather.api.errors

Mapping from domain/client exceptions to HTTP responses.

Responsibilities:
- 422 for CEPs that are not eight characters.
- 404 for every outbound failure (transport, status or missing data).
- Plain-text bodies holding only the error message.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.requests import ClientDisconnect
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_ENTITY,
)

from cep_weather.api.schemas import InvalidRequestBody
from cep_weather.clients.errors import UpstreamError
from cep_weather.domain.cep import InvalidZipcode
from cep_weather.observability.logging import get_logger

log = get_logger(__name__)

# nginx's "client closed request"; nobody is left to read it.
CLIENT_CLOSED_REQUEST = 499


async def _invalid_zipcode(_: Request, exc: InvalidZipcode) -> PlainTextResponse:
    return PlainTextResponse(str(exc), status_code=HTTP_422_UNPROCESSABLE_ENTITY)


async def _upstream_error(_: Request, exc: UpstreamError) -> PlainTextResponse:
    # Provider unreachable and "no match" look the same to the end client.
    return PlainTextResponse(exc.message, status_code=HTTP_404_NOT_FOUND)


async def _invalid_body(_: Request, exc: InvalidRequestBody) -> PlainTextResponse:
    return PlainTextResponse(str(exc), status_code=HTTP_400_BAD_REQUEST)


async def _client_disconnect(_: Request, __: ClientDisconnect) -> Response:
    log.info("client_disconnected")
    return Response(status_code=CLIENT_CLOSED_REQUEST)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvalidZipcode, _invalid_zipcode)  # type: ignore[arg-type]
    app.add_exception_handler(UpstreamError, _upstream_error)  # type: ignore[arg-type]
    app.add_exception_handler(InvalidRequestBody, _invalid_body)  # type: ignore[arg-type]
    app.add_exception_handler(ClientDisconnect, _client_disconnect)  # type: ignore[arg-type]
