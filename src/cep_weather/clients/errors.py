"""
cep_weather.clients.errors

Error taxonomy for outbound lookups.

Every subclass carries the message that ends up in the client-visible response;
the API layer maps all of them to 404 without distinguishing the kind.
"""

from __future__ import annotations


class UpstreamError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportError(UpstreamError):
    """The outbound call could not be completed."""


class UpstreamStatusError(UpstreamError):
    """The provider answered with a non-success status."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(UpstreamError):
    """The provider answered, but without the value we asked for."""


def transport_message(exc: Exception) -> str:
    # Some httpx errors stringify to "" (e.g. bare timeouts).
    return str(exc) or type(exc).__name__
