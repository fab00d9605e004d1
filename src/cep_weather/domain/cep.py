"""
cep_weather.domain.cep

Postal code (CEP) validation shared by both services.
"""

from __future__ import annotations

CEP_LENGTH = 8


class InvalidZipcode(ValueError):
    """Raised when a CEP is not exactly eight characters long."""

    def __init__(self, cep: str) -> None:
        super().__init__("invalid zipcode")
        self.cep = cep


def validate_cep(cep: str) -> str:
    # Length only; digits/hyphens are left for the geocode provider to reject.
    if len(cep) != CEP_LENGTH:
        raise InvalidZipcode(cep)
    return cep
