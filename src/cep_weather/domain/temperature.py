from __future__ import annotations

from typing import NamedTuple

# Kelvin offset is 273, not 273.15; existing consumers depend on it.
KELVIN_OFFSET = 273


class Temperatures(NamedTuple):
    celsius: float
    fahrenheit: float
    kelvin: float


def convert(celsius: float) -> Temperatures:
    return Temperatures(
        celsius=celsius,
        fahrenheit=celsius * 1.8 + 32,
        kelvin=celsius + KELVIN_OFFSET,
    )
