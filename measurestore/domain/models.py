from __future__ import annotations
from dataclasses import dataclass


# Stored field names, in table column order
MEASUREMENT_FIELDS = ("time", "latitude", "longitude", "temperature", "humidity", "brightness")


@dataclass(frozen=True)
class Measurement:
    time: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    temperature: float = 0.0
    humidity: float = 0.0
    brightness: float = 0.0
