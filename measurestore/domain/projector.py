from __future__ import annotations

from typing import Any, Mapping

from .models import Measurement
from ..core.errors import DecodeError


def _as_string(key: str, value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"error decoding key {key}: cannot decode {type(value).__name__} into a string")
    return value


def _as_float(key: str, value: Any) -> float:
    if value is None:
        return 0.0
    # bool is an int subclass but is never a measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"error decoding key {key}: cannot decode {type(value).__name__} into a float")
    return float(value)


def project_measurement(document: Mapping[str, Any]) -> Measurement:
    """Map a stored document onto the six display fields.

    Missing or null fields take their zero value and unknown fields are
    ignored; a field holding the wrong type raises ``DecodeError``.
    """
    return Measurement(
        time=_as_string("time", document.get("time")),
        latitude=_as_float("latitude", document.get("latitude")),
        longitude=_as_float("longitude", document.get("longitude")),
        temperature=_as_float("temperature", document.get("temperature")),
        humidity=_as_float("humidity", document.get("humidity")),
        brightness=_as_float("brightness", document.get("brightness")),
    )
