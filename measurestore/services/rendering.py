"""Jinja2 table rendering."""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from ..core.errors import RenderError, StartupError
from ..domain.models import Measurement

logger = logging.getLogger(__name__)


def load_template(path: Path) -> str:
    """Read the table template once at startup."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise StartupError(f"Error reading table file: {exc}") from exc


def format_number(value) -> str:
    """Shortest round-trip form of a float with a %g style exponent switch.

    ``21.5``, ``40`` and ``0`` print as-is; exponents below -4 or from 6 up
    switch to ``1e+06`` / ``1.2345675e+06`` / ``1e-05``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"

    sign, digits, exponent = Decimal(repr(value)).as_tuple()
    exp10 = len(digits) + exponent - 1
    digits = "".join(map(str, digits)).rstrip("0")
    prefix = "-" if sign else ""

    if exp10 < -4 or exp10 >= 6:
        mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
        return f"{prefix}{mantissa}e{'+' if exp10 >= 0 else '-'}{abs(exp10):02d}"
    if exp10 < 0:
        return f"{prefix}0.{'0' * (-exp10 - 1)}{digits}"
    whole = digits[: exp10 + 1].ljust(exp10 + 1, "0")
    frac = digits[exp10 + 1 :]
    return f"{prefix}{whole}.{frac}" if frac else f"{prefix}{whole}"


class TableRenderer:
    """Render measurement records through a preloaded template source.

    A template that fails to compile does not stop the service; every
    ``render`` call reports the compile error instead.
    """

    def __init__(self, source: str):
        self.env = Environment(autoescape=True, undefined=StrictUndefined)
        self.env.filters["number"] = format_number
        self._template: Optional[Template] = None
        self._error: Optional[str] = None
        try:
            self._template = self.env.from_string(source)
        except TemplateError as exc:
            self._error = f"template: table: {exc}"
            logger.warning("Table template failed to compile: %s", exc)

    def render(self, records: Sequence[Measurement]) -> str:
        if self._template is None:
            raise RenderError(self._error or "template: table: not loaded")
        try:
            return self._template.render(records=records)
        except TemplateError as exc:
            raise RenderError(f"template: table: {exc}") from exc
