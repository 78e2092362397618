from __future__ import annotations

from typing import Any, Dict

from bson import json_util
from bson.errors import BSONError

from ..core.errors import ParseError


def parse_document(raw: bytes) -> Dict[str, Any]:
    """Parse relaxed or canonical MongoDB extended JSON into a document.

    Type tags such as ``{"$oid": ...}`` or ``{"$date": ...}`` come back as
    their BSON types, ready to be handed to the driver.
    """
    try:
        value = json_util.loads(raw)
    except (ValueError, TypeError, BSONError, RecursionError) as exc:
        raise ParseError(f"invalid JSON document: {exc}") from exc

    if not isinstance(value, dict):
        raise ParseError(
            f"invalid JSON document: top-level value must be an object, got {type(value).__name__}"
        )
    return value
