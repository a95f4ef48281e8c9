"""Identifier coercion for ids arriving from JSON bodies and the CLI."""

import math
import re
from typing import Any

from funding_advisor.domain.errors import InvalidInputError

_INTEGER_TEXT = re.compile(r"-?[0-9]+")


def coerce_id(raw: Any, label: str) -> int:
    """Accept ints, integral floats and digit strings; anything else is InvalidInput.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if isinstance(raw, bool) or raw is None:
        raise InvalidInputError(f"{label} must be an integer")

    if isinstance(raw, int):
        return raw

    if isinstance(raw, float):
        if math.isfinite(raw) and raw.is_integer():
            return int(raw)
        raise InvalidInputError(f"{label} must be an integer")

    if isinstance(raw, str):
        text = raw.strip()
        if _INTEGER_TEXT.fullmatch(text):
            return int(text)

    raise InvalidInputError(f"{label} must be an integer")
