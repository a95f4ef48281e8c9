"""Shared schema helpers: camelCase API envelopes and lenient coercion
for provider output."""

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """API envelope: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def lenient_number(value: Any) -> Optional[float]:
    """Best-effort number from provider output; anything unusable becomes None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        cleaned = value.strip().replace(" ", "").replace(",", "")
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else number
    return None


def lenient_int(value: Any) -> Optional[int]:
    number = lenient_number(value)
    return None if number is None else int(round(number))


def lenient_text(value: Any) -> Optional[str]:
    """Scalars become strings; containers and empty strings become None."""
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None
