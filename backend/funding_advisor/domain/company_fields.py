"""Company field catalogue and manual-edit value coercion.

Display-facing metric names (the ``*_guess`` keys produced by the enrichment
prompt) map onto storage columns through ``FIELD_ALIASES``; every other key
must already be an editable column name. Unknown keys resolve to ``None`` and
are ignored by callers.

Usage::

    from funding_advisor.domain.company_fields import coerce_manual_value, resolve_column

    column = resolve_column("funding_need_min_eur_guess")   # "funding_need_min_eur"
    result = coerce_manual_value(column, " 250000 ")
    result.value                                             # 250000
"""

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional

logger = logging.getLogger(__name__)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


# An update key that carries no instruction at all (distinct from None)
MISSING = _Missing()

FIELD_ALIASES: Dict[str, str] = {
    "funding_need_type_guess": "funding_need_type",
    "funding_need_min_eur_guess": "funding_need_min_eur",
    "funding_need_max_eur_guess": "funding_need_max_eur",
    "funding_need_summary_guess": "funding_need_summary",
}

EDITABLE_COLUMNS: FrozenSet[str] = frozenset({
    "name",
    "business_id",
    "website_url",
    "country",
    "city",
    "industry_code",
    "industry_text",
    "employee_count",
    "employee_range",
    "revenue_eur",
    "revenue_range",
    "stage",
    "funding_need_type",
    "funding_need_min_eur",
    "funding_need_max_eur",
    "funding_need_summary",
    "description",
    "tags",
})

NUMERIC_COLUMNS: FrozenSet[str] = frozenset({
    "employee_count",
    "revenue_eur",
    "funding_need_min_eur",
    "funding_need_max_eur",
})

# Columns that must always hold a value
REQUIRED_COLUMNS: FrozenSet[str] = frozenset({"name"})

# Plain decimal or exponent notation, no digit separators
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Columns filled from enrichment metrics: storage column → metrics key
ENRICHMENT_COLUMNS: Dict[str, str] = {
    "business_id": "business_id",
    "website_url": "website_url",
    "country": "country",
    "city": "city",
    "industry_code": "industry_code",
    "industry_text": "industry_text",
    "employee_count": "employee_count",
    "employee_range": "employee_range",
    "revenue_eur": "revenue_eur",
    "revenue_range": "revenue_range",
    "stage": "stage",
    "funding_need_type": "funding_need_type_guess",
    "funding_need_min_eur": "funding_need_min_eur_guess",
    "funding_need_max_eur": "funding_need_max_eur_guess",
    "funding_need_summary": "funding_need_summary_guess",
    "description": "description",
}


def resolve_column(field: str) -> Optional[str]:
    """Map an update key to its storage column, or None when unknown."""
    if field in FIELD_ALIASES:
        return FIELD_ALIASES[field]
    return field if field in EDITABLE_COLUMNS else None


@dataclass(frozen=True)
class CoercedValue:
    """Outcome of coercing one raw update value.

    ``persist`` is False when the value should be skipped; ``error`` is set
    when the value is unusable for the column.
    """

    persist: bool
    value: Any = None
    error: Optional[str] = None


def _number_or_int(number: float) -> Any:
    return int(number) if float(number).is_integer() else number


def _number_to_text(number: Any) -> str:
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def coerce_manual_value(column: str, raw: Any) -> CoercedValue:
    """Coerce a raw manual-edit value for ``column``.

    - MISSING → skip
    - None, empty or whitespace-only string → persist None (error for required columns)
    - numeric columns: finite numbers, or strings that parse as one
    - text columns: trimmed strings; numbers and booleans rendered as text
    """
    if raw is MISSING:
        return CoercedValue(persist=False)

    if raw is None or (isinstance(raw, str) and not raw.strip()):
        if column in REQUIRED_COLUMNS:
            return CoercedValue(persist=False, error=f"{column} cannot be empty")
        return CoercedValue(persist=True, value=None)

    if isinstance(raw, str):
        trimmed = raw.strip()
        if column not in NUMERIC_COLUMNS:
            return CoercedValue(persist=True, value=trimmed)
        if not _NUMBER_RE.fullmatch(trimmed):
            return CoercedValue(persist=False, error=f"Invalid numeric value for {column}")
        number = float(trimmed)
        if not math.isfinite(number):
            return CoercedValue(persist=False, error=f"Invalid numeric value for {column}")
        return CoercedValue(persist=True, value=_number_or_int(number))

    if isinstance(raw, bool):
        if column in NUMERIC_COLUMNS:
            return CoercedValue(persist=False, error=f"Invalid numeric value for {column}")
        return CoercedValue(persist=True, value="true" if raw else "false")

    if isinstance(raw, (int, float)):
        if column in NUMERIC_COLUMNS:
            if not math.isfinite(raw):
                return CoercedValue(persist=False, error=f"Invalid numeric value for {column}")
            return CoercedValue(persist=True, value=raw)
        return CoercedValue(persist=True, value=_number_to_text(raw))

    if column in NUMERIC_COLUMNS:
        return CoercedValue(persist=False, error=f"Invalid numeric value for {column}")
    return CoercedValue(persist=False, error=f"Invalid value for {column}")


def values_equal(previous: Any, candidate: Any) -> bool:
    """Null-aware equality: two nulls are equal, null never equals a value."""
    if previous is None or candidate is None:
        return previous is None and candidate is None
    return previous == candidate


def parse_change_log(raw: Optional[str]) -> List[dict]:
    """Parse a stored change log; unreadable or non-list content reads as []."""
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError) as exc:
        logger.warning("Failed to parse manual_change_log JSON: %s", exc)
        return []
    if not isinstance(parsed, list):
        logger.warning("manual_change_log is not a list (got %s), ignoring", type(parsed).__name__)
        return []
    return parsed
