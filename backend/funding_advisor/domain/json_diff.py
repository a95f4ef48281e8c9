"""Structural diff of two JSON documents.

Both sides are flattened into ``path → canonical string`` maps and compared
path by path. Paths start at ``$`` and use ``.key`` for object members and
``[i]`` for array items::

    >>> diff({"a": 1, "b": [1, 2]}, {"a": "1", "b": [1]})
    [JsonChange(path='$.a', from_value='1', to_value='"1"'),
     JsonChange(path='$.b[1]', from_value='2', to_value='undefined')]

Scalars are canonicalised with their JSON serialization, so the number ``1``
and the string ``"1"`` are different values. Empty containers are leaves
(``"[]"`` / ``"{}"``) so that emptying a list is visible as a change.

The routine knows nothing about the recommendation schema; any JSON value
works on either side.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List

ROOT_PATH = "$"


class _Undefined:
    """Marker for "no value at this path" (distinct from JSON null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


@dataclass(frozen=True)
class JsonChange:
    path: str
    from_value: str
    to_value: str


def canonical_scalar(value: Any) -> str:
    """JSON-serialize a scalar; integral floats render like integers."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return json.dumps(value, ensure_ascii=False)


def flatten(value: Any, path: str = ROOT_PATH) -> Dict[str, str]:
    """Flatten a JSON value into an ordered ``path → canonical`` mapping."""
    out: Dict[str, str] = {}
    _flatten_into(value, path, out)
    return out


def _flatten_into(value: Any, path: str, out: Dict[str, str]) -> None:
    if value is UNDEFINED:
        out[path] = "undefined"
    elif value is None:
        out[path] = "null"
    elif isinstance(value, (list, tuple)):
        if not value:
            out[path] = "[]"
            return
        for index, item in enumerate(value):
            _flatten_into(item, f"{path}[{index}]", out)
    elif isinstance(value, dict):
        if not value:
            out[path] = "{}"
            return
        for key, item in value.items():
            _flatten_into(item, f"{path}.{key}", out)
    else:
        out[path] = canonical_scalar(value)


def diff(before: Any, after: Any) -> List[JsonChange]:
    """Return one change per path whose canonical value differs.

    A path present on one side only is compared against ``"undefined"``.
    Paths from ``before`` come first, then paths that only exist in ``after``;
    callers should not depend on this order.
    """
    before_flat = flatten(before)
    after_flat = flatten(after)

    paths = list(before_flat)
    paths.extend(p for p in after_flat if p not in before_flat)

    changes: List[JsonChange] = []
    for path in paths:
        old = before_flat.get(path, "undefined")
        new = after_flat.get(path, "undefined")
        if old != new:
            changes.append(JsonChange(path=path, from_value=old, to_value=new))
    return changes
