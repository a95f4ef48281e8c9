"""Fixture loading helpers and fakes for offline tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

FIXTURES_DIR = Path(__file__).resolve().parent


def load_fixture(name: str) -> Any:
    """Load a JSON fixture file by name."""
    path = FIXTURES_DIR / name
    if not path.exists():
        raise FileNotFoundError(f"Fixture not found: {path}")
    return json.loads(path.read_text())


class FakeLLMClient:
    """Deterministic stand-in for the real LLM client.

    Returns ``response`` for every call, or raises ``error`` when given.
    Every call is recorded in ``calls``.
    """

    def __init__(self, response: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self._response = response or {}
        self._error = error
        self.calls: List[Dict[str, Any]] = []

    def complete_json(
        self, system_prompt: str, user_message: str, *, use_web_search: bool = True
    ) -> Tuple[Dict[str, Any], str]:
        self.calls.append({
            "system_prompt": system_prompt,
            "user_message": user_message,
            "use_web_search": use_web_search,
        })
        if self._error is not None:
            raise self._error
        return self._response, json.dumps(self._response)
