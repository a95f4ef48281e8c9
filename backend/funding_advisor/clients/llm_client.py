"""Wrapper around the Anthropic Claude API for JSON-returning agent calls."""

import json
import logging
import re
from typing import Any, Dict, List, Optional, Tuple

import anthropic

from funding_advisor.domain.errors import ProviderFailureError

logger = logging.getLogger(__name__)

WEB_SEARCH_TOOL_TYPE = "web_search_20250305"


class LLMClient:
    """Handles all LLM interactions.

    Responsibilities:
    - Send a system prompt + user message, optionally with web search
    - Repair and parse the JSON object in the answer
    - Track token usage
    - Turn SDK errors into ProviderFailureError (no retries here)
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        max_tokens: int = 8192,
        timeout: float = 180.0,
        max_retries: int = 0,
        web_search_enabled: bool = True,
        web_search_max_uses: int = 5,
    ):
        self.client = anthropic.Anthropic(api_key=api_key, timeout=timeout, max_retries=max_retries)
        self.model = model
        self.max_tokens = max_tokens
        self.web_search_enabled = web_search_enabled
        self.web_search_max_uses = web_search_max_uses
        self.total_input_tokens: int = 0
        self.total_output_tokens: int = 0

    def complete_json(
        self,
        system_prompt: str,
        user_message: str,
        *,
        use_web_search: bool = True,
    ) -> Tuple[Dict[str, Any], str]:
        """Run one agent call and return ``(parsed_object, raw_text)``.

        Raises:
            ProviderFailureError: API error, empty answer, or no JSON object
                could be recovered from the answer.
        """
        request: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_message}],
        }
        if use_web_search and self.web_search_enabled:
            request["tools"] = [
                {
                    "type": WEB_SEARCH_TOOL_TYPE,
                    "name": "web_search",
                    "max_uses": self.web_search_max_uses,
                }
            ]

        try:
            message = self.client.messages.create(**request)
        except anthropic.APIError as exc:
            logger.error("Claude API call failed: %s", exc)
            raise ProviderFailureError(f"LLM provider call failed: {exc}") from exc

        usage = getattr(message, "usage", None)
        if usage is not None:
            self.total_input_tokens += usage.input_tokens
            self.total_output_tokens += usage.output_tokens

        raw_text = self._collect_text(message.content)
        if not raw_text.strip():
            raise ProviderFailureError("Empty response from LLM provider")

        return parse_json_object(raw_text), raw_text

    # ── Response parsing ─────────────────────────────────────────────

    @staticmethod
    def _collect_text(blocks: List[Any]) -> str:
        """Concatenate text blocks; tool-use and search-result blocks are skipped."""
        chunks = []
        for block in blocks or []:
            if getattr(block, "type", None) == "text" and isinstance(getattr(block, "text", None), str):
                chunks.append(block.text)
        return "".join(chunks)


def parse_json_object(text: str) -> Dict[str, Any]:
    """Extract a JSON object from potentially messy LLM output.

    Handles:
    • Raw JSON object
    • JSON inside ```json … ``` fences
    • JSON buried in prose (first ``{`` to last ``}``)
    """
    stripped = (text or "").strip()
    if not stripped:
        raise ProviderFailureError("Empty response from LLM provider")

    candidates: List[str] = [stripped]

    fenced = re.search(r"```(?:json)?\s*(\{[\s\S]*\})\s*```", stripped)
    if fenced:
        candidates.append(fenced.group(1))

    first, last = stripped.find("{"), stripped.rfind("}")
    if first != -1 and last > first:
        candidates.append(stripped[first:last + 1])

    for candidate in candidates:
        parsed = _try_load(candidate)
        if isinstance(parsed, dict):
            return parsed

    logger.error("Could not parse JSON object from LLM response (first 300 chars): %s", stripped[:300])
    raise ProviderFailureError("LLM response did not contain a JSON object")


def _try_load(candidate: str) -> Optional[Any]:
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        return None
