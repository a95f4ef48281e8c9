"""Centralized prompt management with versioning.

Usage:
    manager = PromptManager()
    prompt = manager.get("lookup_agent", version="v1")
    system_prompt = manager.resolve("lookup_agent", override=settings.lookup_agent)
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from funding_advisor.domain.errors import ConfigurationMissingError

logger = logging.getLogger(__name__)

# Prompt name → (error code, environment variable that overrides it)
AGENT_PROMPTS: Dict[str, tuple[str, str]] = {
    "lookup_agent": ("MISSING_LOOKUP_AGENT", "LOOKUP_AGENT"),
    "funding_advisor": ("MISSING_FUNDING_ADVISOR_AGENT", "FUNDING_ADVISOR_AGENT"),
}


class PromptManager:
    """Load and manage versioned prompt templates.

    Prompts are stored as text files in:
        funding_advisor/prompts/templates/{prompt_name}/v{N}.txt

    Metadata is stored in:
        funding_advisor/prompts/templates/{prompt_name}/metadata.json

    A missing templates directory is not an error at construction time;
    resolving a prompt that exists nowhere raises ConfigurationMissingError.

    Examples:
        >>> manager = PromptManager()
        >>> prompt = manager.get("funding_advisor", version="v1")
        >>> versions = manager.list_versions("funding_advisor")
        ['v1']
    """

    def __init__(self, base_dir: Optional[Path] = None):
        if base_dir is None:
            base_dir = Path(__file__).parent / "templates"
        self.base_dir = base_dir

        if not self.base_dir.exists():
            logger.warning("Prompt templates directory not found: %s", self.base_dir)

        logger.debug("PromptManager initialized with base_dir=%s", self.base_dir)

    @lru_cache(maxsize=32)
    def get(self, prompt_name: str, version: str = "latest") -> str:
        """Load a prompt template.

        Args:
            prompt_name: Name of prompt directory (e.g., "lookup_agent")
            version: Version tag (e.g., "v1", "v2") or "latest"

        Raises:
            FileNotFoundError: If prompt doesn't exist
        """
        if version == "latest":
            version = self._get_latest_version(prompt_name)

        prompt_path = self.base_dir / prompt_name / f"{version}.txt"
        if not prompt_path.exists():
            raise FileNotFoundError(
                f"Prompt '{prompt_name}' version '{version}' not found at {prompt_path}"
            )

        prompt_text = prompt_path.read_text(encoding="utf-8").strip()
        logger.debug(
            "Loaded prompt %s:%s (%d chars)",
            prompt_name,
            version,
            len(prompt_text),
        )
        return prompt_text

    def resolve(self, prompt_name: str, override: Optional[str] = None, version: str = "latest") -> str:
        """Return the system prompt for an agent.

        A non-blank ``override`` (from settings) wins over the templates.

        Raises:
            ConfigurationMissingError: Neither an override nor a non-empty
                template exists.
        """
        if override and override.strip():
            return override.strip()

        code, env_var = AGENT_PROMPTS.get(
            prompt_name, (f"MISSING_{prompt_name.upper()}", prompt_name.upper())
        )
        try:
            prompt = self.get(prompt_name, version)
        except FileNotFoundError as exc:
            logger.error("Agent prompt '%s' is not configured: %s", prompt_name, exc)
            raise ConfigurationMissingError(
                f"{env_var} prompt is missing. Set {env_var} in backend/.env "
                f"or add a template under {self.base_dir / prompt_name}.",
                code=code,
                title=f"Missing {env_var} configuration",
            ) from exc

        if not prompt:
            raise ConfigurationMissingError(
                f"{env_var} prompt template is empty.",
                code=code,
                title=f"Missing {env_var} configuration",
            )
        return prompt

    def is_configured(self, prompt_name: str, override: Optional[str] = None) -> bool:
        try:
            self.resolve(prompt_name, override)
        except ConfigurationMissingError:
            return False
        return True

    def get_metadata(self, prompt_name: str, version: str) -> Dict:
        """Load metadata for a prompt version (empty if metadata.json doesn't exist)."""
        meta_path = self.base_dir / prompt_name / "metadata.json"
        if not meta_path.exists():
            logger.warning("No metadata.json found for prompt '%s'", prompt_name)
            return {}

        try:
            metadata = json.loads(meta_path.read_text())
            return metadata.get(version, {})
        except json.JSONDecodeError as exc:
            logger.error("Invalid JSON in %s: %s", meta_path, exc)
            return {}

    def list_versions(self, prompt_name: str) -> List[str]:
        """List all available versions for a prompt, oldest first."""
        prompt_dir = self.base_dir / prompt_name
        if not prompt_dir.exists():
            return []

        versions = [p.stem for p in prompt_dir.glob("v*.txt")]
        versions.sort(key=self._version_sort_key)
        return versions

    def _get_latest_version(self, prompt_name: str) -> str:
        versions = self.list_versions(prompt_name)
        if not versions:
            raise FileNotFoundError(
                f"No versions found for prompt '{prompt_name}' "
                f"in {self.base_dir / prompt_name}"
            )
        return versions[-1]

    @staticmethod
    def _version_sort_key(version: str) -> int:
        """Extract numeric part from version tag for sorting ("v10" -> 10)."""
        numeric = "".join(filter(str.isdigit, version))
        return int(numeric) if numeric else 0
