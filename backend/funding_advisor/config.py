"""Application configuration loaded from environment variables."""

import os
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings

# Check if .env file exists and is readable
_env_file = None
try:
    env_path = Path(".env")
    if env_path.exists() and os.access(env_path, os.R_OK):
        _env_file = ".env"
except (OSError, PermissionError):
    # If we can't access .env, continue without it
    pass


class Settings(BaseSettings):
    """All configuration for the funding advisor application.

    Values are loaded from environment variables or a .env file.
    """

    # Application
    app_name: str = "funding-advisor"
    debug: bool = False

    # Logging
    json_logs: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/funding_advisor.db"

    # Anthropic Claude API
    anthropic_api_key: str = ""
    claude_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = 8192
    llm_timeout_seconds: float = 180.0
    llm_max_retries: int = 0  # provider failures surface immediately
    web_search_enabled: bool = True
    web_search_max_uses: int = 5

    # Agent prompts. When unset the versioned templates under
    # funding_advisor/prompts/templates/ are used instead.
    lookup_agent: Optional[str] = Field(default=None, validation_alias="LOOKUP_AGENT")
    funding_advisor_agent: Optional[str] = Field(
        default=None, validation_alias="FUNDING_ADVISOR_AGENT"
    )

    # Enrichment fallback
    default_country: str = "Finland"

    # History feed
    history_default_limit: int = 20
    history_max_limit: int = 100

    # CORS
    allowed_origins: list[str] = ["http://localhost:5173"]

    @property
    def lookup_source(self) -> str:
        """Provenance string returned with every lookup."""
        return f"anthropic-{self.claude_model}"

    model_config = {
        "env_file": _env_file,
        "env_file_encoding": "utf-8",
        "env_file_ignore_empty": True,
        "populate_by_name": True,
    }
