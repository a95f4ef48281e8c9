"""Enriches a company name with business metrics via an LLM web-search agent.

The lookup flow must never hard-fail because of the provider: any provider
error degrades to a minimal fallback record. A missing agent prompt is a
configuration problem and is raised before the provider is called.
"""

import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from funding_advisor.clients.llm_client import LLMClient
from funding_advisor.domain.errors import ProviderFailureError
from funding_advisor.prompts.manager import PromptManager
from funding_advisor.schemas.company import CompanyMetrics
from funding_advisor.schemas.lookup import EnrichmentResult

logger = logging.getLogger(__name__)

PROMPT_NAME = "lookup_agent"

COMPANY_METRICS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": [
        "name", "business_id", "website_url", "country", "city",
        "industry_code", "industry_text", "employee_count", "employee_range",
        "revenue_eur", "revenue_range", "stage", "funding_need_type_guess",
        "funding_need_min_eur_guess", "funding_need_max_eur_guess",
        "funding_need_summary_guess", "description", "summary",
    ],
    "properties": {
        "name": {"type": ["string", "null"]},
        "business_id": {"type": ["string", "null"]},
        "website_url": {"type": ["string", "null"]},
        "country": {"type": ["string", "null"]},
        "city": {"type": ["string", "null"]},
        "industry_code": {"type": ["string", "null"]},
        "industry_text": {"type": ["string", "null"]},
        "employee_count": {"type": ["integer", "null"]},
        "employee_range": {"type": ["string", "null"]},
        "revenue_eur": {"type": ["number", "null"]},
        "revenue_range": {"type": ["string", "null"]},
        "stage": {"type": ["string", "null"]},
        "funding_need_type_guess": {"type": ["string", "null"]},
        "funding_need_min_eur_guess": {"type": ["number", "null"]},
        "funding_need_max_eur_guess": {"type": ["number", "null"]},
        "funding_need_summary_guess": {"type": ["string", "null"]},
        "description": {"type": ["string", "null"]},
        "summary": {"type": ["string", "null"]},
    },
}


class CompanyEnricher:
    """Company name → CompanyMetrics, with a degraded fallback."""

    def __init__(
        self,
        llm_client: LLMClient,
        prompt_manager: PromptManager,
        prompt_override: Optional[str] = None,
        default_country: str = "Finland",
    ):
        self.llm = llm_client
        self.prompts = prompt_manager
        self.prompt_override = prompt_override
        self.default_country = default_country

    def infer_metrics(self, company_name: str) -> EnrichmentResult:
        """Research ``company_name`` and return its metrics plus raw answer.

        Raises:
            ConfigurationMissingError: no lookup agent prompt is configured.
        """
        system_prompt = self.prompts.resolve(PROMPT_NAME, override=self.prompt_override)
        user_message = self._build_user_message(company_name)

        try:
            parsed, raw = self.llm.complete_json(system_prompt, user_message, use_web_search=True)
            metrics = CompanyMetrics.model_validate(parsed)
        except (ProviderFailureError, ValidationError) as exc:
            logger.error("Company enrichment failed for %r, using fallback: %s", company_name, exc)
            return self.fallback(company_name)

        logger.info(
            "Enriched %r: %d of %d metric fields populated",
            company_name,
            sum(1 for v in metrics.model_dump().values() if v is not None),
            len(CompanyMetrics.model_fields),
        )
        return EnrichmentResult(metrics=metrics, raw=raw)

    def fallback(self, company_name: str) -> EnrichmentResult:
        """Minimal record used when the provider call fails."""
        summary = (
            f"Basic information for company {company_name}: an AI enrichment call "
            "failed, so only minimal data is available."
        )
        metrics = CompanyMetrics(name=company_name, country=self.default_country, summary=summary)
        return EnrichmentResult(metrics=metrics, raw=None)

    @staticmethod
    def _build_user_message(company_name: str) -> str:
        return (
            f'Investigate "{company_name}" using web search. '
            "Populate the JSON row for the `companies` table (columns listed in the system prompt). "
            "Run as many searches as necessary to ensure the values are up to date.\n\n"
            "Return a single JSON object matching this JSON schema:\n"
            f"{json.dumps(COMPANY_METRICS_SCHEMA, indent=2)}"
        )
