"""Recommends funding instruments and investors for a company profile.

Unlike enrichment there is no fallback here: a wrong investor recommendation
is worse than none, so provider failures propagate to the caller.
"""

import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from funding_advisor.clients.llm_client import LLMClient
from funding_advisor.domain.errors import InvalidInputError, ProviderFailureError
from funding_advisor.prompts.manager import PromptManager
from funding_advisor.schemas.investor_report import InvestorRecommendation

logger = logging.getLogger(__name__)

PROMPT_NAME = "funding_advisor"

_NULLABLE_STRING = {"type": ["string", "null"]}
_NULLABLE_NUMBER = {"type": ["number", "null"]}

INVESTOR_RECOMMENDATION_SCHEMA: Dict[str, Any] = {
    "name": "InvestorRecommendation",
    "schema": {
        "type": "object",
        "additionalProperties": False,
        "required": [
            "company_name",
            "country",
            "stage_inferred",
            "funding_need_type_inferred",
            "funding_instrument_mix",
            "recommended_investors",
            "search_summary",
            "uncertainty_flags",
        ],
        "properties": {
            "company_name": _NULLABLE_STRING,
            "country": _NULLABLE_STRING,
            "stage_inferred": _NULLABLE_STRING,
            "funding_need_type_inferred": _NULLABLE_STRING,
            "funding_instrument_mix": {
                "type": "array",
                "items": {
                    "type": "object",
                    "additionalProperties": False,
                    "required": [
                        "instrument_type",
                        "priority",
                        "target_amount_eur_min",
                        "target_amount_eur_max",
                        "rationale",
                    ],
                    "properties": {
                        "instrument_type": {"type": "string"},
                        "priority": {"type": "string", "enum": ["high", "medium", "low"]},
                        "target_amount_eur_min": _NULLABLE_NUMBER,
                        "target_amount_eur_max": _NULLABLE_NUMBER,
                        "rationale": {"type": "string"},
                    },
                },
            },
            "recommended_investors": {
                "type": "array",
                "items": {
                    "type": "object",
                    "additionalProperties": False,
                    "required": [
                        "name",
                        "type",
                        "geo_focus",
                        "sector_focus",
                        "stage_focus",
                        "ticket_size_min_eur",
                        "ticket_size_max_eur",
                        "website_url",
                        "fit_reason",
                    ],
                    "properties": {
                        "name": {"type": "string"},
                        "type": {"type": "string"},
                        "geo_focus": _NULLABLE_STRING,
                        "sector_focus": _NULLABLE_STRING,
                        "stage_focus": _NULLABLE_STRING,
                        "ticket_size_min_eur": _NULLABLE_NUMBER,
                        "ticket_size_max_eur": _NULLABLE_NUMBER,
                        "website_url": _NULLABLE_STRING,
                        "fit_reason": {"type": "string"},
                    },
                },
            },
            "search_summary": {"type": "string"},
            "uncertainty_flags": {"type": "string"},
        },
    },
}


class InvestorAdvisor:
    """Company profile metrics → InvestorRecommendation."""

    def __init__(
        self,
        llm_client: LLMClient,
        prompt_manager: PromptManager,
        prompt_override: Optional[str] = None,
    ):
        self.llm = llm_client
        self.prompts = prompt_manager
        self.prompt_override = prompt_override

    def recommend(self, company_profile: Dict[str, Any]) -> InvestorRecommendation:
        """Ask the advisor agent for a recommendation.

        Raises:
            InvalidInputError: ``company_profile`` is not a mapping.
            ConfigurationMissingError: no funding advisor prompt is configured.
            ProviderFailureError: the provider failed or answered garbage.
        """
        if not isinstance(company_profile, dict):
            raise InvalidInputError("Company profile is required")

        system_prompt = self.prompts.resolve(PROMPT_NAME, override=self.prompt_override)
        parsed, _raw = self.llm.complete_json(
            system_prompt,
            self._build_user_message(company_profile),
            use_web_search=True,
        )

        try:
            recommendation = InvestorRecommendation.model_validate(parsed)
        except ValidationError as exc:
            logger.error("Investor recommendation did not match schema: %s", exc)
            raise ProviderFailureError(f"Investor recommendation did not match schema: {exc}") from exc

        logger.info(
            "Recommended %d investors and %d instruments for %r",
            len(recommendation.recommended_investors),
            len(recommendation.funding_instrument_mix),
            company_profile.get("name"),
        )
        return recommendation

    @staticmethod
    def _build_user_message(company_profile: Dict[str, Any]) -> str:
        return (
            f"Company JSON:\n{json.dumps(company_profile, ensure_ascii=False, default=str)}\n"
            "Return an investor recommendation JSON object matching this JSON schema:\n"
            f"{json.dumps(INVESTOR_RECOMMENDATION_SCHEMA['schema'], indent=2)}"
        )
