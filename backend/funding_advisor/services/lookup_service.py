"""Company lookups: enrich a name and record the case, demo rows and history."""

import json
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from funding_advisor.domain.demo_recommendations import build_demo_recommendations
from funding_advisor.domain.errors import InvalidInputError
from funding_advisor.engines.company_enricher import CompanyEnricher
from funding_advisor.models.company_case import CompanyCaseModel
from funding_advisor.models.recommendation import RecommendationModel
from funding_advisor.repositories.case_repo import CaseRepository
from funding_advisor.repositories.company_repo import CompanyRepository
from funding_advisor.repositories.history_repo import HistoryRepository
from funding_advisor.repositories.recommendation_repo import RecommendationRepository
from funding_advisor.schemas.lookup import EnrichmentResult, LookupResult

logger = logging.getLogger(__name__)

BASIC_CASE_TITLE = "Quick lookup"
DETAILED_CASE_TITLE = "Detailed profile"


class LookupService:
    def __init__(
        self,
        db: Session,
        enricher: CompanyEnricher,
        company_repo: CompanyRepository,
        case_repo: CaseRepository,
        recommendation_repo: RecommendationRepository,
        history_repo: HistoryRepository,
        source: str = "anthropic",
    ):
        self.db = db
        self.enricher = enricher
        self.companies = company_repo
        self.cases = case_repo
        self.recommendations = recommendation_repo
        self.history = history_repo
        self.source = source

    def lookup_basic(self, company_name: Any, request_body: Optional[Dict[str, Any]] = None) -> LookupResult:
        """Enrich ``company_name`` and record a "Quick lookup" case."""
        name = self._clean_name(company_name)
        enrichment = self.enricher.infer_metrics(name)
        summary = enrichment.metrics.summary or f"Basic information for company {name}."

        company_id, case_id = self._record_case(
            name=name,
            enrichment=enrichment,
            summary=summary,
            request_body=request_body,
            detailed=False,
        )
        return LookupResult(
            company_name=name,
            summary=summary,
            metrics=enrichment.metrics,
            company_id=company_id,
            case_id=case_id,
            source=self.source,
        )

    def lookup_detailed(
        self,
        company_name: Any,
        extra_info: Any = None,
        request_body: Optional[Dict[str, Any]] = None,
    ) -> LookupResult:
        """Enrich ``company_name`` with user-provided context and record a "Detailed profile" case."""
        name = self._clean_name(company_name)
        extra = extra_info.strip() if isinstance(extra_info, str) else ""

        enrichment = self.enricher.infer_metrics(f"{name} ({extra or 'no extra context'})")
        summary = (
            enrichment.metrics.summary
            or f"Profile summary for company {name} based on the provided context."
        )

        company_id, case_id = self._record_case(
            name=name,
            enrichment=enrichment,
            summary=summary,
            request_body=request_body,
            detailed=True,
            extra=extra,
        )
        return LookupResult(
            company_name=name,
            summary=summary,
            metrics=enrichment.metrics,
            company_id=company_id,
            case_id=case_id,
            source=self.source,
            extra_info=extra,
        )

    # ── persistence ──────────────────────────────────────────────────

    def _record_case(
        self,
        *,
        name: str,
        enrichment: EnrichmentResult,
        summary: str,
        request_body: Optional[Dict[str, Any]],
        detailed: bool,
        extra: str = "",
    ) -> tuple[int, int]:
        """Company upsert, case, demo recommendations and history row in one transaction."""
        metrics = enrichment.metrics.model_dump()
        raw_input = dict(request_body or {})
        raw_input["llmMetrics"] = metrics
        raw_input["llmRaw"] = enrichment.raw

        try:
            company = self.companies.get_or_create(name)
            filled = self.companies.merge_enrichment(company, metrics)

            case = self.cases.create(CompanyCaseModel(
                company_id=company.id,
                case_title=DETAILED_CASE_TITLE if detailed else BASIC_CASE_TITLE,
                funding_need_details=(extra or None) if detailed else None,
                extra_input_json=json.dumps(raw_input, ensure_ascii=False, default=str),
                company_summary_text=summary,
                debug_response_payload=enrichment.raw,
            ))
            self.recommendations.create_many([
                RecommendationModel(**row) for row in build_demo_recommendations(case.id, detailed)
            ])
            self.history.record(
                company_id=company.id,
                case_id=case.id,
                action="summary-detailed" if detailed else "summary-basic",
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Recording lookup for %r failed (rolled back)", name)
            raise

        logger.info(
            "Recorded %s lookup for %r: company=%d case=%d filled=%s fallback=%s",
            "detailed" if detailed else "basic",
            name,
            company.id,
            case.id,
            filled,
            enrichment.is_fallback,
        )
        return company.id, case.id

    @staticmethod
    def _clean_name(company_name: Any) -> str:
        if not isinstance(company_name, str) or not company_name.strip():
            raise InvalidInputError("companyName is required")
        return company_name.strip()
