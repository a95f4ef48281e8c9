"""Investor matching: company profile → recommendation → stored report."""

import json
import logging
from typing import Any

from sqlalchemy.orm import Session

from funding_advisor.domain.errors import NotFoundError
from funding_advisor.engines.investor_advisor import InvestorAdvisor
from funding_advisor.models.investor_report import InvestorReportModel
from funding_advisor.repositories.investor_report_repo import InvestorReportRepository
from funding_advisor.schemas.investor_report import InvestorMatchResult
from funding_advisor.services.history_service import HistoryService
from funding_advisor.utils.ids import coerce_id

logger = logging.getLogger(__name__)


class AdvisoryService:
    def __init__(
        self,
        db: Session,
        advisor: InvestorAdvisor,
        history_service: HistoryService,
        report_repo: InvestorReportRepository,
    ):
        self.db = db
        self.advisor = advisor
        self.history = history_service
        self.reports = report_repo

    def match_investors(self, company_id: Any) -> InvestorMatchResult:
        """Recommend investors for a stored company and persist the report.

        Raises:
            InvalidInputError: non-integer id.
            NotFoundError: no company with that id.
            ConfigurationMissingError / ProviderFailureError: from the advisor.
        """
        numeric_id = coerce_id(company_id, "companyId")
        profile = self.history.company_profile(numeric_id)
        if profile is None:
            raise NotFoundError(f"Company {numeric_id} not found")

        recommendation = self.advisor.recommend(profile.metrics.model_dump())
        company_name = profile.metrics.name or "Unknown company"

        try:
            report = self.reports.create(InvestorReportModel(
                company_id=numeric_id,
                company_name=company_name,
                recommendation=json.dumps(recommendation.model_dump(), ensure_ascii=False),
            ))
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Storing investor report for company %d failed (rolled back)", numeric_id)
            raise

        logger.info("Stored investor report %d for company %d (%s)", report.id, numeric_id, company_name)
        return InvestorMatchResult(
            company_id=numeric_id,
            report_id=report.id,
            recommendation=recommendation,
        )
