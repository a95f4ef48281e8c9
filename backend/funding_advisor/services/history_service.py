"""Read side: the history feed and company profiles."""

import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from funding_advisor.engines.history_assembler import (
    clamp_history_limit,
    lookup_entry,
    merge_history,
    report_entry,
    shape_metrics,
)
from funding_advisor.repositories.case_repo import CaseRepository
from funding_advisor.repositories.company_repo import CompanyRepository
from funding_advisor.repositories.investor_report_repo import (
    InvestorReportChangeRepository,
    InvestorReportRepository,
)
from funding_advisor.schemas.company import CompanyProfile

logger = logging.getLogger(__name__)


class HistoryService:
    def __init__(
        self,
        db: Session,
        company_repo: CompanyRepository,
        case_repo: CaseRepository,
        report_repo: InvestorReportRepository,
        change_repo: InvestorReportChangeRepository,
        default_limit: int = 20,
        max_limit: int = 100,
    ):
        self.db = db
        self.companies = company_repo
        self.cases = case_repo
        self.reports = report_repo
        self.changes = change_repo
        self.default_limit = default_limit
        self.max_limit = max_limit

    def recent_history(self, limit: Any = None) -> List[Any]:
        """Newest lookups and investor reports, interleaved by creation time."""
        safe_limit = clamp_history_limit(limit, self.default_limit, self.max_limit)

        lookups = [lookup_entry(case) for case in self.cases.get_recent_with_company(safe_limit)]
        reports = [
            report_entry(report, self.changes.get_for_report(report.id))
            for report in self.reports.get_recent(safe_limit)
        ]

        feed = merge_history(lookups, reports, safe_limit)
        logger.debug(
            "History feed: %d entries (limit=%d, %d lookups, %d reports read)",
            len(feed), safe_limit, len(lookups), len(reports),
        )
        return feed

    def company_profile(self, company_id: int) -> Optional[CompanyProfile]:
        """Company metrics merged with its latest case, or None when unknown."""
        company = self.companies.get(company_id)
        if company is None:
            return None

        latest = self.cases.get_latest_for_company(company.id)
        return CompanyProfile(
            company_id=company.id,
            created_at=latest.created_at if latest is not None else None,
            metrics=shape_metrics(company, latest),
        )
