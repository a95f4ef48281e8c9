"""Builds the unified history feed from lookup cases and investor reports.

Pure functions over already-loaded rows; the HistoryService does the reads.
"""

import heapq
import json
import logging
import math
from typing import Any, Dict, Iterable, List, Optional

from funding_advisor.domain.company_fields import parse_change_log
from funding_advisor.models.company import CompanyModel
from funding_advisor.models.company_case import CompanyCaseModel
from funding_advisor.models.investor_report import InvestorReportChangeModel, InvestorReportModel
from funding_advisor.schemas.company import CompanyMetrics, ManualChange
from funding_advisor.schemas.history import LookupHistoryEntry, ReportHistoryEntry
from funding_advisor.schemas.investor_report import ReportChange

logger = logging.getLogger(__name__)


def clamp_history_limit(raw: Any, default: int = 20, maximum: int = 100) -> int:
    """Clamp a user-supplied limit to ``[1, maximum]``.

    ``None`` and anything that doesn't parse as a number give ``default``.
    Fractions are floored.
    """
    if raw is None or isinstance(raw, bool):
        return default
    try:
        number = float(raw)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return min(max(math.floor(number), 1), maximum)


def shape_metrics(
    company: CompanyModel, case: Optional[CompanyCaseModel] = None
) -> CompanyMetrics:
    """Company row (+ optional case) → metrics keyed like enrichment output."""
    summary = None
    if case is not None and case.company_summary_text:
        summary = case.company_summary_text
    return CompanyMetrics.model_validate(dict(
        name=company.name,
        business_id=company.business_id,
        website_url=company.website_url,
        country=company.country,
        city=company.city,
        industry_code=company.industry_code,
        industry_text=company.industry_text,
        employee_count=company.employee_count,
        employee_range=company.employee_range,
        revenue_eur=company.revenue_eur,
        revenue_range=company.revenue_range,
        stage=company.stage,
        funding_need_type_guess=company.funding_need_type,
        funding_need_min_eur_guess=company.funding_need_min_eur,
        funding_need_max_eur_guess=company.funding_need_max_eur,
        funding_need_summary_guess=company.funding_need_summary,
        description=company.description,
        summary=summary or company.description or None,
    ))


def parse_report_payload(report: InvestorReportModel) -> Optional[Dict[str, Any]]:
    """Stored recommendation document, or None when it isn't a JSON object."""
    try:
        payload = json.loads(report.recommendation) if report.recommendation else None
    except (TypeError, ValueError) as exc:
        logger.warning("Failed to parse investor report %s JSON: %s", report.id, exc)
        return None
    if not isinstance(payload, dict):
        logger.warning("Investor report %s is not a JSON object, ignoring", report.id)
        return None
    return payload


def lookup_entry(case: CompanyCaseModel) -> LookupHistoryEntry:
    company = case.company
    return LookupHistoryEntry(
        case_id=case.id,
        company_id=company.id,
        company_name=company.name,
        created_at=case.created_at,
        summary=case.company_summary_text,
        metrics=shape_metrics(company, case),
        manual_change_log=[
            ManualChange.model_validate(entry)
            for entry in parse_change_log(company.manual_change_log)
            if isinstance(entry, dict)
        ],
    )


def report_entry(
    report: InvestorReportModel, changes: Iterable[InvestorReportChangeModel]
) -> ReportHistoryEntry:
    return ReportHistoryEntry(
        report_id=report.id,
        company_id=report.company_id,
        company_name=report.company_name,
        created_at=report.created_at,
        investment_report=parse_report_payload(report),
        manual_change_log=[ReportChange.model_validate(change) for change in changes],
    )


def merge_history(
    lookups: List[LookupHistoryEntry],
    reports: List[ReportHistoryEntry],
    limit: int,
) -> list:
    """Merge two newest-first lists into one newest-first list of ``limit`` entries."""
    merged = heapq.merge(lookups, reports, key=lambda entry: entry.created_at, reverse=True)
    feed = []
    for entry in merged:
        if len(feed) >= limit:
            break
        feed.append(entry)
    return feed
