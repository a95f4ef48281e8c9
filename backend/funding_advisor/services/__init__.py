"""Service-layer orchestration modules."""

from funding_advisor.services.advisory_service import AdvisoryService
from funding_advisor.services.history_service import HistoryService
from funding_advisor.services.lookup_service import LookupService
from funding_advisor.services.manual_update_service import ManualUpdateService
from funding_advisor.services.report_update_service import ReportUpdateService

__all__ = [
    "LookupService",
    "AdvisoryService",
    "HistoryService",
    "ManualUpdateService",
    "ReportUpdateService",
]
