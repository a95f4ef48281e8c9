"""Replaces an investor report document and records per-path changes."""

import json
import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from funding_advisor.domain.errors import InvalidInputError, NotFoundError
from funding_advisor.domain.json_diff import diff
from funding_advisor.models.investor_report import InvestorReportChangeModel, InvestorReportModel
from funding_advisor.repositories.investor_report_repo import (
    InvestorReportChangeRepository,
    InvestorReportRepository,
)
from funding_advisor.schemas.investor_report import ManualReportUpdateResult, ReportChange
from funding_advisor.utils.clock import utcnow
from funding_advisor.utils.ids import coerce_id

logger = logging.getLogger(__name__)


class ReportUpdateService:
    def __init__(
        self,
        db: Session,
        report_repo: InvestorReportRepository,
        change_repo: InvestorReportChangeRepository,
    ):
        self.db = db
        self.reports = report_repo
        self.changes = change_repo

    def apply_manual_report_updates(self, report_id: Any, recommendation: Any) -> ManualReportUpdateResult:
        """Overwrite the stored recommendation and log every differing leaf path.

        The payload and all change rows are written in one transaction.

        Raises:
            InvalidInputError: non-integer id or non-object ``recommendation``.
            NotFoundError: no report with that id.
        """
        numeric_id = coerce_id(report_id, "reportId")
        if not isinstance(recommendation, dict):
            raise InvalidInputError("recommendation must be a JSON object")

        report = self.reports.get(numeric_id)
        if report is None:
            raise NotFoundError(f"Investor report {numeric_id} not found")

        stored = self._stored_payload(report)
        differences = diff(stored, recommendation)

        if not differences:
            return ManualReportUpdateResult(
                updated=False,
                message="No changes detected",
                manual_change_log=self._change_log(numeric_id),
                recommendation=stored,
            )

        changed_at = utcnow()
        try:
            self.reports.replace_recommendation(report, json.dumps(recommendation, ensure_ascii=False))
            self.changes.create_many([
                InvestorReportChangeModel(
                    report_id=numeric_id,
                    json_path=change.path,
                    from_value=change.from_value,
                    to_value=change.to_value,
                    changed_at=changed_at,
                )
                for change in differences
            ])
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Manual update for investor report %d failed (rolled back)", numeric_id)
            raise

        logger.info("Investor report %d: %d path(s) updated", numeric_id, len(differences))
        log = self._change_log(numeric_id)
        return ManualReportUpdateResult(
            updated=True,
            message=f"{len(differences)} path(s) updated",
            changes=[
                ReportChange(
                    json_path=change.path,
                    from_value=change.from_value,
                    to_value=change.to_value,
                    changed_at=changed_at,
                )
                for change in differences
            ],
            manual_change_log=log,
            recommendation=recommendation,
        )

    def _change_log(self, report_id: int) -> List[ReportChange]:
        return [ReportChange.model_validate(row) for row in self.changes.get_for_report(report_id)]

    @staticmethod
    def _stored_payload(report: InvestorReportModel) -> Dict[str, Any]:
        """Best-effort parse; corrupt or non-object content reads as {}."""
        try:
            payload = json.loads(report.recommendation) if report.recommendation else {}
        except (TypeError, ValueError) as exc:
            logger.warning("Stored investor report %d is not valid JSON, treating as {}: %s", report.id, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Stored investor report %d is not a JSON object, treating as {}", report.id)
            return {}
        return payload
