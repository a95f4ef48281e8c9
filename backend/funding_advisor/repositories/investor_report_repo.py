"""Investor report and report change repositories."""

from typing import List

from sqlalchemy.orm import Session

from funding_advisor.models.investor_report import InvestorReportChangeModel, InvestorReportModel
from funding_advisor.repositories.base import BaseRepository


class InvestorReportRepository(BaseRepository[InvestorReportModel]):
    def __init__(self, db: Session):
        super().__init__(db, InvestorReportModel)

    def replace_recommendation(self, report: InvestorReportModel, payload_json: str) -> InvestorReportModel:
        """Swap the whole stored document (caller must commit)."""
        report.recommendation = payload_json
        self.db.flush()
        return report


class InvestorReportChangeRepository(BaseRepository[InvestorReportChangeModel]):
    def __init__(self, db: Session):
        super().__init__(db, InvestorReportChangeModel)

    def get_for_report(self, report_id: int) -> List[InvestorReportChangeModel]:
        """Change rows for one report, most recent first."""
        return (
            self.db.query(self.model)
            .filter(self.model.report_id == report_id)
            .order_by(self.model.changed_at.desc(), self.model.id.desc())
            .all()
        )
