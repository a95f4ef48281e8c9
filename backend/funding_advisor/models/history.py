"""History ORM model — one row per lookup action."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from funding_advisor.database import Base
from funding_advisor.utils.clock import utcnow


class HistoryModel(Base):
    __tablename__ = "history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    case_id = Column(Integer, ForeignKey("company_cases.id"), nullable=False)
    action = Column(String, nullable=False)  # "summary-basic" | "summary-detailed"
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    def __repr__(self) -> str:
        return f"<History company_id={self.company_id} case_id={self.case_id} action={self.action}>"
