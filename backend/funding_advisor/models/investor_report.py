"""Investor report and investor report change ORM models."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from funding_advisor.database import Base
from funding_advisor.utils.clock import utcnow


class InvestorReportModel(Base):
    __tablename__ = "investor_reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    company_name = Column(String, nullable=False)
    recommendation = Column(Text, nullable=False)  # JSON document, replaced wholesale
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    # Relationships
    company = relationship("CompanyModel", back_populates="investor_reports")
    changes = relationship(
        "InvestorReportChangeModel", back_populates="report", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<InvestorReport id={self.id} company_id={self.company_id}>"


class InvestorReportChangeModel(Base):
    __tablename__ = "investor_report_changes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    report_id = Column(Integer, ForeignKey("investor_reports.id"), nullable=False, index=True)
    json_path = Column(String, nullable=False)
    from_value = Column(Text)
    to_value = Column(Text)
    changed_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    report = relationship("InvestorReportModel", back_populates="changes")

    def __repr__(self) -> str:
        return f"<InvestorReportChange report_id={self.report_id} path={self.json_path}>"
