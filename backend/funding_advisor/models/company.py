"""Company ORM model."""

from sqlalchemy import Column, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import relationship

from funding_advisor.database import Base
from funding_advisor.utils.clock import utcnow


class CompanyModel(Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, index=True)
    business_id = Column(String, index=True)
    website_url = Column(String)
    country = Column(String)
    city = Column(String)

    industry_code = Column(String)
    industry_text = Column(String)

    employee_count = Column(Integer)
    employee_range = Column(String)

    revenue_eur = Column(Float)
    revenue_range = Column(String)

    stage = Column(String, index=True)
    funding_need_type = Column(String, index=True)
    funding_need_min_eur = Column(Float)
    funding_need_max_eur = Column(Float)
    funding_need_summary = Column(Text)

    description = Column(Text)
    tags = Column(Text)

    # JSON list of {column, from, to, changedAt}; append-only
    manual_change_log = Column(Text)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    cases = relationship("CompanyCaseModel", back_populates="company", cascade="all, delete-orphan")
    investor_reports = relationship(
        "InvestorReportModel", back_populates="company", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Company id={self.id} name={self.name!r}>"
