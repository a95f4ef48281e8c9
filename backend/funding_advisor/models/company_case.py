"""Company case ORM model — one row per enrichment run."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from funding_advisor.database import Base
from funding_advisor.utils.clock import utcnow


class CompanyCaseModel(Base):
    __tablename__ = "company_cases"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=False, index=True)
    case_title = Column(String)
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)

    stage = Column(String, index=True)
    funding_need_type = Column(String, index=True)
    funding_need_min_eur = Column(Float)
    funding_need_max_eur = Column(Float)
    funding_need_details = Column(Text)
    extra_input_json = Column(Text)

    company_summary_text = Column(Text)
    debug_request_payload = Column(Text)
    debug_response_payload = Column(Text)

    # Relationships
    company = relationship("CompanyModel", back_populates="cases")
    recommendations = relationship(
        "RecommendationModel", back_populates="case", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<CompanyCase id={self.id} company_id={self.company_id} title={self.case_title!r}>"
