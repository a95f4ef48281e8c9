"""Recommendation ORM model — funding programmes / investors attached to a case."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from funding_advisor.database import Base
from funding_advisor.utils.clock import utcnow


class RecommendationModel(Base):
    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    case_id = Column(Integer, ForeignKey("company_cases.id"), nullable=False, index=True)
    kind = Column(String, nullable=False, index=True)  # "funding_program" | "investor"

    name = Column(String, nullable=False)
    provider = Column(String)
    url = Column(String)

    stage_match = Column(String)
    funding_type = Column(String)
    instrument_category = Column(String)
    min_amount_eur = Column(Float)
    max_amount_eur = Column(Float)
    geography_focus = Column(String)
    sector_focus = Column(String)

    score = Column(Float)
    rank = Column(Integer)
    explanation_text = Column(Text)
    raw_metadata_json = Column(Text)

    created_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    case = relationship("CompanyCaseModel", back_populates="recommendations")

    def __repr__(self) -> str:
        return f"<Recommendation case_id={self.case_id} kind={self.kind} rank={self.rank}>"
