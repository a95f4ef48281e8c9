"""SQLAlchemy ORM models — imported here so Base.metadata sees them."""

from funding_advisor.models.company import CompanyModel
from funding_advisor.models.company_case import CompanyCaseModel
from funding_advisor.models.history import HistoryModel
from funding_advisor.models.investor_report import InvestorReportChangeModel, InvestorReportModel
from funding_advisor.models.recommendation import RecommendationModel

__all__ = [
    "CompanyModel",
    "CompanyCaseModel",
    "RecommendationModel",
    "HistoryModel",
    "InvestorReportModel",
    "InvestorReportChangeModel",
]
