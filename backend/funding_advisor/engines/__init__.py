"""Core business-logic engines."""

from funding_advisor.engines.company_enricher import CompanyEnricher
from funding_advisor.engines.investor_advisor import InvestorAdvisor

__all__ = [
    "CompanyEnricher",
    "InvestorAdvisor",
]
