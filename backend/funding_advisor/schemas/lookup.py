"""Enrichment and lookup result schemas."""

from dataclasses import dataclass
from typing import Optional

from funding_advisor.schemas.common import CamelModel
from funding_advisor.schemas.company import CompanyMetrics


@dataclass
class EnrichmentResult:
    """Provider output: validated metrics plus the raw text for debugging.

    ``raw`` is None when the fallback record was used.
    """

    metrics: CompanyMetrics
    raw: Optional[str]

    @property
    def is_fallback(self) -> bool:
        return self.raw is None


class LookupResult(CamelModel):
    company_name: str
    summary: str
    metrics: CompanyMetrics
    company_id: int
    case_id: int
    source: str
    extra_info: Optional[str] = None
