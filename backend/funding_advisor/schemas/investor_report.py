"""Investor recommendation payload and report change schemas."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from funding_advisor.schemas.common import CamelModel, lenient_number, lenient_text


class FundingInstrument(BaseModel):
    instrument_type: Optional[str] = None
    priority: Optional[str] = None  # "high" | "medium" | "low"
    target_amount_eur_min: Optional[float] = None
    target_amount_eur_max: Optional[float] = None
    rationale: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @field_validator("instrument_type", "priority", "rationale", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return lenient_text(v)

    @field_validator("target_amount_eur_min", "target_amount_eur_max", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> Optional[float]:
        return lenient_number(v)


class RecommendedInvestor(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    geo_focus: Optional[str] = None
    sector_focus: Optional[str] = None
    stage_focus: Optional[str] = None
    ticket_size_min_eur: Optional[float] = None
    ticket_size_max_eur: Optional[float] = None
    website_url: Optional[str] = None
    fit_reason: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @field_validator(
        "name", "type", "geo_focus", "sector_focus", "stage_focus", "website_url", "fit_reason",
        mode="before",
    )
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return lenient_text(v)

    @field_validator("ticket_size_min_eur", "ticket_size_max_eur", mode="before")
    @classmethod
    def _amount(cls, v: Any) -> Optional[float]:
        return lenient_number(v)


class InvestorRecommendation(BaseModel):
    """Structured output of the funding advisor.

    Validated once, when the provider answers. Manual edits replace the
    stored document with whatever JSON object the user submits.
    """

    company_name: Optional[str] = None
    country: Optional[str] = None
    stage_inferred: Optional[str] = None
    funding_need_type_inferred: Optional[str] = None
    funding_instrument_mix: List[FundingInstrument] = []
    recommended_investors: List[RecommendedInvestor] = []
    search_summary: str = ""
    uncertainty_flags: str = ""

    model_config = ConfigDict(extra="allow")

    @field_validator(
        "company_name", "country", "stage_inferred", "funding_need_type_inferred", mode="before"
    )
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return lenient_text(v)

    @field_validator("funding_instrument_mix", "recommended_investors", mode="before")
    @classmethod
    def _list_of_objects(cls, v: Any) -> list:
        if not isinstance(v, list):
            return []
        return [item for item in v if isinstance(item, dict)]

    @field_validator("search_summary", "uncertainty_flags", mode="before")
    @classmethod
    def _free_text(cls, v: Any) -> str:
        if v is None:
            return ""
        if isinstance(v, list):
            return "; ".join(str(item) for item in v)
        return str(v)


class ReportChange(CamelModel):
    """One leaf-path edit on an investor report."""

    json_path: str
    from_value: Optional[str] = None
    to_value: Optional[str] = None
    changed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ManualReportUpdateResult(CamelModel):
    updated: bool
    message: str
    changes: List[ReportChange] = []
    manual_change_log: List[ReportChange] = []
    recommendation: Dict[str, Any] = {}


class InvestorMatchResult(CamelModel):
    company_id: int
    report_id: int
    recommendation: InvestorRecommendation
