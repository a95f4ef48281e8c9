"""Company schemas: enrichment metrics, profiles and manual-edit results."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from funding_advisor.schemas.common import CamelModel, lenient_int, lenient_number, lenient_text

_TEXT_FIELDS = (
    "name",
    "business_id",
    "website_url",
    "country",
    "city",
    "industry_code",
    "industry_text",
    "employee_range",
    "revenue_range",
    "stage",
    "funding_need_type_guess",
    "funding_need_summary_guess",
    "description",
    "summary",
)


class CompanyMetrics(BaseModel):
    """Business metrics for one company, as produced by enrichment.

    Keys follow the lookup prompt's schema. Unknown keys from the provider
    are kept so newer prompts don't lose data.
    """

    name: Optional[str] = None
    business_id: Optional[str] = None
    website_url: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    industry_code: Optional[str] = None
    industry_text: Optional[str] = None
    employee_count: Optional[int] = None
    employee_range: Optional[str] = None
    revenue_eur: Optional[float] = None
    revenue_range: Optional[str] = None
    stage: Optional[str] = None
    funding_need_type_guess: Optional[str] = None
    funding_need_min_eur_guess: Optional[float] = None
    funding_need_max_eur_guess: Optional[float] = None
    funding_need_summary_guess: Optional[str] = None
    description: Optional[str] = None
    summary: Optional[str] = None

    model_config = ConfigDict(extra="allow")

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _text(cls, v: Any) -> Optional[str]:
        return lenient_text(v)

    @field_validator("employee_count", mode="before")
    @classmethod
    def _count(cls, v: Any) -> Optional[int]:
        return lenient_int(v)

    @field_validator(
        "revenue_eur", "funding_need_min_eur_guess", "funding_need_max_eur_guess", mode="before"
    )
    @classmethod
    def _amount(cls, v: Any) -> Optional[float]:
        return lenient_number(v)


class ManualChange(BaseModel):
    """One entry of a company's manual change log."""

    column: Optional[str] = None
    from_value: Any = Field(default=None, alias="from")
    to_value: Any = Field(default=None, alias="to")
    changed_at: Optional[str] = Field(default=None, alias="changedAt")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class CompanyProfile(CamelModel):
    company_id: int
    created_at: Optional[datetime] = None
    metrics: CompanyMetrics


class ManualCompanyUpdateResult(CamelModel):
    updated: bool
    message: str
    changes: List[ManualChange] = []
    manual_change_log: List[ManualChange] = []
    metrics: Optional[CompanyMetrics] = None
