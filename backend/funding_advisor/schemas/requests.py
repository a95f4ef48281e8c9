"""Request bodies for the company and investor-report endpoints.

Fields are typed loosely on purpose: shape checks (integer ids, object
payloads, non-empty names) happen in the services so that every entry point,
HTTP or CLI, gets the same InvalidInput errors.
"""

from typing import Any, Optional

from pydantic import ConfigDict

from funding_advisor.schemas.common import CamelModel


class CompanyLookupRequest(CamelModel):
    company_name: Any = None
    extra_info: Optional[Any] = None

    model_config = ConfigDict(extra="allow")


class InvestorMatchRequest(CamelModel):
    company_id: Any = None


class ManualCompanyUpdateRequest(CamelModel):
    company_id: Any = None
    updates: Any = None


class ManualReportUpdateRequest(CamelModel):
    report_id: Any = None
    recommendation: Any = None
