"""Company endpoints: lookups, history feed, profiles, investor matching and
manual edits.

Expected failures (bad input, unknown ids, missing prompts, provider errors)
are AdvisorError subclasses and are rendered by the application exception
handler. Anything else is logged and turned into a 500.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from funding_advisor.dependencies import (
    get_advisory_service,
    get_history_service,
    get_lookup_service,
    get_manual_update_service,
)
from funding_advisor.domain.errors import AdvisorError, NotFoundError
from funding_advisor.logging_config import get_logger
from funding_advisor.schemas.company import CompanyProfile, ManualCompanyUpdateResult
from funding_advisor.schemas.history import HistoryResponse
from funding_advisor.schemas.investor_report import InvestorMatchResult
from funding_advisor.schemas.lookup import LookupResult
from funding_advisor.schemas.requests import (
    CompanyLookupRequest,
    InvestorMatchRequest,
    ManualCompanyUpdateRequest,
)
from funding_advisor.services.advisory_service import AdvisoryService
from funding_advisor.services.history_service import HistoryService
from funding_advisor.services.lookup_service import LookupService
from funding_advisor.services.manual_update_service import ManualUpdateService

logger = get_logger(__name__)
router = APIRouter()


@router.post("/summary-basic", response_model=LookupResult)
def summary_basic(
    body: CompanyLookupRequest,
    svc: LookupService = Depends(get_lookup_service),
) -> LookupResult:
    """Quick lookup: enrich a company name and record a case.

    Enrichment failures degrade to a minimal record rather than an error.
    """
    logger.info("company_lookup_requested", kind="basic", company_name=body.company_name)

    try:
        result = svc.lookup_basic(body.company_name, request_body=body.model_dump(by_alias=True))
        logger.info(
            "company_lookup_completed",
            kind="basic",
            company_id=result.company_id,
            case_id=result.case_id,
        )
        return result

    except AdvisorError as e:
        logger.warning("company_lookup_rejected", kind="basic", code=e.code, error=e.message)
        raise
    except Exception as e:
        logger.error("company_lookup_failed", kind="basic", error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to enrich company information: {str(e)}")


@router.post("/summary-detailed", response_model=LookupResult)
def summary_detailed(
    body: CompanyLookupRequest,
    svc: LookupService = Depends(get_lookup_service),
) -> LookupResult:
    """Detailed lookup: like the quick lookup, with free-text context from the user."""
    logger.info("company_lookup_requested", kind="detailed", company_name=body.company_name)

    try:
        result = svc.lookup_detailed(
            body.company_name,
            body.extra_info,
            request_body=body.model_dump(by_alias=True),
        )
        logger.info(
            "company_lookup_completed",
            kind="detailed",
            company_id=result.company_id,
            case_id=result.case_id,
        )
        return result

    except AdvisorError as e:
        logger.warning("company_lookup_rejected", kind="detailed", code=e.code, error=e.message)
        raise
    except Exception as e:
        logger.error("company_lookup_failed", kind="detailed", error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to enrich company information: {str(e)}")


@router.get("/history", response_model=HistoryResponse)
def company_history(
    limit: Optional[str] = None,
    svc: HistoryService = Depends(get_history_service),
) -> HistoryResponse:
    """Recent lookups and investor reports, newest first.

    ``limit`` is clamped to [1, 100]; missing or unparseable values use the
    default of 20.
    """
    try:
        history = svc.recent_history(limit)
        logger.info("history_listed", requested_limit=limit, count=len(history))
        return HistoryResponse(history=history)

    except Exception as e:
        logger.error("history_list_failed", error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to load history: {str(e)}")


@router.post("/investor-match", response_model=InvestorMatchResult)
def investor_match(
    body: InvestorMatchRequest,
    svc: AdvisoryService = Depends(get_advisory_service),
) -> InvestorMatchResult:
    """Recommend funding instruments and investors for a stored company."""
    logger.info("investor_match_requested", company_id=body.company_id)

    try:
        result = svc.match_investors(body.company_id)
        logger.info(
            "investor_match_completed",
            company_id=result.company_id,
            report_id=result.report_id,
            investors=len(result.recommendation.recommended_investors),
        )
        return result

    except AdvisorError as e:
        logger.warning("investor_match_rejected", code=e.code, error=e.message)
        raise
    except Exception as e:
        logger.error("investor_match_failed", company_id=body.company_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to generate investor recommendations: {str(e)}")


@router.post("/manual-validate", response_model=ManualCompanyUpdateResult)
def manual_validate_company(
    body: ManualCompanyUpdateRequest,
    svc: ManualUpdateService = Depends(get_manual_update_service),
) -> ManualCompanyUpdateResult:
    """Apply manual field edits to a company and extend its change log."""
    logger.info("manual_company_update_requested", company_id=body.company_id)

    try:
        result = svc.apply_manual_updates(body.company_id, body.updates)
        logger.info(
            "manual_company_update_completed",
            company_id=body.company_id,
            updated=result.updated,
            changes=len(result.changes),
        )
        return result

    except AdvisorError as e:
        logger.warning("manual_company_update_rejected", code=e.code, error=e.message)
        raise
    except Exception as e:
        logger.error("manual_company_update_failed", company_id=body.company_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to apply manual updates: {str(e)}")


@router.get("/{company_id}", response_model=CompanyProfile)
def get_company(
    company_id: int,
    svc: HistoryService = Depends(get_history_service),
) -> CompanyProfile:
    """Company metrics merged with the latest lookup case."""
    try:
        profile = svc.company_profile(company_id)
    except Exception as e:
        logger.error("company_profile_failed", company_id=company_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to load company: {str(e)}")

    if profile is None:
        logger.warning("company_not_found", company_id=company_id)
        raise NotFoundError(f"Company {company_id} not found")
    return profile
