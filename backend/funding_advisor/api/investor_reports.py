"""Investor report endpoints — manual edits of stored recommendations."""

from fastapi import APIRouter, Depends, HTTPException

from funding_advisor.dependencies import get_report_update_service
from funding_advisor.domain.errors import AdvisorError
from funding_advisor.logging_config import get_logger
from funding_advisor.schemas.investor_report import ManualReportUpdateResult
from funding_advisor.schemas.requests import ManualReportUpdateRequest
from funding_advisor.services.report_update_service import ReportUpdateService

logger = get_logger(__name__)
router = APIRouter()


@router.post("/manual-validate", response_model=ManualReportUpdateResult)
def manual_validate_report(
    body: ManualReportUpdateRequest,
    svc: ReportUpdateService = Depends(get_report_update_service),
) -> ManualReportUpdateResult:
    """Replace a report's recommendation document and record per-path changes.

    Raises:
        InvalidInputError: non-integer ``reportId`` or non-object ``recommendation`` (400).
        NotFoundError: unknown report (404).
    """
    logger.info("manual_report_update_requested", report_id=body.report_id)

    try:
        result = svc.apply_manual_report_updates(body.report_id, body.recommendation)
        logger.info(
            "manual_report_update_completed",
            report_id=body.report_id,
            updated=result.updated,
            changes=len(result.changes),
        )
        return result

    except AdvisorError as e:
        logger.warning("manual_report_update_rejected", code=e.code, error=e.message)
        raise
    except Exception as e:
        logger.error("manual_report_update_failed", report_id=body.report_id, error=str(e))
        raise HTTPException(status_code=500, detail=f"Failed to update investor report: {str(e)}")
