"""Health check endpoints with dependency checking.

Provides health checks for:
- Database connectivity
- Claude API key configuration
- Agent prompt configuration (lookup agent, funding advisor)
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session

from funding_advisor.config import Settings
from funding_advisor.database import get_db
from funding_advisor.dependencies import get_prompt_manager, get_settings
from funding_advisor.logging_config import get_logger
from funding_advisor.prompts.manager import PromptManager

router = APIRouter()
logger = get_logger(__name__)

SERVICE_NAME = "funding-advisor"
SERVICE_VERSION = "1.0.0"


def check_database(db: Session) -> Dict[str, Any]:
    """Check database connectivity."""
    try:
        db.execute(text("SELECT 1"))
        return {"healthy": True, "message": "Database connected"}
    except Exception as e:
        logger.error("database_health_check_failed", error=str(e))
        return {"healthy": False, "message": f"Database error: {str(e)}"}


def check_llm_api(settings: Settings) -> Dict[str, Any]:
    """Check that a Claude API key is configured.

    No API call is made, so the check costs nothing.
    """
    if not settings.anthropic_api_key:
        return {"healthy": False, "message": "Anthropic API key not configured"}
    return {"healthy": True, "message": "Claude API key configured"}


def check_agent_prompts(settings: Settings, prompts: PromptManager) -> Dict[str, Any]:
    """Check that both agent prompts resolve (override or template)."""
    agents = {
        "lookup_agent": prompts.is_configured("lookup_agent", settings.lookup_agent),
        "funding_advisor": prompts.is_configured("funding_advisor", settings.funding_advisor_agent),
    }
    missing = [name for name, ok in agents.items() if not ok]
    if missing:
        return {"healthy": False, "message": f"Missing agent prompts: {', '.join(missing)}"}
    return {"healthy": True, "message": "Agent prompts configured"}


@router.get("/health")
def health_check() -> Dict[str, Any]:
    """Basic health check - just app status."""
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/health/detailed")
def detailed_health_check(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    prompts: PromptManager = Depends(get_prompt_manager),
) -> Dict[str, Any]:
    """Detailed health check with dependency status.

    Status is "degraded" when any check fails; the endpoint itself still
    answers 200.
    """
    checks = {
        "database": check_database(db),
        "claude_api": check_llm_api(settings),
        "agent_prompts": check_agent_prompts(settings, prompts),
    }

    all_healthy = all(check["healthy"] for check in checks.values())
    overall_status = "healthy" if all_healthy else "degraded"

    logger.info(
        "health_check_performed",
        status=overall_status,
        database=checks["database"]["healthy"],
        claude_api=checks["claude_api"]["healthy"],
        agent_prompts=checks["agent_prompts"]["healthy"],
    )

    return {
        "status": overall_status,
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "checks": checks,
    }


@router.get("/health/ready")
def readiness_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Readiness probe: 200 if the database answers, 503 otherwise."""
    try:
        db.execute(text("SELECT 1"))
        return {"ready": True}
    except Exception as e:
        logger.warning("readiness_check_failed", error=str(e))
        raise HTTPException(status_code=503, detail={"ready": False, "reason": "Database unavailable"})


@router.get("/health/live")
def liveness_check() -> Dict[str, Any]:
    """Liveness probe."""
    return {"alive": True}
