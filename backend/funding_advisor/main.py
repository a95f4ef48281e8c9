"""FastAPI application entry point with structured logging and health checks."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from funding_advisor.api import company, investor_reports
from funding_advisor.database import Store
from funding_advisor.dependencies import get_settings
from funding_advisor.domain.errors import AdvisorError
from funding_advisor.health import router as health_router
from funding_advisor.logging_config import get_logger, setup_logging_from_settings

settings = get_settings()

# Setup structured logging
setup_logging_from_settings(settings)
logger = get_logger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle for the FastAPI application."""
    logger.info("application_startup", version=VERSION)
    store = Store.from_settings(settings)
    store.init_schema()
    app.state.store = store
    logger.info("database_initialized", database_url=settings.database_url)
    yield
    store.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title="Funding Advisor",
    description=(
        "Enriches company profiles with an LLM web-search agent, recommends "
        "funding instruments and investors, and keeps an audit trail of "
        "manual corrections."
    ),
    version=VERSION,
    lifespan=lifespan,
)


@app.exception_handler(AdvisorError)
async def advisor_error_handler(request: Request, exc: AdvisorError) -> JSONResponse:
    """Render every expected failure as ``{"error", "details", "code"}``."""
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, code=exc.code, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)

# Health checks (no versioning)
app.include_router(health_router, tags=["health"])

# API Versioning - v1 endpoints
API_V1_PREFIX = "/api/v1"

app.include_router(company.router, prefix=f"{API_V1_PREFIX}/company", tags=["company"])
app.include_router(
    investor_reports.router, prefix=f"{API_V1_PREFIX}/investor-report", tags=["investor-report"]
)

# Unversioned routes used by the existing frontend
app.include_router(company.router, prefix="/api/company", tags=["company (legacy)"], include_in_schema=False)
app.include_router(
    investor_reports.router,
    prefix="/api/investor-report",
    tags=["investor-report (legacy)"],
    include_in_schema=False,
)


@app.get("/")
def root():
    """Root endpoint - API information and available endpoints."""
    logger.info("root_endpoint_accessed")
    return {
        "service": "Funding Advisor API",
        "version": VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "health_detailed": "/health/detailed",
        "api_version": "v1",
        "endpoints": {
            "company_lookup": "/api/v1/company/summary-basic",
            "company_history": "/api/v1/company/history",
            "investor_match": "/api/v1/company/investor-match",
            "investor_report_edit": "/api/v1/investor-report/manual-validate",
        },
        "legacy_endpoints_note": "Unversioned /api/* endpoints still work. Prefer /api/v1/*.",
    }
