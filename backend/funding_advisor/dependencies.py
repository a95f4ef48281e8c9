"""Dependency injection / factory functions for FastAPI.

Every service is constructed here with its full dependency tree. Service
factories take their collaborators through ``Depends`` so tests can swap the
session or the LLM client with ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from funding_advisor.clients.llm_client import LLMClient
from funding_advisor.config import Settings
from funding_advisor.database import get_db
from funding_advisor.engines.company_enricher import CompanyEnricher
from funding_advisor.engines.investor_advisor import InvestorAdvisor
from funding_advisor.prompts.manager import PromptManager
from funding_advisor.repositories.case_repo import CaseRepository
from funding_advisor.repositories.company_repo import CompanyRepository
from funding_advisor.repositories.history_repo import HistoryRepository
from funding_advisor.repositories.investor_report_repo import (
    InvestorReportChangeRepository,
    InvestorReportRepository,
)
from funding_advisor.repositories.recommendation_repo import RecommendationRepository
from funding_advisor.services.advisory_service import AdvisoryService
from funding_advisor.services.history_service import HistoryService
from funding_advisor.services.lookup_service import LookupService
from funding_advisor.services.manual_update_service import ManualUpdateService
from funding_advisor.services.report_update_service import ReportUpdateService


@lru_cache
def get_settings() -> Settings:
    return Settings()


# ── Singletons (stateless, reusable) ────────────────────────────────────

@lru_cache
def get_prompt_manager() -> PromptManager:
    return PromptManager()


@lru_cache
def get_llm_client() -> LLMClient:
    s = get_settings()
    return LLMClient(
        api_key=s.anthropic_api_key,
        model=s.claude_model,
        max_tokens=s.llm_max_tokens,
        timeout=s.llm_timeout_seconds,
        max_retries=s.llm_max_retries,
        web_search_enabled=s.web_search_enabled,
        web_search_max_uses=s.web_search_max_uses,
    )


# ── Per-request (need a DB session) ─────────────────────────────────────

def get_lookup_service(
    db: Session = Depends(get_db),
    llm: LLMClient = Depends(get_llm_client),
) -> LookupService:
    s = get_settings()
    return LookupService(
        db=db,
        enricher=CompanyEnricher(
            llm,
            get_prompt_manager(),
            prompt_override=s.lookup_agent,
            default_country=s.default_country,
        ),
        company_repo=CompanyRepository(db),
        case_repo=CaseRepository(db),
        recommendation_repo=RecommendationRepository(db),
        history_repo=HistoryRepository(db),
        source=s.lookup_source,
    )


def get_history_service(db: Session = Depends(get_db)) -> HistoryService:
    s = get_settings()
    return HistoryService(
        db=db,
        company_repo=CompanyRepository(db),
        case_repo=CaseRepository(db),
        report_repo=InvestorReportRepository(db),
        change_repo=InvestorReportChangeRepository(db),
        default_limit=s.history_default_limit,
        max_limit=s.history_max_limit,
    )


def get_advisory_service(
    db: Session = Depends(get_db),
    llm: LLMClient = Depends(get_llm_client),
) -> AdvisoryService:
    s = get_settings()
    return AdvisoryService(
        db=db,
        advisor=InvestorAdvisor(llm, get_prompt_manager(), prompt_override=s.funding_advisor_agent),
        history_service=get_history_service(db),
        report_repo=InvestorReportRepository(db),
    )


def get_manual_update_service(db: Session = Depends(get_db)) -> ManualUpdateService:
    return ManualUpdateService(
        db=db,
        company_repo=CompanyRepository(db),
        case_repo=CaseRepository(db),
    )


def get_report_update_service(db: Session = Depends(get_db)) -> ReportUpdateService:
    return ReportUpdateService(
        db=db,
        report_repo=InvestorReportRepository(db),
        change_repo=InvestorReportChangeRepository(db),
    )
