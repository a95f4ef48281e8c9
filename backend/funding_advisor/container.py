"""Dependency Injection Container.

Centralized definition of all application dependencies using dependency-injector.
Used by the CLI and the facade; FastAPI wires the same classes through
``funding_advisor.dependencies``.

Usage::

    from funding_advisor.container import AppContainer

    container = AppContainer()
    container.init_resources()  # Create schema, open the session

    lookup_svc = container.lookup_service()
    result = lookup_svc.lookup_basic("Acme Oy")

    container.shutdown_resources()
"""

from dependency_injector import containers, providers

from funding_advisor.clients.llm_client import LLMClient
from funding_advisor.config import Settings
from funding_advisor.database import Store
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


def _init_store(store: Store):
    """Create tables and additive columns, dispose the engine on shutdown."""
    store.init_schema()
    yield store
    store.dispose()


def _open_session(store: Store):
    session = store.session()
    try:
        yield session
    finally:
        session.close()


class AppContainer(containers.DeclarativeContainer):
    """Application Dependency Injection Container.

    Layers, bottom-up:
    - Configuration (Settings)
    - Database (store, session)
    - Repositories (data access)
    - Clients and prompts (infrastructure)
    - Engines (LLM agents)
    - Services (orchestration)
    """

    # ══════════════════════════════════════════════════════════════════
    # CONFIGURATION
    # ══════════════════════════════════════════════════════════════════

    settings = providers.Singleton(Settings)

    # ══════════════════════════════════════════════════════════════════
    # DATABASE
    # ══════════════════════════════════════════════════════════════════

    store = providers.Resource(
        _init_store,
        store=providers.Singleton(Store.from_settings, settings=settings),
    )

    # One session per container instance, closed on shutdown_resources()
    db_session = providers.Resource(
        _open_session,
        store=store,
    )

    # ══════════════════════════════════════════════════════════════════
    # REPOSITORIES (Data Access Layer)
    # ══════════════════════════════════════════════════════════════════

    company_repo = providers.Factory(CompanyRepository, db=db_session)
    case_repo = providers.Factory(CaseRepository, db=db_session)
    recommendation_repo = providers.Factory(RecommendationRepository, db=db_session)
    history_repo = providers.Factory(HistoryRepository, db=db_session)
    investor_report_repo = providers.Factory(InvestorReportRepository, db=db_session)
    investor_report_change_repo = providers.Factory(InvestorReportChangeRepository, db=db_session)

    # ══════════════════════════════════════════════════════════════════
    # EXTERNAL CLIENTS (Infrastructure)
    # ══════════════════════════════════════════════════════════════════

    llm_client = providers.Singleton(
        LLMClient,
        api_key=settings.provided.anthropic_api_key,
        model=settings.provided.claude_model,
        max_tokens=settings.provided.llm_max_tokens,
        timeout=settings.provided.llm_timeout_seconds,
        max_retries=settings.provided.llm_max_retries,
        web_search_enabled=settings.provided.web_search_enabled,
        web_search_max_uses=settings.provided.web_search_max_uses,
    )

    prompt_manager = providers.Singleton(PromptManager)

    # ══════════════════════════════════════════════════════════════════
    # ENGINES (Business Logic Layer)
    # ══════════════════════════════════════════════════════════════════

    company_enricher = providers.Factory(
        CompanyEnricher,
        llm_client=llm_client,
        prompt_manager=prompt_manager,
        prompt_override=settings.provided.lookup_agent,
        default_country=settings.provided.default_country,
    )

    investor_advisor = providers.Factory(
        InvestorAdvisor,
        llm_client=llm_client,
        prompt_manager=prompt_manager,
        prompt_override=settings.provided.funding_advisor_agent,
    )

    # ══════════════════════════════════════════════════════════════════
    # SERVICES (Orchestration Layer)
    # ══════════════════════════════════════════════════════════════════

    lookup_service = providers.Factory(
        LookupService,
        db=db_session,
        enricher=company_enricher,
        company_repo=company_repo,
        case_repo=case_repo,
        recommendation_repo=recommendation_repo,
        history_repo=history_repo,
        source=settings.provided.lookup_source,
    )

    history_service = providers.Factory(
        HistoryService,
        db=db_session,
        company_repo=company_repo,
        case_repo=case_repo,
        report_repo=investor_report_repo,
        change_repo=investor_report_change_repo,
        default_limit=settings.provided.history_default_limit,
        max_limit=settings.provided.history_max_limit,
    )

    advisory_service = providers.Factory(
        AdvisoryService,
        db=db_session,
        advisor=investor_advisor,
        history_service=history_service,
        report_repo=investor_report_repo,
    )

    manual_update_service = providers.Factory(
        ManualUpdateService,
        db=db_session,
        company_repo=company_repo,
        case_repo=case_repo,
    )

    report_update_service = providers.Factory(
        ReportUpdateService,
        db=db_session,
        report_repo=investor_report_repo,
        change_repo=investor_report_change_repo,
    )
