"""Advisory facade — single entry point for non-HTTP consumers.

The CLI (scripts/run_lookup.py) and notebooks use this instead of wiring
up services directly. If the internal wiring changes (new engines,
different repos) only this file needs updating.

Usage::

    facade = AdvisoryFacade()          # uses Settings() from .env
    result = facade.lookup("Acme Oy")
    report = facade.match_investors(result["companyId"])
    facade.close()
"""

import logging
from typing import Any, Dict, List, Optional

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

logger = logging.getLogger(__name__)


class AdvisoryFacade:
    """High-level API for lookups, investor matching and manual edits.

    Hides all internal wiring (store, repos, engines, services, clients).
    Returns only plain JSON-ready dicts, keyed exactly like the HTTP API.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        llm_client: Optional[LLMClient] = None,
        prompt_manager: Optional[PromptManager] = None,
    ):
        self._settings = settings or Settings()
        self._setup_db()
        self._setup_repos()
        self._setup_clients(llm_client, prompt_manager)
        self._setup_services()

    # ── internal wiring (private) ─────────────────────────────────────

    def _setup_db(self) -> None:
        self._store = Store.from_settings(self._settings)
        self._store.init_schema()
        self._db = self._store.session()

    def _setup_repos(self) -> None:
        db = self._db
        self._company_repo = CompanyRepository(db)
        self._case_repo = CaseRepository(db)
        self._recommendation_repo = RecommendationRepository(db)
        self._history_repo = HistoryRepository(db)
        self._report_repo = InvestorReportRepository(db)
        self._change_repo = InvestorReportChangeRepository(db)

    def _setup_clients(
        self, llm_client: Optional[LLMClient], prompt_manager: Optional[PromptManager]
    ) -> None:
        s = self._settings
        self._llm = llm_client or LLMClient(
            api_key=s.anthropic_api_key,
            model=s.claude_model,
            max_tokens=s.llm_max_tokens,
            timeout=s.llm_timeout_seconds,
            max_retries=s.llm_max_retries,
            web_search_enabled=s.web_search_enabled,
            web_search_max_uses=s.web_search_max_uses,
        )
        self._prompts = prompt_manager or PromptManager()

    def _setup_services(self) -> None:
        s = self._settings
        db = self._db
        self._history = HistoryService(
            db,
            self._company_repo,
            self._case_repo,
            self._report_repo,
            self._change_repo,
            default_limit=s.history_default_limit,
            max_limit=s.history_max_limit,
        )
        self._lookup = LookupService(
            db,
            CompanyEnricher(
                self._llm,
                self._prompts,
                prompt_override=s.lookup_agent,
                default_country=s.default_country,
            ),
            self._company_repo,
            self._case_repo,
            self._recommendation_repo,
            self._history_repo,
            source=s.lookup_source,
        )
        self._advisory = AdvisoryService(
            db,
            InvestorAdvisor(self._llm, self._prompts, prompt_override=s.funding_advisor_agent),
            self._history,
            self._report_repo,
        )
        self._manual = ManualUpdateService(db, self._company_repo, self._case_repo)
        self._report_edits = ReportUpdateService(db, self._report_repo, self._change_repo)

    # ══════════════════════════════════════════════════════════════════
    # LOOKUPS & MATCHING
    # ══════════════════════════════════════════════════════════════════

    def lookup(self, company_name: str, extra_info: Optional[str] = None) -> Dict[str, Any]:
        """Basic lookup, or a detailed one when ``extra_info`` is given."""
        if extra_info is None:
            result = self._lookup.lookup_basic(company_name, {"companyName": company_name})
        else:
            result = self._lookup.lookup_detailed(
                company_name,
                extra_info,
                {"companyName": company_name, "extraInfo": extra_info},
            )
        return result.model_dump(by_alias=True, mode="json")

    def match_investors(self, company_id: Any) -> Dict[str, Any]:
        return self._advisory.match_investors(company_id).model_dump(by_alias=True, mode="json")

    # ══════════════════════════════════════════════════════════════════
    # MANUAL EDITS
    # ══════════════════════════════════════════════════════════════════

    def update_company(self, company_id: Any, updates: Any) -> Dict[str, Any]:
        result = self._manual.apply_manual_updates(company_id, updates)
        return result.model_dump(by_alias=True, mode="json")

    def update_report(self, report_id: Any, recommendation: Any) -> Dict[str, Any]:
        result = self._report_edits.apply_manual_report_updates(report_id, recommendation)
        return result.model_dump(by_alias=True, mode="json")

    # ══════════════════════════════════════════════════════════════════
    # READ-ONLY QUERIES
    # ══════════════════════════════════════════════════════════════════

    def history(self, limit: Any = None) -> List[Dict[str, Any]]:
        return [
            entry.model_dump(by_alias=True, mode="json")
            for entry in self._history.recent_history(limit)
        ]

    def company_profile(self, company_id: int) -> Optional[Dict[str, Any]]:
        profile = self._history.company_profile(company_id)
        return profile.model_dump(by_alias=True, mode="json") if profile else None

    # ── lifecycle ─────────────────────────────────────────────────────

    def close(self) -> None:
        """Close the database session and dispose the engine."""
        self._db.close()
        self._store.dispose()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
