"""Applies manual edits to a company record and extends its change log."""

import json
import logging
from typing import Any, Dict, List, Mapping

from sqlalchemy.orm import Session

from funding_advisor.domain.company_fields import (
    coerce_manual_value,
    parse_change_log,
    resolve_column,
    values_equal,
)
from funding_advisor.domain.errors import InvalidInputError, NotFoundError, ValidationFailedError
from funding_advisor.engines.history_assembler import shape_metrics
from funding_advisor.repositories.case_repo import CaseRepository
from funding_advisor.repositories.company_repo import CompanyRepository
from funding_advisor.schemas.company import ManualChange, ManualCompanyUpdateResult
from funding_advisor.utils.clock import isoformat_utc, utcnow
from funding_advisor.utils.ids import coerce_id

logger = logging.getLogger(__name__)


class ManualUpdateService:
    def __init__(self, db: Session, company_repo: CompanyRepository, case_repo: CaseRepository):
        self.db = db
        self.companies = company_repo
        self.cases = case_repo

    def apply_manual_updates(self, company_id: Any, updates: Any) -> ManualCompanyUpdateResult:
        """Validate, diff and persist a map of field edits.

        Every field is coerced before anything is written: one bad value fails
        the whole request and leaves the row untouched. Unknown keys are
        ignored, unchanged values are dropped.

        Raises:
            InvalidInputError: non-integer id or non-object ``updates``.
            NotFoundError: no company with that id.
            ValidationFailedError: at least one value is unusable.
        """
        numeric_id = coerce_id(company_id, "companyId")
        if not isinstance(updates, Mapping):
            raise InvalidInputError("updates must be a JSON object")

        company = self.companies.get(numeric_id)
        if company is None:
            raise NotFoundError(f"Company {numeric_id} not found")

        errors: List[str] = []
        coerced: Dict[str, Any] = {}
        for field, raw in updates.items():
            column = resolve_column(field)
            if column is None:
                logger.debug("Ignoring unknown update key %r for company %d", field, numeric_id)
                continue
            result = coerce_manual_value(column, raw)
            if result.error:
                errors.append(result.error)
            elif result.persist:
                coerced[column] = result.value

        if errors:
            logger.info("Manual update for company %d rejected: %s", numeric_id, "; ".join(errors))
            raise ValidationFailedError(errors)

        changed_at = isoformat_utc(utcnow())
        values: Dict[str, Any] = {}
        changes: List[Dict[str, Any]] = []
        for column, candidate in coerced.items():
            previous = getattr(company, column)
            if values_equal(previous, candidate):
                continue
            values[column] = candidate
            changes.append({"column": column, "from": previous, "to": candidate, "changedAt": changed_at})

        existing_log = parse_change_log(company.manual_change_log)

        if not values:
            return ManualCompanyUpdateResult(
                updated=False,
                message="No changes detected",
                manual_change_log=self._entries(existing_log),
                metrics=self._metrics(company),
            )

        log = existing_log + changes
        try:
            self.companies.apply_column_updates(company, values, json.dumps(log, ensure_ascii=False))
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.exception("Manual update for company %d failed (rolled back)", numeric_id)
            raise

        logger.info("Manual update for company %d: %s", numeric_id, ", ".join(values))
        return ManualCompanyUpdateResult(
            updated=True,
            message=f"{len(changes)} field(s) updated",
            changes=self._entries(changes),
            manual_change_log=self._entries(log),
            metrics=self._metrics(company),
        )

    def _metrics(self, company):
        return shape_metrics(company, self.cases.get_latest_for_company(company.id))

    @staticmethod
    def _entries(log: List[Any]) -> List[ManualChange]:
        return [ManualChange.model_validate(entry) for entry in log if isinstance(entry, dict)]
