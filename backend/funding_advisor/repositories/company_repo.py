"""Company repository."""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from funding_advisor.domain.company_fields import ENRICHMENT_COLUMNS
from funding_advisor.models.company import CompanyModel
from funding_advisor.repositories.base import BaseRepository
from funding_advisor.utils.clock import utcnow


class CompanyRepository(BaseRepository[CompanyModel]):
    def __init__(self, db: Session):
        super().__init__(db, CompanyModel)

    def get_by_name(self, name: str) -> Optional[CompanyModel]:
        """Exact-match lookup on the trimmed name."""
        return (
            self.db.query(self.model)
            .filter(self.model.name == name.strip())
            .order_by(self.model.id)
            .first()
        )

    def get_or_create(self, name: str) -> CompanyModel:
        """Return existing company or create a new one (idempotent)."""
        existing = self.get_by_name(name)
        if existing:
            return existing
        return self.create(CompanyModel(name=name.strip()))

    def merge_enrichment(self, company: CompanyModel, metrics: Dict[str, Any]) -> list[str]:
        """Fill null columns from enrichment metrics; never overwrite a value.

        Values already on the row may come from manual edits, and a later
        enrichment is only a guess, so it must not undo a human correction.

        Returns the columns that were filled. ``updated_at`` is touched either way.
        """
        filled: list[str] = []
        for column, key in ENRICHMENT_COLUMNS.items():
            incoming = metrics.get(key)
            if incoming is None or getattr(company, column) is not None:
                continue
            setattr(company, column, incoming)
            filled.append(column)
        company.updated_at = utcnow()
        self.db.flush()
        return filled

    def apply_column_updates(
        self, company: CompanyModel, values: Dict[str, Any], change_log_json: str
    ) -> CompanyModel:
        """Write manual edits plus the extended change log (caller must commit)."""
        for column, value in values.items():
            setattr(company, column, value)
        company.manual_change_log = change_log_json
        company.updated_at = utcnow()
        self.db.flush()
        return company
