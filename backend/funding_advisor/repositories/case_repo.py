"""Company case repository."""

from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from funding_advisor.models.company_case import CompanyCaseModel
from funding_advisor.repositories.base import BaseRepository


class CaseRepository(BaseRepository[CompanyCaseModel]):
    def __init__(self, db: Session):
        super().__init__(db, CompanyCaseModel)

    def get_recent_with_company(self, limit: int) -> List[CompanyCaseModel]:
        """Latest cases, newest first, with their company eagerly loaded."""
        return (
            self.db.query(self.model)
            .options(joinedload(self.model.company))
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .limit(limit)
            .all()
        )

    def get_latest_for_company(self, company_id: int) -> Optional[CompanyCaseModel]:
        return (
            self.db.query(self.model)
            .filter(self.model.company_id == company_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .first()
        )
