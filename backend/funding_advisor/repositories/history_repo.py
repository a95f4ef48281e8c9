"""History repository."""

from sqlalchemy.orm import Session

from funding_advisor.models.history import HistoryModel
from funding_advisor.repositories.base import BaseRepository


class HistoryRepository(BaseRepository[HistoryModel]):
    def __init__(self, db: Session):
        super().__init__(db, HistoryModel)

    def record(self, company_id: int, case_id: int, action: str) -> HistoryModel:
        return self.create(HistoryModel(company_id=company_id, case_id=case_id, action=action))
