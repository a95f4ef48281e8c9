"""Recommendation repository."""

from sqlalchemy.orm import Session

from funding_advisor.models.recommendation import RecommendationModel
from funding_advisor.repositories.base import BaseRepository


class RecommendationRepository(BaseRepository[RecommendationModel]):
    def __init__(self, db: Session):
        super().__init__(db, RecommendationModel)
