"""Generic base repository with reusable CRUD operations."""

from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from funding_advisor.database import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Thin data-access layer over SQLAlchemy.

    Subclasses add domain-specific queries.
    Repositories only modify the session (add/flush) - the calling service
    decides when to commit or roll back, so one logical update can span
    several repositories and still land atomically.
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    # ── reads ────────────────────────────────────────────────────────

    def get(self, id: int) -> Optional[T]:
        return self.db.get(self.model, id)

    def get_recent(self, limit: int) -> List[T]:
        """Newest rows first; ties broken by id so order is stable."""
        return (
            self.db.query(self.model)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .limit(limit)
            .all()
        )

    # ── writes ───────────────────────────────────────────────────────

    def create(self, obj: T) -> T:
        """Add object to session (caller must commit)."""
        self.db.add(obj)
        self.db.flush()  # Assigns ID without committing
        return obj

    def create_many(self, objs: List[T]) -> List[T]:
        """Add multiple objects to session (caller must commit)."""
        self.db.add_all(objs)
        self.db.flush()
        return objs
