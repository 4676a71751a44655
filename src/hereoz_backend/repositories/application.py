"""Application repository for database operations."""

from typing import Optional, Dict, Collection
from uuid import UUID

from sqlalchemy.orm import Session, Query
from sqlalchemy import func
import structlog

from hereoz_backend.models.application import Application
from .base import BaseRepository

logger = structlog.get_logger(__name__)


class ApplicationRepository(BaseRepository[Application]):
    """Repository for Application model operations."""

    def __init__(self):
        super().__init__(Application)

    def get_by_candidate_and_offer(
        self,
        db: Session,
        candidate_id: UUID,
        offer_id: UUID
    ) -> Optional[Application]:
        """Get the application of a candidate to an offer, if any."""
        return (
            db.query(Application)
            .filter(Application.candidate_id == candidate_id, Application.offer_id == offer_id)
            .first()
        )

    def candidate_query(self, db: Session, candidate_id: UUID, status: Optional[str] = None) -> Query:
        """Applications of one candidate, most recent first.

        Args:
            db: Database session
            candidate_id: Candidate user UUID
            status: Optional status filter

        Returns:
            Unexecuted query
        """
        query = db.query(Application).filter(Application.candidate_id == candidate_id)
        if status:
            query = query.filter(Application.status == status)
        return query.order_by(Application.applied_at.desc())

    def offer_query(self, db: Session, offer_id: UUID, status: Optional[str] = None) -> Query:
        """Applications received by one offer, best matching score first."""
        query = db.query(Application).filter(Application.offer_id == offer_id)
        if status:
            query = query.filter(Application.status == status)
        return query.order_by(Application.matching_score.desc(), Application.applied_at.desc())

    def count_by_status(
        self,
        db: Session,
        candidate_id: Optional[UUID] = None,
        offer_ids: Optional[Collection[UUID]] = None
    ) -> Dict[str, int]:
        """Count applications grouped by status for a candidate or a set of offers."""
        query = db.query(Application.status, func.count(Application.id))
        if candidate_id is not None:
            query = query.filter(Application.candidate_id == candidate_id)
        if offer_ids is not None:
            if not offer_ids:
                return {}
            query = query.filter(Application.offer_id.in_(list(offer_ids)))
        return {status: count for status, count in query.group_by(Application.status).all()}

