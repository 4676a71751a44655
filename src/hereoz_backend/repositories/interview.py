"""Interview repository."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session, Query
from sqlalchemy import or_

from hereoz_backend.models.application import Application
from hereoz_backend.models.interview import Interview, InterviewStatus
from hereoz_backend.models.offer import Offer
from .base import BaseRepository


class InterviewRepository(BaseRepository[Interview]):
    """Repository for Interview model operations."""

    def __init__(self):
        super().__init__(Interview)

    def for_user_query(
        self,
        db: Session,
        user_id: UUID,
        status: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None
    ) -> Query:
        """Interviews where the user is the candidate or the offer's recruiter, by date."""
        query = (
            db.query(Interview)
            .join(Application, Interview.application_id == Application.id)
            .join(Offer, Application.offer_id == Offer.id)
            .filter(or_(Application.candidate_id == user_id, Offer.recruiter_id == user_id))
        )
        if status:
            query = query.filter(Interview.status == status)
        if date_from:
            query = query.filter(Interview.scheduled_at >= date_from)
        if date_to:
            query = query.filter(Interview.scheduled_at <= date_to)
        return query.order_by(Interview.scheduled_at.asc())

    def count_upcoming_for_candidate(self, db: Session, candidate_id: UUID) -> int:
        return (
            db.query(Interview)
            .join(Application, Interview.application_id == Application.id)
            .filter(
                Application.candidate_id == candidate_id,
                Interview.scheduled_at >= datetime.utcnow(),
                Interview.status.in_([InterviewStatus.PLANNED.value, InterviewStatus.CONFIRMED.value])
            )
            .count()
        )
