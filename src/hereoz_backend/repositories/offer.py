"""Offer repository for database operations."""

from datetime import datetime
from typing import Optional, List, Collection
from uuid import UUID

from sqlalchemy.orm import Session, Query
from sqlalchemy import or_
import structlog

from hereoz_backend.models.offer import Offer, OfferStatus
from .base import BaseRepository

logger = structlog.get_logger(__name__)


class OfferRepository(BaseRepository[Offer]):
    """Repository for Offer model operations."""

    def __init__(self):
        super().__init__(Offer)

    def search(
        self,
        db: Session,
        status: Optional[str] = None,
        location: Optional[str] = None,
        contract_type: Optional[str] = None,
        remote_mode: Optional[str] = None,
        company_id: Optional[UUID] = None,
        recruiter_id: Optional[UUID] = None,
        keyword: Optional[str] = None,
        is_urgent: Optional[bool] = None
    ) -> Query:
        """Build a filtered offer query, newest first.

        Args:
            db: Database session
            status: Exact offer status
            location: Case-insensitive substring of the offer location
            contract_type: Exact contract type
            remote_mode: Exact remote mode
            company_id: Owning company
            recruiter_id: Owning recruiter
            keyword: Case-insensitive substring of title or description
            is_urgent: Urgent flag

        Returns:
            Unexecuted query
        """
        query = db.query(Offer)

        if status:
            query = query.filter(Offer.status == status)
        if location:
            query = query.filter(Offer.location.ilike(f"%{location}%"))
        if contract_type:
            query = query.filter(Offer.contract_type == contract_type)
        if remote_mode:
            query = query.filter(Offer.remote_mode == remote_mode)
        if company_id:
            query = query.filter(Offer.company_id == company_id)
        if recruiter_id:
            query = query.filter(Offer.recruiter_id == recruiter_id)
        if keyword:
            pattern = f"%{keyword}%"
            query = query.filter(or_(Offer.title.ilike(pattern), Offer.description.ilike(pattern)))
        if is_urgent is not None:
            query = query.filter(Offer.is_urgent.is_(is_urgent))

        return query.order_by(Offer.created_at.desc())

    def get_open_offers(
        self,
        db: Session,
        exclude_ids: Collection[UUID] = (),
        location: Optional[str] = None,
        contract_type: Optional[str] = None,
        remote_mode: Optional[str] = None
    ) -> List[Offer]:
        """Active, unexpired offers not in `exclude_ids`."""
        query = self.search(
            db,
            status=OfferStatus.ACTIVE.value,
            location=location,
            contract_type=contract_type,
            remote_mode=remote_mode
        ).filter(or_(Offer.expires_at.is_(None), Offer.expires_at > datetime.utcnow()))

        if exclude_ids:
            query = query.filter(Offer.id.notin_(list(exclude_ids)))

        return query.all()

    def get_by_recruiter(self, db: Session, recruiter_id: UUID) -> List[Offer]:
        return db.query(Offer).filter(Offer.recruiter_id == recruiter_id).all()
