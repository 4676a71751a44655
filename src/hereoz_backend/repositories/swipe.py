"""Swipe event repository."""

from typing import Optional, Dict, Set
from uuid import UUID

from sqlalchemy.orm import Session, Query
from sqlalchemy import func

from hereoz_backend.models.swipe_event import SwipeEvent
from .base import BaseRepository


class SwipeRepository(BaseRepository[SwipeEvent]):
    """Repository for SwipeEvent model operations.

    Swipe events are append-only, so this repository exposes no update path
    beyond what the base class offers and services never call it.
    """

    def __init__(self):
        super().__init__(SwipeEvent)

    def get_by_user_and_offer(self, db: Session, user_id: UUID, offer_id: UUID) -> Optional[SwipeEvent]:
        return (
            db.query(SwipeEvent)
            .filter(SwipeEvent.user_id == user_id, SwipeEvent.offer_id == offer_id)
            .first()
        )

    def get_swiped_offer_ids(self, db: Session, user_id: UUID) -> Set[UUID]:
        rows = db.query(SwipeEvent.offer_id).filter(SwipeEvent.user_id == user_id).all()
        return {row[0] for row in rows}

    def history_query(self, db: Session, user_id: UUID, action: Optional[str] = None) -> Query:
        query = db.query(SwipeEvent).filter(SwipeEvent.user_id == user_id)
        if action:
            query = query.filter(SwipeEvent.action == action)
        return query.order_by(SwipeEvent.created_at.desc())

    def count_by_action(self, db: Session, user_id: UUID) -> Dict[str, int]:
        rows = (
            db.query(SwipeEvent.action, func.count(SwipeEvent.id))
            .filter(SwipeEvent.user_id == user_id)
            .group_by(SwipeEvent.action)
            .all()
        )
        return {action: count for action, count in rows}
