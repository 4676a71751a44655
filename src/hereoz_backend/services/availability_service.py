"""Availability slots."""

from typing import List
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.models import User
from hereoz_backend.core.error_handling import AuthorizationError
from hereoz_backend.models.availability import AvailabilitySlot, Recurrence
from hereoz_backend.repositories.conversation import AvailabilityRepository
from hereoz_backend.schemas.availability import AvailabilityCreate

logger = structlog.get_logger(__name__)


class AvailabilityService:
    def __init__(self):
        self.repository = AvailabilityRepository()

    def list_for_user(self, db: Session, user_id: UUID) -> List[AvailabilitySlot]:
        return self.repository.get_active_for_user(db, user_id)

    def create_slot(self, db: Session, user: User, slot_data: AvailabilityCreate) -> AvailabilitySlot:
        slot = self.repository.create(
            db,
            user_id=user.id,
            weekday=slot_data.weekday,
            start_time=slot_data.start_time,
            end_time=slot_data.end_time,
            recurrence=slot_data.recurrence.value,
            specific_date=slot_data.specific_date if slot_data.recurrence == Recurrence.ONCE else None,
            timezone=slot_data.timezone,
            is_active=True,
        )
        logger.info("Availability slot created", slot_id=str(slot.id), user_id=str(user.id))
        return slot

    def delete_slot(self, db: Session, slot_id: UUID, user: User) -> None:
        slot = self.repository.get_or_raise(db, slot_id)
        if slot.user_id != user.id:
            raise AuthorizationError("You can only delete your own availability")
        self.repository.delete(db, slot)
