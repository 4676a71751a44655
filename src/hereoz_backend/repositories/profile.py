"""Repositories for candidate profile sections."""

from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from hereoz_backend.models.profile import Education, Experience
from .base import BaseRepository


class ExperienceRepository(BaseRepository[Experience]):

    def __init__(self):
        super().__init__(Experience)

    def get_for_user(self, db: Session, user_id: UUID) -> List[Experience]:
        """Most recent position first."""
        return (
            db.query(Experience)
            .filter(Experience.user_id == user_id)
            .order_by(Experience.start_date.desc())
            .all()
        )


class EducationRepository(BaseRepository[Education]):

    def __init__(self):
        super().__init__(Education)

    def get_for_user(self, db: Session, user_id: UUID) -> List[Education]:
        return (
            db.query(Education)
            .filter(Education.user_id == user_id)
            .order_by(Education.start_date.desc())
            .all()
        )
