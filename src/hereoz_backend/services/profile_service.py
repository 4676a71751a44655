"""Candidate profile sections and the public profile view."""

from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.models import User
from hereoz_backend.core.error_handling import AuthorizationError, NotFoundError, ValidationError
from hereoz_backend.models.profile import Education, Experience
from hereoz_backend.repositories.profile import EducationRepository, ExperienceRepository
from hereoz_backend.repositories.user import UserRepository
from hereoz_backend.schemas.profile import EducationCreate, ExperienceCreate, ExperienceUpdate

logger = structlog.get_logger(__name__)


class ProfileService:
    def __init__(self):
        self.user_repository = UserRepository()
        self.experience_repository = ExperienceRepository()
        self.education_repository = EducationRepository()

    def get_public_profile(self, db: Session, user_id: UUID) -> dict:
        """Profile fields, experiences and education of an active user.

        Raises:
            NotFoundError: If the user does not exist or is suspended
        """
        user = self.user_repository.get_by_id(db, user_id)
        if user is None or not user.is_active:
            raise NotFoundError("Profile", user_id)

        return {
            "id": user.id,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "role": user.role,
            "company_id": user.company_id,
            "headline": user.headline,
            "skills": user.skills,
            "languages": user.languages,
            "experience_years": user.experience_years,
            "bio": user.bio,
            "experiences": self.experience_repository.get_for_user(db, user.id),
            "educations": self.education_repository.get_for_user(db, user.id),
        }

    def add_experience(self, db: Session, user: User, data: ExperienceCreate) -> Experience:
        experience = self.experience_repository.create(db, user_id=user.id, **data.dict())
        logger.info("Experience added", experience_id=str(experience.id), user_id=str(user.id))
        return experience

    def update_experience(self, db: Session, experience_id: UUID, user: User, data: ExperienceUpdate) -> Experience:
        """Partial update; the date order is checked against stored values.

        Raises:
            NotFoundError: If the experience does not exist
            AuthorizationError: If it belongs to someone else
            ValidationError: If the resulting end_date precedes start_date
        """
        experience = self._owned(db, self.experience_repository, experience_id, user)
        updates = data.dict(exclude_unset=True)

        start_date = updates.get("start_date", experience.start_date)
        end_date = updates.get("end_date", experience.end_date)
        if end_date is not None and end_date < start_date:
            raise ValidationError("end_date must be on or after start_date", field="end_date")

        try:
            for field, value in updates.items():
                setattr(experience, field, value)
            db.commit()
            db.refresh(experience)
        except Exception:
            db.rollback()
            raise

        logger.info("Experience updated", experience_id=str(experience_id), fields=list(updates.keys()))
        return experience

    def delete_experience(self, db: Session, experience_id: UUID, user: User) -> None:
        experience = self._owned(db, self.experience_repository, experience_id, user)
        self.experience_repository.delete(db, experience)

    def add_education(self, db: Session, user: User, data: EducationCreate) -> Education:
        fields = data.dict()
        if data.level is not None:
            fields["level"] = data.level.value
        education = self.education_repository.create(db, user_id=user.id, **fields)
        logger.info("Education added", education_id=str(education.id), user_id=str(user.id))
        return education

    def delete_education(self, db: Session, education_id: UUID, user: User) -> None:
        education = self._owned(db, self.education_repository, education_id, user)
        self.education_repository.delete(db, education)

    @staticmethod
    def _owned(db: Session, repository, item_id: UUID, user: User):
        item = repository.get_or_raise(db, item_id)
        if item.user_id != user.id:
            raise AuthorizationError("You can only change your own profile")
        return item
