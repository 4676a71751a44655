"""User and company repositories."""

from typing import Optional, List

from sqlalchemy import or_
from sqlalchemy.orm import Session, Query
import structlog

from hereoz_backend.auth.models import User, UserRole
from hereoz_backend.models.company import Company
from .base import BaseRepository

logger = structlog.get_logger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for User model operations."""

    def __init__(self):
        super().__init__(User)

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email.lower()).first()

    def get_by_verification_token(self, db: Session, token: str) -> Optional[User]:
        return db.query(User).filter(User.verification_token == token).first()

    def get_by_reset_token(self, db: Session, token: str) -> Optional[User]:
        return db.query(User).filter(User.reset_token == token).first()

    def get_active_candidates(self, db: Session) -> List[User]:
        """All active users holding the candidate role."""
        return (
            db.query(User)
            .filter(User.role == UserRole.CANDIDATE.value, User.is_active.is_(True))
            .all()
        )

    def search(
        self,
        db: Session,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
        keyword: Optional[str] = None
    ) -> Query:
        """Filtered user query for moderation, newest accounts first.

        `keyword` matches email, first name or last name, case-insensitively.
        """
        query = db.query(User)

        if role:
            query = query.filter(User.role == role)
        if is_active is not None:
            query = query.filter(User.is_active.is_(is_active))
        if keyword:
            pattern = f"%{keyword}%"
            query = query.filter(
                or_(User.email.ilike(pattern), User.first_name.ilike(pattern), User.last_name.ilike(pattern))
            )

        return query.order_by(User.created_at.desc())


class CompanyRepository(BaseRepository[Company]):
    """Repository for Company model operations."""

    def __init__(self):
        super().__init__(Company)

    def get_by_email_domain(self, db: Session, domain: str) -> Optional[Company]:
        return db.query(Company).filter(Company.email_domain == domain.lower()).first()

    def search(self, db: Session, keyword: Optional[str] = None) -> Query:
        query = db.query(Company)
        if keyword:
            query = query.filter(Company.name.ilike(f"%{keyword}%"))
        return query.order_by(Company.name.asc())
