"""Account registration, login and token lifecycle."""

from datetime import datetime, timedelta
from typing import Optional, Tuple

from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.models import User, UserRole
from hereoz_backend.auth.utils import (
    REFRESH_TOKEN_TYPE,
    create_access_token,
    create_refresh_token,
    generate_one_time_token,
    get_password_hash,
    verify_password,
    verify_token,
)
from hereoz_backend.core.config import settings
from hereoz_backend.core.error_handling import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ValidationError,
)
from hereoz_backend.repositories.user import CompanyRepository, UserRepository
from hereoz_backend.schemas.auth import ProfileUpdate, RegisterRequest
from .notification_service import NotificationService

logger = structlog.get_logger(__name__)


class AuthService:
    """Service for user accounts and credentials."""

    def __init__(self, notifier: Optional[NotificationService] = None):
        self.repository = UserRepository()
        self.company_repository = CompanyRepository()
        self.notifier = notifier or NotificationService()

    def register(self, db: Session, data: RegisterRequest) -> User:
        """Create an unverified account and send the verification email.

        Recruiters and company admins are attached to the company whose
        email domain matches theirs.

        Raises:
            ConflictError: If the email is already registered
        """
        if self.repository.get_by_email(db, data.email):
            raise ConflictError("An account with this email already exists")

        company_id = None
        if data.role in (UserRole.RECRUITER, UserRole.COMPANY_ADMIN):
            domain = data.email.rsplit("@", 1)[-1]
            company = self.company_repository.get_by_email_domain(db, domain)
            if company:
                company_id = company.id

        token = generate_one_time_token()
        user = self.repository.create(
            db,
            email=data.email.lower(),
            hashed_password=get_password_hash(data.password),
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            role=data.role.value,
            company_id=company_id,
            email_verified=False,
            verification_token=token,
            verification_token_expires_at=datetime.utcnow() + timedelta(hours=settings.email_verification_hours),
        )

        logger.info("User registered", user_id=str(user.id), role=user.role, company_id=str(company_id) if company_id else None)
        self.notifier.send_verification_email(user.email, token)
        return user

    def authenticate(self, db: Session, email: str, password: str) -> User:
        """Check credentials and stamp the login time.

        Raises:
            AuthenticationError: Unknown email or wrong password
            AuthorizationError: Inactive or unverified account
        """
        user = self.repository.get_by_email(db, email)

        if not user or not verify_password(password, user.hashed_password):
            logger.warning("Invalid login attempt", email=email)
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            logger.warning("Login on inactive account", user_id=str(user.id))
            raise AuthorizationError("Account is deactivated")

        if not user.email_verified:
            logger.info("Login on unverified account", user_id=str(user.id))
            raise AuthorizationError("Please verify your email before logging in")

        user.last_login_at = datetime.utcnow()
        db.commit()
        db.refresh(user)

        logger.info("User authenticated successfully", user_id=str(user.id))
        return user

    def issue_tokens(self, user: User) -> dict:
        return {
            "access_token": create_access_token(user),
            "refresh_token": create_refresh_token(user),
            "token_type": "bearer",
            "expires_in": settings.access_token_expire_minutes * 60,
        }

    def refresh(self, db: Session, refresh_token: str) -> Tuple[User, dict]:
        """Exchange a valid refresh token for a new token pair.

        Raises:
            AuthenticationError: If the token is invalid or the user is gone
        """
        token_data = verify_token(refresh_token, expected_type=REFRESH_TOKEN_TYPE)
        if token_data is None:
            raise AuthenticationError("Invalid refresh token")

        user = self.repository.get_by_id(db, token_data.user_id)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid refresh token")

        return user, self.issue_tokens(user)

    def verify_email(self, db: Session, token: str) -> User:
        """Consume an email verification token.

        Raises:
            ValidationError: Unknown, used or expired token
        """
        user = self.repository.get_by_verification_token(db, token)
        if not user:
            raise ValidationError("Invalid or already used verification token", field="token")

        if user.verification_token_expires_at and user.verification_token_expires_at < datetime.utcnow():
            raise ValidationError("Verification token has expired", field="token")

        user.email_verified = True
        user.verification_token = None
        user.verification_token_expires_at = None
        db.commit()
        db.refresh(user)

        logger.info("Email verified", user_id=str(user.id))
        return user

    def forgot_password(self, db: Session, email: str) -> None:
        """Send a reset link when the account exists; silent otherwise."""
        user = self.repository.get_by_email(db, email)
        if not user or not user.is_active:
            logger.info("Password reset requested for unknown email")
            return

        token = generate_one_time_token()
        user.reset_token = token
        user.reset_token_expires_at = datetime.utcnow() + timedelta(hours=settings.password_reset_hours)
        db.commit()

        logger.info("Password reset token issued", user_id=str(user.id))
        self.notifier.send_password_reset_email(user.email, token)

    def reset_password(self, db: Session, token: str, new_password: str) -> User:
        """Consume a reset token and set a new password.

        Raises:
            ValidationError: Unknown, used or expired token
        """
        user = self.repository.get_by_reset_token(db, token)
        if not user:
            raise ValidationError("Invalid or already used reset token", field="token")

        if user.reset_token_expires_at and user.reset_token_expires_at < datetime.utcnow():
            raise ValidationError("Reset token has expired", field="token")

        user.hashed_password = get_password_hash(new_password)
        user.reset_token = None
        user.reset_token_expires_at = None
        db.commit()
        db.refresh(user)

        logger.info("Password reset", user_id=str(user.id))
        return user

    def update_profile(self, db: Session, user: User, data: ProfileUpdate) -> User:
        updates = data.dict(exclude_unset=True)
        try:
            for field, value in updates.items():
                setattr(user, field, value)
            db.commit()
            db.refresh(user)
        except Exception:
            db.rollback()
            raise

        logger.info("Profile updated", user_id=str(user.id), fields=list(updates.keys()))
        return user
