"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.dependencies import get_current_user
from hereoz_backend.auth.models import User
from hereoz_backend.core.database import get_db
from hereoz_backend.core.logging import performance_logger
from hereoz_backend.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    RefreshRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UserResponse,
)
from hereoz_backend.schemas.common import Envelope
from hereoz_backend.services.auth_service import AuthService
from hereoz_backend.services.notification_service import NotificationService, get_notification_service

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=Envelope[UserResponse], status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service)
):
    """Create an account and send the verification email."""
    with performance_logger.log_operation_time("register", role=data.role.value):
        user = AuthService(notifier).register(db, data)
    return {"data": user, "message": "Registration successful, check your email to verify your account"}


@router.post("/login", response_model=Envelope[LoginResponse])
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for an access/refresh token pair."""
    service = AuthService()
    with performance_logger.log_operation_time("login"):
        user = service.authenticate(db, data.email, data.password)
        tokens = service.issue_tokens(user)
    return {"data": dict(tokens, user=user), "message": "Login successful"}


@router.post("/refresh", response_model=Envelope[LoginResponse])
def refresh(data: RefreshRequest, db: Session = Depends(get_db)):
    user, tokens = AuthService().refresh(db, data.refresh_token)
    return {"data": dict(tokens, user=user), "message": "Token refreshed"}


@router.get("/me", response_model=Envelope[UserResponse])
def me(current_user: User = Depends(get_current_user)):
    return {"data": current_user}


@router.post("/verify-email/{token}", response_model=Envelope[UserResponse])
def verify_email(token: str, db: Session = Depends(get_db)):
    user = AuthService().verify_email(db, token)
    return {"data": user, "message": "Email verified"}


@router.post("/forgot-password", response_model=Envelope[dict])
def forgot_password(
    data: ForgotPasswordRequest,
    db: Session = Depends(get_db),
    notifier: NotificationService = Depends(get_notification_service)
):
    """Always answers the same way so the endpoint does not reveal which emails exist."""
    AuthService(notifier).forgot_password(db, data.email.lower())
    return {"data": None, "message": "If an account exists for this email, a reset link has been sent"}


@router.post("/reset-password", response_model=Envelope[dict])
def reset_password(data: ResetPasswordRequest, db: Session = Depends(get_db)):
    AuthService().reset_password(db, data.token, data.new_password)
    return {"data": None, "message": "Password has been reset"}
