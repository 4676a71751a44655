"""Authentication utilities."""

import hashlib
import os
import uuid
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext
import structlog

from hereoz_backend.core.config import settings
from .models import User, TokenData

logger = structlog.get_logger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def _testing() -> bool:
    return os.getenv("TESTING", "false").lower() in ("1", "true")


def get_pwd_context() -> CryptContext:
    """Get password context based on environment."""
    if _testing():
        return CryptContext(schemes=["plaintext"], deprecated="auto")
    return CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    if not _testing() and len(plain_password.encode("utf-8")) > 72:
        plain_password = hashlib.sha256(plain_password.encode("utf-8")).hexdigest()
    return get_pwd_context().verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password, pre-hashing with SHA-256 past bcrypt's 72-byte limit."""
    if not _testing() and len(password.encode("utf-8")) > 72:
        password = hashlib.sha256(password.encode("utf-8")).hexdigest()
    return get_pwd_context().hash(password)


def _create_token(user: User, token_type: str, expires_delta: timedelta) -> str:
    now = datetime.utcnow()
    expire = now + expires_delta
    jti = str(uuid.uuid4())
    to_encode = {
        "sub": str(user.id),
        "role": user.role,
        "type": token_type,
        "jti": jti,
        "iat": now,
        "exp": expire,
    }

    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)
    logger.debug("Token created", token_type=token_type, expires_at=expire.isoformat(), jti=jti)
    return encoded_jwt


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token.

    Args:
        user: Token subject
        expires_delta: Token lifetime, defaults to the configured minutes

    Returns:
        Encoded JWT token
    """
    return _create_token(
        user,
        ACCESS_TOKEN_TYPE,
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )


def create_refresh_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    return _create_token(
        user,
        REFRESH_TOKEN_TYPE,
        expires_delta or timedelta(days=settings.refresh_token_expire_days)
    )


def verify_token(token: str, expected_type: str = ACCESS_TOKEN_TYPE) -> Optional[TokenData]:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        expected_type: `access` or `refresh`

    Returns:
        TokenData if valid, None otherwise
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.warning("Token verification failed", error=str(e))
        return None

    user_id_str = payload.get("sub")
    token_type = payload.get("type")

    if user_id_str is None:
        logger.warning("Token missing user ID")
        return None

    if token_type != expected_type:
        logger.warning("Token type mismatch", expected=expected_type, actual=token_type)
        return None

    try:
        user_id = UUID(user_id_str)
    except ValueError as e:
        logger.warning("Invalid UUID in token", error=str(e))
        return None

    return TokenData(user_id=user_id, role=payload.get("role"), token_type=token_type)


def generate_one_time_token() -> str:
    """Random URL-safe token for email verification and password resets."""
    return uuid.uuid4().hex + uuid.uuid4().hex
