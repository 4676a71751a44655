"""FastAPI dependencies for authentication and authorization."""

from typing import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import structlog

from hereoz_backend.core.database import get_db
from hereoz_backend.core.logging import bind_request_context
from .models import User, UserRole
from .utils import verify_token

logger = structlog.get_logger(__name__)

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Get current authenticated user from the bearer access token.

    Raises:
        HTTPException: 401 if the token is missing, invalid, or the user is gone
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not credentials:
        logger.warning("No credentials provided")
        raise credentials_exception

    token_data = verify_token(credentials.credentials)
    if token_data is None or token_data.user_id is None:
        raise credentials_exception

    user = db.query(User).filter(User.id == token_data.user_id).first()
    if user is None or not user.is_active:
        logger.warning("User not found or inactive", user_id=str(token_data.user_id))
        raise credentials_exception

    bind_request_context(user_id=user.id)
    return user


def require_roles(*roles: UserRole) -> Callable[..., User]:
    """Dependency factory restricting an endpoint to the given roles.

    Args:
        roles: Roles allowed through

    Returns:
        Dependency function yielding the current user
    """
    allowed = {role.value for role in roles}

    def check_roles(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            logger.warning(
                "Role access denied",
                user_id=str(current_user.id),
                role=current_user.role,
                required=sorted(allowed)
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions for this action"
            )
        return current_user

    return check_roles


require_candidate = require_roles(UserRole.CANDIDATE)
require_recruiter = require_roles(UserRole.RECRUITER, UserRole.COMPANY_ADMIN)
require_staff = require_roles(UserRole.RECRUITER, UserRole.COMPANY_ADMIN, UserRole.PLATFORM_ADMIN)
require_admin = require_roles(UserRole.PLATFORM_ADMIN)
