"""Authentication and authorization module."""

from .models import User, UserRole
from .utils import create_access_token, create_refresh_token, verify_token, get_password_hash, verify_password

__all__ = [
    "User",
    "UserRole",
    "create_access_token",
    "create_refresh_token",
    "verify_token",
    "get_password_hash",
    "verify_password",
]
