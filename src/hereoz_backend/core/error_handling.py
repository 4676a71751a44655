"""Domain error hierarchy and the FastAPI handlers that render it."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logging import get_logger, error_logger

logger = get_logger(__name__)


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorCategory(Enum):
    """Error categories for classification and routing."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BUSINESS_LOGIC = "business_logic"
    SYSTEM = "system"


class HereozError(Exception):
    """Base exception class for Hereoz domain errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.details = details or {}
        self.original_error = original_error
        self.timestamp = datetime.utcnow()

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
            "details": self.details,
            "original_error": str(self.original_error) if self.original_error else None,
        }


class ValidationError(HereozError):
    """Error for data validation failures."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, field: Optional[str] = None, **kwargs):
        super().__init__(message, ErrorCategory.VALIDATION, ErrorSeverity.LOW, **kwargs)
        self.field = field


class InvalidTransitionError(HereozError):
    """Raised when an application status change breaks the state machine."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, current_status: str, target_status: str, reason: str, **kwargs):
        super().__init__(
            reason,
            ErrorCategory.BUSINESS_LOGIC,
            ErrorSeverity.LOW,
            details={"current_status": current_status, "target_status": target_status},
            **kwargs
        )
        self.current_status = current_status
        self.target_status = target_status


class AuthenticationError(HereozError):
    """Error for authentication failures."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Authentication failed", **kwargs):
        super().__init__(message, ErrorCategory.AUTHENTICATION, ErrorSeverity.HIGH, **kwargs)


class AuthorizationError(HereozError):
    """Error for authorization failures."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Access denied", **kwargs):
        super().__init__(message, ErrorCategory.AUTHORIZATION, ErrorSeverity.HIGH, **kwargs)


class NotFoundError(HereozError):
    """Error for missing resources."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: Any = None, **kwargs):
        message = f"{resource} not found" if resource_id is None else f"{resource} {resource_id} not found"
        super().__init__(message, ErrorCategory.NOT_FOUND, ErrorSeverity.LOW, **kwargs)
        self.resource = resource


class ConflictError(HereozError):
    """Error for uniqueness violations and similar state conflicts."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.CONFLICT, ErrorSeverity.LOW, **kwargs)


class DuplicateSwipeError(ConflictError):
    """A user already swiped on this offer."""

    def __init__(self, user_id: Any, offer_id: Any, **kwargs):
        super().__init__(
            "Offer has already been swiped by this user",
            details={"user_id": str(user_id), "offer_id": str(offer_id)},
            **kwargs
        )
        self.user_id = user_id
        self.offer_id = offer_id


def _error_body(message: str, category: str, details: Optional[Any] = None) -> Dict[str, Any]:
    body = {"data": None, "message": message, "error": category}
    if details:
        body["details"] = details
    return body


def _log_error(error: HereozError, request: Request) -> None:
    """Log error with a level matching its severity."""
    log_data = dict(error.to_dict(), path=request.url.path, method=request.method)

    if error.severity == ErrorSeverity.HIGH:
        logger.warning("Request rejected", **log_data)
    else:
        logger.info("Request failed", **log_data)


async def hereoz_error_handler(request: Request, exc: HereozError) -> JSONResponse:
    _log_error(exc, request)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.category.value, jsonable_encoder(exc.details)),
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    for err in errors:
        error_logger.log_validation_error(
            field=".".join(str(part) for part in err.get("loc", [])),
            value=err.get("input"),
            error_message=err.get("msg", ""),
            path=request.url.path,
        )
    first = errors[0] if errors else {}
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(message, ErrorCategory.VALIDATION.value, errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.info(
        "HTTP exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail), "http"),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    error_logger.log_unhandled(exc, request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error", ErrorCategory.SYSTEM.value),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the domain error handlers to the application."""
    app.add_exception_handler(HereozError, hereoz_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
