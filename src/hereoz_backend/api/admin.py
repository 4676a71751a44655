"""Platform administration API endpoints."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.dependencies import require_admin
from hereoz_backend.auth.models import User, UserRole
from hereoz_backend.core.database import get_db
from hereoz_backend.models.offer import OfferStatus
from hereoz_backend.schemas.admin import AdminUserDetails, AdminUserResponse, ModerationRequest, PlatformStats
from hereoz_backend.schemas.common import Envelope, PageParams
from hereoz_backend.schemas.company import CompanyResponse
from hereoz_backend.schemas.offer import OfferResponse
from hereoz_backend.services.admin_service import AdminService
from hereoz_backend.services.offer_service import OfferService
from .common import page_params, paginated

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/stats", response_model=Envelope[PlatformStats])
def global_stats(
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return {"data": AdminService().global_stats(db, date_from, date_to)}


@router.get("/users", response_model=Envelope[List[AdminUserResponse]])
def list_users(
    role: Optional[UserRole] = None,
    is_active: Optional[bool] = None,
    q: Optional[str] = Query(None, max_length=255, description="Email or name"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    users, total = AdminService().list_users(
        db,
        skip=params.skip,
        limit=params.limit,
        role=role.value if role else None,
        is_active=is_active,
        keyword=q,
    )
    return paginated(users, total, params)


@router.get("/users/{user_id}", response_model=Envelope[AdminUserDetails])
def get_user_details(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return {"data": AdminService().user_details(db, user_id)}


@router.put("/users/{user_id}/moderate", response_model=Envelope[AdminUserResponse])
def moderate_user(
    user_id: UUID,
    data: ModerationRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Suspend or reactivate an account."""
    user = AdminService().moderate_user(db, current_user, user_id, data)
    message = "User suspended" if not user.is_active else "User reactivated"
    return {"data": user, "message": message}


@router.get("/companies", response_model=Envelope[List[CompanyResponse]])
def list_companies(
    q: Optional[str] = Query(None, max_length=255, description="Company name"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    companies, total = AdminService().list_companies(db, skip=params.skip, limit=params.limit, keyword=q)
    return paginated(companies, total, params)


@router.get("/jobs", response_model=Envelope[List[OfferResponse]])
def list_jobs(
    offer_status: Optional[OfferStatus] = Query(None, alias="status"),
    is_urgent: Optional[bool] = None,
    company_id: Optional[UUID] = None,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Every offer on the platform, whatever its status unless filtered."""
    offers, total = OfferService().list_offers(
        db,
        skip=params.skip,
        limit=params.limit,
        status=offer_status.value if offer_status else None,
        is_urgent=is_urgent,
        company_id=company_id,
    )
    return paginated(offers, total, params)
