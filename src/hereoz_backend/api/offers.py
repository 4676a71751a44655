"""Company and job offer API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.dependencies import get_current_user, require_recruiter, require_staff
from hereoz_backend.auth.models import User
from hereoz_backend.core.database import get_db
from hereoz_backend.core.logging import performance_logger
from hereoz_backend.models.offer import ContractType, OfferStatus, RemoteMode
from hereoz_backend.schemas.common import Envelope, PageParams
from hereoz_backend.schemas.company import CompanyCreate, CompanyResponse
from hereoz_backend.schemas.offer import OfferCreate, OfferResponse, OfferUpdate
from hereoz_backend.services.company_service import CompanyService
from hereoz_backend.services.offer_service import OfferService
from .common import page_params, paginated

logger = structlog.get_logger(__name__)

companies_router = APIRouter(prefix="/companies", tags=["companies"])
router = APIRouter(prefix="/jobs", tags=["jobs"])


@companies_router.post("", response_model=Envelope[CompanyResponse], status_code=status.HTTP_201_CREATED)
def create_company(
    data: CompanyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    company = CompanyService().create_company(db, current_user, data)
    return {"data": company, "message": "Company created"}


@companies_router.get("/{company_id}", response_model=Envelope[CompanyResponse])
def get_company(
    company_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return {"data": CompanyService().get_company(db, company_id)}


@router.post("", response_model=Envelope[OfferResponse], status_code=status.HTTP_201_CREATED)
def create_offer(
    data: OfferCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recruiter)
):
    """Post a job offer for the recruiter's company."""
    with performance_logger.log_operation_time("create_offer", user_id=str(current_user.id)):
        offer = OfferService().create_offer(db, current_user, data)
    return {"data": offer, "message": "Offer created"}


@router.get("", response_model=Envelope[List[OfferResponse]])
def list_offers(
    offer_status: Optional[OfferStatus] = Query(OfferStatus.ACTIVE, alias="status"),
    location: Optional[str] = Query(None, max_length=255),
    contract_type: Optional[ContractType] = None,
    remote_mode: Optional[RemoteMode] = None,
    company_id: Optional[UUID] = None,
    recruiter_id: Optional[UUID] = None,
    q: Optional[str] = Query(None, max_length=255, description="Keyword in title or description"),
    is_urgent: Optional[bool] = None,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    offers, total = OfferService().list_offers(
        db,
        skip=params.skip,
        limit=params.limit,
        status=offer_status.value if offer_status else None,
        location=location,
        contract_type=contract_type.value if contract_type else None,
        remote_mode=remote_mode.value if remote_mode else None,
        company_id=company_id,
        recruiter_id=recruiter_id,
        keyword=q,
        is_urgent=is_urgent,
    )
    return paginated(offers, total, params)


@router.get("/{offer_id}", response_model=Envelope[OfferResponse])
def get_offer(
    offer_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Fetch an offer; every read counts as a view."""
    return {"data": OfferService().get_offer(db, offer_id, count_view=True)}


@router.put("/{offer_id}", response_model=Envelope[OfferResponse])
def update_offer(
    offer_id: UUID,
    data: OfferUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    offer = OfferService().update_offer(db, offer_id, current_user, data)
    return {"data": offer, "message": "Offer updated"}


@router.post("/{offer_id}/close", response_model=Envelope[OfferResponse])
def close_offer(
    offer_id: UUID,
    filled: bool = Query(False, description="Mark the offer as filled instead of closed"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    offer = OfferService().close_offer(
        db,
        offer_id,
        current_user,
        OfferStatus.FILLED if filled else OfferStatus.CLOSED
    )
    return {"data": offer, "message": f"Offer {offer.status}"}
