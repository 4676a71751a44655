"""Swipe feed and swipe recording API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.dependencies import require_candidate, require_staff
from hereoz_backend.auth.models import User
from hereoz_backend.core.database import get_db
from hereoz_backend.core.logging import performance_logger
from hereoz_backend.models.offer import ContractType, RemoteMode
from hereoz_backend.models.swipe_event import SwipeAction
from hereoz_backend.schemas.auth import UserResponse
from hereoz_backend.schemas.common import Envelope, PageParams
from hereoz_backend.schemas.offer import OfferResponse, ScoredOfferResponse
from hereoz_backend.schemas.swipe import SwipeCreate, SwipeResponse, SwipeResult
from hereoz_backend.services.application_service import ApplicationService
from hereoz_backend.services.matching_service import MatchingService
from hereoz_backend.services.notification_service import NotificationService, get_notification_service
from hereoz_backend.services.offer_service import OfferService
from hereoz_backend.services.swipe_service import SwipeService
from .common import page_params, paginated

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/matches", tags=["matches"])


class ScoredCandidateResponse(UserResponse):
    matching_score: int


@router.get("/offers", response_model=Envelope[List[ScoredOfferResponse]])
def swipe_feed(
    location: Optional[str] = Query(None, max_length=255),
    contract_type: Optional[ContractType] = None,
    remote_mode: Optional[RemoteMode] = None,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate)
):
    """Open offers the candidate has not swiped yet, best match first."""
    with performance_logger.log_operation_time("swipe_feed", user_id=str(current_user.id)):
        scored = MatchingService(db).get_swipe_feed(
            current_user,
            location=location,
            contract_type=contract_type.value if contract_type else None,
            remote_mode=remote_mode.value if remote_mode else None,
        )

    page = scored[params.skip:params.skip + params.limit]
    items = [
        ScoredOfferResponse(**OfferResponse.model_validate(offer).model_dump(), matching_score=score)
        for offer, score in page
    ]
    return paginated(items, len(scored), params)


@router.get("/candidates/{offer_id}", response_model=Envelope[List[ScoredCandidateResponse]])
def suggested_candidates(
    offer_id: UUID,
    min_score: int = Query(0, ge=0, le=100),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    """Candidates ranked by matching score for an offer the caller manages."""
    offer = OfferService().get_managed_offer(db, offer_id, current_user)
    scored = MatchingService(db).suggest_candidates(offer, min_score=min_score)

    page = scored[params.skip:params.skip + params.limit]
    items = [
        ScoredCandidateResponse(**UserResponse.model_validate(user).model_dump(), matching_score=score)
        for user, score in page
    ]
    return paginated(items, len(scored), params)


@router.post("/swipe", response_model=Envelope[SwipeResult], status_code=status.HTTP_201_CREATED)
def swipe(
    data: SwipeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate),
    notifier: NotificationService = Depends(get_notification_service)
):
    """Record a swipe. A right swipe also creates the application."""
    with performance_logger.log_operation_time(
        "record_swipe",
        user_id=str(current_user.id),
        offer_id=str(data.offer_id),
        action=data.action.value
    ):
        swipe_event, application = SwipeService(ApplicationService(notifier)).record_swipe(db, current_user, data)

    message = "Application submitted" if application is not None else "Swipe recorded"
    return {"data": {"swipe": swipe_event, "application": application}, "message": message}


@router.get("/history", response_model=Envelope[List[SwipeResponse]])
def swipe_history(
    action: Optional[SwipeAction] = None,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate)
):
    swipes, total = SwipeService().get_history(
        db,
        current_user.id,
        action=action.value if action else None,
        skip=params.skip,
        limit=params.limit
    )
    return paginated(swipes, total, params)
