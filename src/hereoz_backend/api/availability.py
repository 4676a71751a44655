"""Availability and statistics API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from hereoz_backend.auth.dependencies import get_current_user, require_candidate, require_staff
from hereoz_backend.auth.models import User
from hereoz_backend.core.database import get_db
from hereoz_backend.schemas.availability import (
    AvailabilityCreate,
    AvailabilityResponse,
    CandidateStats,
    OfferStats,
    RecruiterStats,
)
from hereoz_backend.schemas.common import Envelope
from hereoz_backend.services.availability_service import AvailabilityService
from hereoz_backend.services.offer_service import OfferService
from hereoz_backend.services.stats_service import StatsService

router = APIRouter(prefix="/availability", tags=["availability"])
stats_router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/{user_id}", response_model=Envelope[List[AvailabilityResponse]])
def get_availability(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return {"data": AvailabilityService().list_for_user(db, user_id)}


@router.post("", response_model=Envelope[AvailabilityResponse], status_code=status.HTTP_201_CREATED)
def create_availability(
    data: AvailabilityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    slot = AvailabilityService().create_slot(db, current_user, data)
    return {"data": slot, "message": "Availability added"}


@router.delete("/{slot_id}", response_model=Envelope[dict])
def delete_availability(
    slot_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    AvailabilityService().delete_slot(db, slot_id, current_user)
    return {"data": None, "message": "Availability removed"}


@stats_router.get("/candidate", response_model=Envelope[CandidateStats])
def candidate_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate)
):
    return {"data": StatsService().candidate_stats(db, current_user)}


@stats_router.get("/recruiter", response_model=Envelope[RecruiterStats])
def recruiter_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    return {"data": StatsService().recruiter_stats(db, current_user)}


@stats_router.get("/offers/{offer_id}", response_model=Envelope[OfferStats])
def offer_stats(
    offer_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff)
):
    offer = OfferService().get_managed_offer(db, offer_id, current_user)
    return {"data": StatsService().offer_stats(db, offer)}
