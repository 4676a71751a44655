"""Profile API endpoints: the caller's own profile, its sections and public profiles."""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.dependencies import get_current_user, require_candidate
from hereoz_backend.auth.models import User
from hereoz_backend.core.database import get_db
from hereoz_backend.core.logging import performance_logger
from hereoz_backend.schemas.auth import ProfileUpdate, UserResponse
from hereoz_backend.schemas.common import Envelope
from hereoz_backend.schemas.profile import (
    EducationCreate,
    EducationResponse,
    ExperienceCreate,
    ExperienceResponse,
    ExperienceUpdate,
    PublicProfileResponse,
)
from hereoz_backend.services.auth_service import AuthService
from hereoz_backend.services.profile_service import ProfileService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=Envelope[UserResponse])
def get_profile(current_user: User = Depends(get_current_user)):
    return {"data": current_user}


@router.put("", response_model=Envelope[UserResponse])
def update_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    with performance_logger.log_operation_time("update_profile", user_id=str(current_user.id)):
        user = AuthService().update_profile(db, current_user, data)
    return {"data": user, "message": "Profile updated"}


@router.post("/experiences", response_model=Envelope[ExperienceResponse], status_code=status.HTTP_201_CREATED)
def add_experience(
    data: ExperienceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate)
):
    experience = ProfileService().add_experience(db, current_user, data)
    return {"data": experience, "message": "Experience added"}


@router.put("/experiences/{experience_id}", response_model=Envelope[ExperienceResponse])
def update_experience(
    experience_id: UUID,
    data: ExperienceUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate)
):
    experience = ProfileService().update_experience(db, experience_id, current_user, data)
    return {"data": experience, "message": "Experience updated"}


@router.delete("/experiences/{experience_id}", response_model=Envelope[dict])
def delete_experience(
    experience_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate)
):
    ProfileService().delete_experience(db, experience_id, current_user)
    return {"data": None, "message": "Experience removed"}


@router.post("/educations", response_model=Envelope[EducationResponse], status_code=status.HTTP_201_CREATED)
def add_education(
    data: EducationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate)
):
    education = ProfileService().add_education(db, current_user, data)
    return {"data": education, "message": "Education added"}


@router.delete("/educations/{education_id}", response_model=Envelope[dict])
def delete_education(
    education_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_candidate)
):
    ProfileService().delete_education(db, education_id, current_user)
    return {"data": None, "message": "Education removed"}


@router.get("/{user_id}", response_model=Envelope[PublicProfileResponse])
def get_public_profile(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Profile as other users see it, without contact details."""
    return {"data": ProfileService().get_public_profile(db, user_id)}
