"""Repository pattern implementations for data access."""

from .base import BaseRepository
from .user import UserRepository, CompanyRepository
from .offer import OfferRepository
from .swipe import SwipeRepository
from .application import ApplicationRepository
from .interview import InterviewRepository
from .conversation import ConversationRepository, MessageRepository, AvailabilityRepository
from .profile import ExperienceRepository, EducationRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "CompanyRepository",
    "OfferRepository",
    "SwipeRepository",
    "ApplicationRepository",
    "InterviewRepository",
    "ConversationRepository",
    "MessageRepository",
    "AvailabilityRepository",
    "ExperienceRepository",
    "EducationRepository",
]
