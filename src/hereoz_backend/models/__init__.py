"""Database models for the Hereoz backend."""

from .company import Company
from .offer import Offer, OfferStatus, ContractType, RemoteMode
from .swipe_event import SwipeEvent, SwipeAction
from .application import Application, ApplicationStatus
from .application_transition_log import ApplicationTransitionLog, ActorType
from .interview import Interview, InterviewMode, InterviewStatus
from .conversation import Conversation, Message, ConversationStatus, MessageKind
from .availability import AvailabilitySlot, Recurrence
from .profile import Experience, Education, EducationLevel

# Import User from auth module
from hereoz_backend.auth.models import User, UserRole

__all__ = [
    "Company",
    "Offer", "OfferStatus", "ContractType", "RemoteMode",
    "SwipeEvent", "SwipeAction",
    "Application", "ApplicationStatus",
    "ApplicationTransitionLog", "ActorType",
    "Interview", "InterviewMode", "InterviewStatus",
    "Conversation", "Message", "ConversationStatus", "MessageKind",
    "AvailabilitySlot", "Recurrence",
    "Experience", "Education", "EducationLevel",
    "User", "UserRole",
]
