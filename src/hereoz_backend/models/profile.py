"""Candidate profile sections: work experience and education."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, Date, ForeignKey, Boolean, Text, CheckConstraint

from hereoz_backend.core.base import Base
from hereoz_backend.core.custom_types import GUID


class EducationLevel(str, Enum):
    HIGH_SCHOOL = "high_school"
    ASSOCIATE = "associate"
    BACHELOR = "bachelor"
    MASTER = "master"
    DOCTORATE = "doctorate"
    OTHER = "other"


class Experience(Base):
    """A position held by a candidate."""

    __tablename__ = "experiences"
    __table_args__ = (
        CheckConstraint("end_date IS NULL OR end_date >= start_date", name="ck_experiences_dates"),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    user_id = Column(GUID(), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    company_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)  # NULL = current position
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Experience(id={self.id}, user_id={self.user_id}, title='{self.title}')>"


class Education(Base):
    """A degree or course followed by a candidate."""

    __tablename__ = "educations"
    __table_args__ = (
        CheckConstraint("end_date IS NULL OR end_date >= start_date", name="ck_educations_dates"),
        CheckConstraint(
            "level IS NULL OR level IN ('high_school', 'associate', 'bachelor', 'master', 'doctorate', 'other')",
            name="ck_educations_level",
        ),
    )

    id = Column(GUID(), primary_key=True, default=uuid4)
    user_id = Column(GUID(), ForeignKey("users.id"), nullable=False, index=True)
    degree = Column(String(255), nullable=False)
    school = Column(String(255), nullable=False)
    level = Column(String(20), nullable=True)
    field_of_study = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    obtained = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Education(id={self.id}, user_id={self.user_id}, degree='{self.degree}')>"
