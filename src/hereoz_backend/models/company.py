"""Company model for recruiting organisations."""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import relationship

from hereoz_backend.core.base import Base
from hereoz_backend.core.custom_types import GUID


class Company(Base):
    """Company that employs recruiters and owns job offers."""

    __tablename__ = "companies"

    id = Column(GUID(), primary_key=True, default=uuid4)
    name = Column(String(255), nullable=False)
    email_domain = Column(String(255), nullable=True, index=True)
    description = Column(Text, nullable=True)
    website = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    users = relationship("User", back_populates="company")
    offers = relationship("Offer", back_populates="company", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Company(id={self.id}, name='{self.name}')>"
