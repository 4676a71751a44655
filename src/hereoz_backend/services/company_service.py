"""Company management service."""

from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from hereoz_backend.auth.models import User, UserRole
from hereoz_backend.core.error_handling import ConflictError
from hereoz_backend.models.company import Company
from hereoz_backend.repositories.user import CompanyRepository
from hereoz_backend.schemas.company import CompanyCreate

logger = structlog.get_logger(__name__)


class CompanyService:
    def __init__(self):
        self.repository = CompanyRepository()

    def create_company(self, db: Session, creator: User, data: CompanyCreate) -> Company:
        """Create a company; a creator without one joins it.

        Raises:
            ConflictError: If another company already claims the email domain
        """
        if data.email_domain and self.repository.get_by_email_domain(db, data.email_domain):
            raise ConflictError("A company with this email domain already exists")

        try:
            company = self.repository.add(db, **data.dict())
            if creator.company_id is None and creator.role in (UserRole.RECRUITER.value, UserRole.COMPANY_ADMIN.value):
                creator.company_id = company.id
            db.commit()
            db.refresh(company)
        except Exception:
            db.rollback()
            raise

        logger.info("Company created", company_id=str(company.id), created_by=str(creator.id))
        return company

    def get_company(self, db: Session, company_id: UUID) -> Company:
        company = self.repository.get_or_raise(db, company_id)
        return company
