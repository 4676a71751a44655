"""Shared persistence helpers for the Hereoz repositories."""

from typing import Generic, TypeVar, Type, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session, Query
from sqlalchemy.exc import IntegrityError
import structlog

from hereoz_backend.core.base import Base
from hereoz_backend.core.error_handling import ConflictError, NotFoundError

logger = structlog.get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Lookups and writes common to every aggregate.

    Two write styles exist. `add` stages a row inside the caller's
    transaction, for multi-row writes such as a swipe and its application.
    `create` and `delete` are self-contained and commit immediately.
    """

    resource_name: Optional[str] = None

    def __init__(self, model: Type[ModelType]):
        self.model = model
        self.resource_name = self.resource_name or model.__name__

    def get_by_id(self, db: Session, id: UUID) -> Optional[ModelType]:
        return db.query(self.model).filter(self.model.id == id).first()

    def get_or_raise(self, db: Session, id: UUID) -> ModelType:
        """Fetch a row by primary key.

        Raises:
            NotFoundError: If no row has this id
        """
        instance = self.get_by_id(db, id)
        if instance is None:
            raise NotFoundError(self.resource_name, id)
        return instance

    def add(self, db: Session, **fields) -> ModelType:
        """Stage a row and flush it so its id and constraints are checked.

        Nothing is committed. IntegrityError from the flush propagates.
        """
        instance = self.model(**fields)
        db.add(instance)
        db.flush()
        return instance

    def create(self, db: Session, **fields) -> ModelType:
        """Insert and commit a single row.

        Raises:
            ConflictError: If a unique or check constraint rejects the row
        """
        instance = self.model(**fields)
        db.add(instance)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning("Insert rejected by constraint", model=self.model.__name__, error=str(e.orig))
            raise ConflictError(f"{self.resource_name} conflicts with an existing record", original_error=e)

        db.refresh(instance)
        logger.info("Record created", model=self.model.__name__, id=str(instance.id))
        return instance

    def delete(self, db: Session, instance: ModelType) -> None:
        instance_id = instance.id
        try:
            db.delete(instance)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info("Record deleted", model=self.model.__name__, id=str(instance_id))

    def paginate(self, query: Query, skip: int, limit: int) -> Tuple[List[ModelType], int]:
        """Return one page of a query together with the unpaginated total."""
        total = query.order_by(None).count()
        return query.offset(skip).limit(limit).all(), total
