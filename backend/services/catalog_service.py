"""Shared lookups for the catalog routers (departments, categories, ...)."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from utils.exceptions import ConflictError, InvalidField, NotFoundError

logger = logging.getLogger(__name__)


class CatalogService:
    @staticmethod
    def get_or_404(db: Session, model, item_id: int, label: str):
        item = db.get(model, item_id)
        if item is None:
            raise NotFoundError(f"{label} not found.")
        return item

    @staticmethod
    def require_reference(db: Session, model, item_id, field_name: str):
        """Resolve a foreign key from a request body or fail with 400."""
        item = db.get(model, item_id) if item_id is not None else None
        if item is None:
            raise InvalidField(field_name)
        return item

    @staticmethod
    def commit_or_conflict(db: Session, conflict_message: str) -> None:
        """Commit, turning unique-constraint violations into 409."""
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"Integrity error: {e.orig}")
            raise ConflictError(conflict_message)

    @staticmethod
    def delete(db: Session, model, item_id: int, label: str) -> None:
        item = CatalogService.get_or_404(db, model, item_id, label)
        db.delete(item)
        db.commit()
        logger.info(f"{label} {item_id} deleted")
