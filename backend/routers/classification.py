from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from schemas.catalog import ClassificationResponse
from services.classification_filter import (
    filter_classification,
    load_catalog,
)
from utils.auth_dependencies import get_current_user

router = APIRouter(prefix="/classification", tags=["classification"])


@router.get("", response_model=ClassificationResponse)
def get_classification_options(
    department_id: Optional[int] = Query(None),
    category_id: Optional[int] = Query(None),
    asset_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Options still selectable in the ticket dialogs for a selection"""
    options = filter_classification(
        load_catalog(db),
        department_id=department_id,
        category_id=category_id,
        asset_id=asset_id,
    )
    return ClassificationResponse.model_validate(options, from_attributes=True)
