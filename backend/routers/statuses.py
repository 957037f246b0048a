from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.status import Status
from models.user import User
from schemas.catalog import StatusResponse
from utils.auth_dependencies import get_current_user

router = APIRouter(prefix="/statuses", tags=["statuses"])


@router.get("", response_model=List[StatusResponse])
def list_statuses(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(Status).order_by(Status.id).all()
