from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from database import get_db
from models.department import Department
from models.user import User
from schemas.catalog import (
    DepartmentCreate,
    DepartmentResponse,
    DepartmentUpdate,
)
from schemas.ticket import MessageResponse
from services.catalog_service import CatalogService
from utils.auth_dependencies import admin_required, get_current_user
from utils.constants import DEPARTMENT_NAME_TAKEN, MAX_ID

router = APIRouter(prefix="/departments", tags=["departments"])


@router.get("", response_model=List[DepartmentResponse])
def list_departments(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return db.query(Department).order_by(Department.id).all()


@router.post(
    "",
    response_model=DepartmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_department(
    payload: DepartmentCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    department = Department(**payload.model_dump())
    db.add(department)
    CatalogService.commit_or_conflict(db, DEPARTMENT_NAME_TAKEN)
    db.refresh(department)
    return department


@router.put("/{department_id}", response_model=DepartmentResponse)
def update_department(
    payload: DepartmentUpdate,
    department_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    department = CatalogService.get_or_404(
        db, Department, department_id, "Department"
    )
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(department, field, value)
    CatalogService.commit_or_conflict(db, DEPARTMENT_NAME_TAKEN)
    db.refresh(department)
    return department


@router.delete("/{department_id}", response_model=MessageResponse)
def delete_department(
    department_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    CatalogService.delete(db, Department, department_id, "Department")
    return {"message": "Department deleted successfully."}
