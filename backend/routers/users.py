from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session

from database import get_db
from models.user import User, UserRole
from schemas.ticket import MessageResponse
from schemas.user import UserCreate, UserResponse, UserUpdate
from services.user_service import UserService
from utils.auth_dependencies import admin_required
from utils.constants import MAX_ID

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserResponse])
def get_users_list(
    role: Optional[UserRole] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    """List users, optionally by role (Admin only)"""
    return UserService.get_users_list(db, role)


@router.post(
    "", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    """Create a user (Admin only)"""
    return UserService.create_user(db, user_data)


@router.get("/{user_id}", response_model=UserResponse)
def get_user_detail(
    user_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    """Get user details (Admin only)"""
    return UserService.get_user_by_id(db, user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_data: UserUpdate,
    user_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    """Update user details (Admin only)"""
    return UserService.update_user(db, user_id, user_data)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    """Delete user (Admin only, cannot delete self)"""
    UserService.delete_user(db, user_id, current_user)
    return {"message": "User deleted successfully."}
