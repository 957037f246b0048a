from datetime import timedelta

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from schemas.user import LoginRequest, TokenResponse, UserResponse
from services.user_service import UserService
from utils.auth import ACCESS_TOKEN_EXPIRE_MINUTES, create_access_token
from utils.auth_dependencies import get_current_user

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=TokenResponse)
def login_user(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Login with name and password and return a bearer token"""
    user = UserService.authenticate_user(
        db, login_data.name, login_data.password
    )

    access_token = create_access_token(
        data={
            "sub": user.name,
            "id": user.id,
            "department": user.department,
            "role": user.role.value,
        },
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )

    return TokenResponse(
        access_token=access_token, user=UserResponse.model_validate(user)
    )


@router.get("/profile", response_model=UserResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    """Get the signed-in user"""
    return UserResponse.model_validate(current_user)
