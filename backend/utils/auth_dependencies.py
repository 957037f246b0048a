from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from database import get_db
from models.user import User, UserRole
from services.user_service import UserService
from utils.auth import verify_token
from utils.constants import (
    ADMIN_ACCESS_REQUIRED,
    USER_NOT_FOUND,
)
from utils.exceptions import AuthError, ForbiddenError

security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current authenticated user"""
    if credentials is None:
        raise AuthError()

    payload = verify_token(credentials.credentials)
    name = payload.get("sub")
    if name is None:
        raise AuthError()

    user = UserService.get_user_by_name(db, name)
    if user is None:
        raise AuthError(USER_NOT_FOUND)

    return user


def admin_required(current_user: User = Depends(get_current_user)) -> User:
    """Require admin role"""
    if current_user.role != UserRole.ADMIN:
        raise ForbiddenError(ADMIN_ACCESS_REQUIRED)
    return current_user
