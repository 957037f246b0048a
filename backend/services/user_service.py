import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import User, UserRole
from schemas.user import UserCreate, UserUpdate
from utils.auth import get_password_hash, verify_password
from utils.constants import (
    CANNOT_DELETE_OWN_ACCOUNT,
    INVALID_NAME_OR_PASSWORD,
    USER_NAME_TAKEN,
    USER_NOT_FOUND,
)
from utils.exceptions import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def _check_name_available(
        db: Session, name: str, exclude_id: Optional[int] = None
    ) -> None:
        query = db.query(User).filter(User.name == name)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        if query.first():
            raise ConflictError(USER_NAME_TAKEN)

    @staticmethod
    def create_user(db: Session, user_data: UserCreate) -> User:
        UserService._check_name_available(db, user_data.name)

        db_user = User(
            name=user_data.name,
            hashed_password=get_password_hash(user_data.password),
            department=user_data.department,
            role=user_data.role,
        )
        try:
            db.add(db_user)
            db.commit()
            db.refresh(db_user)
        except IntegrityError:
            db.rollback()
            raise ConflictError(USER_NAME_TAKEN)
        logger.info(f"User {db_user.name} created ({db_user.role.value})")
        return db_user

    @staticmethod
    def authenticate_user(db: Session, name: str, password: str) -> User:
        user = UserService.get_user_by_name(db, name)
        if not user or not verify_password(password, user.hashed_password):
            raise AuthError(INVALID_NAME_OR_PASSWORD)
        return user

    @staticmethod
    def get_user_by_name(db: Session, name: str) -> Optional[User]:
        return db.query(User).filter(User.name == name).first()

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if not user:
            raise NotFoundError(USER_NOT_FOUND)
        return user

    @staticmethod
    def get_users_list(
        db: Session, role: Optional[UserRole] = None
    ) -> List[User]:
        query = db.query(User)
        if role is not None:
            query = query.filter(User.role == role)
        return query.order_by(User.id).all()

    @staticmethod
    def update_user(db: Session, user_id: int, user_data: UserUpdate) -> User:
        user = UserService.get_user_by_id(db, user_id)

        update_data = user_data.model_dump(exclude_unset=True)
        if update_data.get("name") is not None:
            UserService._check_name_available(
                db, update_data["name"], exclude_id=user_id
            )
        password = update_data.pop("password", None)
        if password:
            user.hashed_password = get_password_hash(password)
        for field, value in update_data.items():
            if value is not None:
                setattr(user, field, value)

        try:
            db.commit()
            db.refresh(user)
        except IntegrityError:
            db.rollback()
            raise ConflictError(USER_NAME_TAKEN)
        return user

    @staticmethod
    def delete_user(db: Session, user_id: int, current_user: User) -> None:
        if user_id == current_user.id:
            raise ForbiddenError(CANNOT_DELETE_OWN_ACCOUNT)
        user = UserService.get_user_by_id(db, user_id)
        db.delete(user)
        db.commit()
        logger.info(f"User {user_id} deleted by {current_user.name}")

    @staticmethod
    def ensure_default_admin(
        db: Session, name: str, password: str, department: str
    ) -> Optional[User]:
        """Create the default admin when the users table is empty."""
        if db.query(User).first() is not None:
            return None
        admin = User(
            name=name,
            hashed_password=get_password_hash(password),
            department=department,
            role=UserRole.ADMIN,
        )
        db.add(admin)
        db.commit()
        db.refresh(admin)
        logger.info(f"Default admin user '{name}' created")
        return admin
