import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String
from sqlalchemy.sql import func

from database import Base


class UserRole(enum.Enum):
    ADMIN = "admin"
    MAINTENANCE = "maintenance"
    FACULTY_STAFF = "faculty/staff"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    # Free-text department name, not a foreign key
    department = Column(String, nullable=False)
    role = Column(
        Enum(UserRole, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @property
    def is_staff(self) -> bool:
        """Admins and maintenance technicians may edit any ticket."""
        return self.role in (UserRole.ADMIN, UserRole.MAINTENANCE)
