import enum

from sqlalchemy import Column, Enum, Integer, String
from sqlalchemy.orm import relationship

from database import Base


class DepartmentStatus(enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    location = Column(String, nullable=False)
    head = Column(String, nullable=False)
    status = Column(
        Enum(DepartmentStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=DepartmentStatus.ACTIVE,
    )

    assets = relationship(
        "Asset",
        back_populates="department",
        cascade="all, delete",
        passive_deletes=True,
    )
