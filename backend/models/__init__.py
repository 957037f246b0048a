from .asset import Asset, PcPart
from .category import Category, SubCategory
from .department import Department, DepartmentStatus
from .notification import Notification
from .status import Status, StatusName
from .ticket import Ticket
from .user import User, UserRole
from database import Base

__all__ = [
    "User",
    "UserRole",
    "Department",
    "DepartmentStatus",
    "Category",
    "SubCategory",
    "Asset",
    "PcPart",
    "Status",
    "StatusName",
    "Ticket",
    "Notification",
    "Base",
]
