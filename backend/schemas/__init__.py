from .catalog import (
    AssetCreate,
    AssetResponse,
    CategoryCreate,
    CategoryResponse,
    ClassificationResponse,
    DepartmentCreate,
    DepartmentResponse,
    DepartmentUpdate,
    PcPartCreate,
    PcPartResponse,
    StatusResponse,
    SubCategoryCreate,
    SubCategoryResponse,
    SubCategoryUpdate,
)
from .notification import (
    BroadcastRequest,
    MarkAllReadResponse,
    NotificationResponse,
)
from .ticket import MessageResponse, TicketCreateResponse, TicketRow
from .user import (
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "AssetCreate",
    "AssetResponse",
    "BroadcastRequest",
    "CategoryCreate",
    "CategoryResponse",
    "ClassificationResponse",
    "DepartmentCreate",
    "DepartmentResponse",
    "DepartmentUpdate",
    "LoginRequest",
    "MarkAllReadResponse",
    "MessageResponse",
    "NotificationResponse",
    "PcPartCreate",
    "PcPartResponse",
    "StatusResponse",
    "SubCategoryCreate",
    "SubCategoryResponse",
    "SubCategoryUpdate",
    "TicketCreateResponse",
    "TicketRow",
    "UserCreate",
    "UserResponse",
    "UserUpdate",
]
