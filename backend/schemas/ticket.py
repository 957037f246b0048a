from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TicketRow(BaseModel):
    """A ticket joined with the display names of its associations."""

    model_config = {"from_attributes": True}

    id: int
    department_id: int
    department_name: Optional[str] = None
    category_id: int
    category_name: Optional[str] = None
    subcategory_id: Optional[int] = None
    subcategory_name: Optional[str] = None
    user_id: Optional[int] = None
    user_name: Optional[str] = None
    asset_id: Optional[int] = None
    asset_item_code: Optional[str] = None
    pc_part_id: Optional[int] = None
    pc_part_name: Optional[str] = None
    description: Optional[str] = None
    resolution: Optional[str] = None
    status_id: int
    status_name: Optional[str] = None
    technician_id: Optional[int] = None
    technician_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TicketCreateResponse(BaseModel):
    message: str
    ticketId: int


class MessageResponse(BaseModel):
    message: str
