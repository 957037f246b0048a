from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    user_id: int
    ticket_id: Optional[int] = None
    message: str
    is_read: bool
    created_at: Optional[datetime] = None


class BroadcastRequest(BaseModel):
    # Parsed by the ticket id rules so bad ids name the field in a 400
    ticket_id: Any = None
    message: Optional[str] = None
    # New status name; used to build the message when none is given
    status: Optional[str] = None


class MarkAllReadResponse(BaseModel):
    message: str
    updated: int
