import logging
from typing import List

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from database import get_db
from models.notification import Notification
from models.user import User
from schemas.notification import (
    BroadcastRequest,
    MarkAllReadResponse,
    NotificationResponse,
)
from schemas.ticket import MessageResponse
from services.notification_dispatcher import NotificationDispatcher
from services.ticket_service import parse_id
from utils.auth_dependencies import get_current_user
from utils.constants import (
    MAX_ID,
    NOTIFICATION_NOT_OWNED,
    OWN_NOTIFICATIONS_ONLY,
)
from utils.exceptions import ForbiddenError, InvalidField, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _check_self(user_id: int, current_user: User) -> None:
    if user_id != current_user.id:
        logger.warning(
            f"User {current_user.id} tried to access notifications "
            f"of user {user_id}"
        )
        raise ForbiddenError(OWN_NOTIFICATIONS_ONLY)


@router.get("/user/{user_id}", response_model=List[NotificationResponse])
def get_user_notifications(
    user_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Notifications of the signed-in user, newest first"""
    _check_self(user_id, current_user)
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .all()
    )


@router.put("/{notification_id}/read", response_model=MessageResponse)
def mark_notification_read(
    notification_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    notification = db.get(Notification, notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    if notification.user_id != current_user.id:
        raise ForbiddenError(NOTIFICATION_NOT_OWNED)

    notification.is_read = True
    db.commit()
    return {"message": "Notification marked as read."}


@router.put("/user/{user_id}/read-all", response_model=MarkAllReadResponse)
def mark_all_notifications_read(
    user_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _check_self(user_id, current_user)
    updated = (
        db.query(Notification)
        .filter(
            Notification.user_id == user_id,
            Notification.is_read.is_(False),
        )
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    db.commit()
    return {
        "message": "All notifications marked as read.",
        "updated": updated,
    }


@router.post(
    "/broadcast",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def broadcast_notification(
    payload: BroadcastRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Send a message to the creator of a ticket"""
    ticket_id = parse_id(payload.ticket_id, "ticket_id")
    if ticket_id is None:
        raise InvalidField("ticket_id")

    notification = NotificationDispatcher(db).broadcast(
        ticket_id,
        message=payload.message,
        status_name=payload.status,
        actor_name=current_user.name,
    )
    if notification is None:
        return {"message": "Ticket has no creator; nothing to send."}
    return {"message": "Notification sent successfully."}
