"""
Notification Dispatcher.

Writes one Notification row per recipient for ticket lifecycle events:

- Ticket created: the creator, every admin, and a pre-assigned technician
- Status changed: the ticket's creator only
- Technician changed: the previous technician (unassigned) and the new
  technician (assigned)
- Broadcast: the ticket's creator, with a caller-supplied message

Delivery is best-effort. Each row is committed on its own after the ticket
mutation has been committed, so a failed insert is logged and skipped and
never rolls back or fails the ticket operation. `dispatch` returns a
DispatchReport so tests (and logs) can see what actually landed.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.notification import Notification
from models.ticket import Ticket
from models.user import User, UserRole
from utils.constants import NOTIFICATION_MESSAGE_REQUIRED
from utils.exceptions import InternalError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# Message templates
TICKET_CREATED_FOR_CREATOR = (
    "Your ticket #{ticket_id} has been created and is now {status}."
)
TICKET_CREATED_FOR_ADMIN = (
    "A new ticket #{ticket_id} has been created by {origin}."
)
TECHNICIAN_ASSIGNED = "You have been assigned to ticket #{ticket_id}."
TECHNICIAN_UNASSIGNED = "You have been unassigned from ticket #{ticket_id}."
STATUS_CHANGED = (
    "Status of your ticket #{ticket_id} has been updated to {status}."
)
BROADCAST_STATUS_CHANGE = (
    'Ticket #{ticket_id} has been updated to "{status}" by {actor}.'
)


@dataclass(frozen=True)
class Delivery:
    """One notification to be written."""

    recipient_id: int
    ticket_id: Optional[int]
    message: str


@dataclass(frozen=True)
class TicketState:
    """The fields of a ticket that drive notification fan-out."""

    ticket_id: int
    user_id: Optional[int]
    technician_id: Optional[int]
    status_id: Optional[int]

    @classmethod
    def of(cls, ticket: Ticket) -> "TicketState":
        return cls(
            ticket_id=ticket.id,
            user_id=ticket.user_id,
            technician_id=ticket.technician_id,
            status_id=ticket.status_id,
        )


@dataclass
class DispatchReport:
    delivered: List[Notification] = field(default_factory=list)
    failed: List[Delivery] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def __str__(self) -> str:
        return (
            f"{len(self.delivered)} delivered, {len(self.failed)} failed"
        )


def _unique(deliveries: Iterable[Delivery]) -> List[Delivery]:
    seen = set()
    result = []
    for delivery in deliveries:
        if delivery in seen:
            continue
        seen.add(delivery)
        result.append(delivery)
    return result


def plan_ticket_created(
    ticket_id: int,
    status_name: str,
    creator_id: Optional[int],
    technician_id: Optional[int],
    admin_ids: Iterable[int],
) -> List[Delivery]:
    """Fan-out for a newly created ticket."""
    deliveries = []
    if creator_id:
        deliveries.append(
            Delivery(
                creator_id,
                ticket_id,
                TICKET_CREATED_FOR_CREATOR.format(
                    ticket_id=ticket_id, status=status_name
                ),
            )
        )
    origin = "a user" if creator_id else "an admin"
    for admin_id in admin_ids:
        deliveries.append(
            Delivery(
                admin_id,
                ticket_id,
                TICKET_CREATED_FOR_ADMIN.format(
                    ticket_id=ticket_id, origin=origin
                ),
            )
        )
    if technician_id:
        deliveries.append(
            Delivery(
                technician_id,
                ticket_id,
                TECHNICIAN_ASSIGNED.format(ticket_id=ticket_id),
            )
        )
    return _unique(deliveries)


def plan_ticket_updated(
    before: TicketState,
    after: TicketState,
    status_name: Optional[str] = None,
) -> List[Delivery]:
    """Fan-out for an update, derived from the before/after snapshots.

    A status change notifies the creator (as recorded before the update)
    and nobody else. A technician change notifies the outgoing technician
    and the incoming one.
    """
    ticket_id = after.ticket_id
    deliveries = []

    if after.status_id != before.status_id and before.user_id:
        deliveries.append(
            Delivery(
                before.user_id,
                ticket_id,
                STATUS_CHANGED.format(
                    ticket_id=ticket_id,
                    status=status_name or after.status_id,
                ),
            )
        )

    if after.technician_id != before.technician_id:
        if before.technician_id:
            deliveries.append(
                Delivery(
                    before.technician_id,
                    ticket_id,
                    TECHNICIAN_UNASSIGNED.format(ticket_id=ticket_id),
                )
            )
        if after.technician_id:
            deliveries.append(
                Delivery(
                    after.technician_id,
                    ticket_id,
                    TECHNICIAN_ASSIGNED.format(ticket_id=ticket_id),
                )
            )

    return _unique(deliveries)


class NotificationDispatcher:
    """Writes notification rows for ticket events."""

    def __init__(self, db: Session):
        self.db = db

    def notify(
        self, recipient_user_id: int, ticket_id: Optional[int], message: str
    ) -> Optional[Notification]:
        """Insert a single notification; log and return None on failure."""
        notification = Notification(
            user_id=recipient_user_id,
            ticket_id=ticket_id,
            message=message,
        )
        try:
            self.db.add(notification)
            self.db.commit()
            self.db.refresh(notification)
            return notification
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                f"Error creating notification for user "
                f"{recipient_user_id} (ticket {ticket_id}): {e}"
            )
            return None

    def dispatch(self, deliveries: Iterable[Delivery]) -> DispatchReport:
        report = DispatchReport()
        for delivery in deliveries:
            notification = self.notify(
                delivery.recipient_id, delivery.ticket_id, delivery.message
            )
            if notification is None:
                report.failed.append(delivery)
            else:
                report.delivered.append(notification)
        return report

    def admin_ids(self) -> List[int]:
        try:
            rows = (
                self.db.query(User.id)
                .filter(User.role == UserRole.ADMIN)
                .order_by(User.id)
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error fetching admin users: {e}")
            return []
        return [row.id for row in rows]

    def ticket_created(
        self, ticket: Ticket, status_name: str
    ) -> DispatchReport:
        deliveries = plan_ticket_created(
            ticket_id=ticket.id,
            status_name=status_name,
            creator_id=ticket.user_id,
            technician_id=ticket.technician_id,
            admin_ids=self.admin_ids(),
        )
        report = self.dispatch(deliveries)
        logger.info(f"Ticket #{ticket.id} created notifications: {report}")
        return report

    def ticket_updated(
        self,
        before: TicketState,
        after: TicketState,
        status_name: Optional[str] = None,
    ) -> DispatchReport:
        deliveries = plan_ticket_updated(before, after, status_name)
        report = self.dispatch(deliveries)
        if deliveries:
            logger.info(
                f"Ticket #{after.ticket_id} update notifications: {report}"
            )
        return report

    def broadcast(
        self,
        ticket_id: int,
        message: Optional[str] = None,
        status_name: Optional[str] = None,
        actor_name: Optional[str] = None,
    ) -> Optional[Notification]:
        """Notify the ticket's creator with `message`.

        When no message is given but a status is, the standard
        "updated to <status> by <actor>" text is used. Unlike lifecycle
        fan-out this is a direct request, so missing input and storage
        errors are reported to the caller.
        """
        if not message and status_name:
            message = BROADCAST_STATUS_CHANGE.format(
                ticket_id=ticket_id,
                status=status_name,
                actor=actor_name or "staff",
            )
        if not message:
            raise ValidationError(NOTIFICATION_MESSAGE_REQUIRED)

        ticket = self.db.get(Ticket, ticket_id)
        if ticket is None:
            raise NotFoundError("Ticket not found")

        if not ticket.user_id:
            logger.info(
                f"Ticket #{ticket_id} has no creator, broadcast skipped"
            )
            return None

        notification = self.notify(ticket.user_id, ticket_id, message)
        if notification is None:
            raise InternalError("Failed to create notification.")
        return notification
