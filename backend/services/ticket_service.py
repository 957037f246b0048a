"""
Ticket Lifecycle Service.

Creates tickets, applies partial updates and reads the denormalized ticket
list. Partial updates are expressed as a TicketPatch: a mapping of field
name to either UNSET (leave the column alone) or SetTo(value) (write the
value, where SetTo(None) clears the association). `build_patch` turns a
JSON body into a patch, so "key absent" and "key sent as null" stay
distinct all the way to the database.

Notifications are handed to the NotificationDispatcher after the ticket
commit. The two are separate transactions: a failed notification never
undoes or fails a ticket write.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.orm import Session, aliased

from config import settings
from models import (
    Asset,
    Category,
    Department,
    PcPart,
    Status,
    StatusName,
    SubCategory,
    Ticket,
    User,
)
from services.notification_dispatcher import (
    NotificationDispatcher,
    TicketState,
)
from utils.constants import (
    MAX_ID,
    MIN_ID,
    TICKET_EDIT_FORBIDDEN,
    TICKET_REQUIRED_FIELDS,
)
from utils.exceptions import (
    ForbiddenError,
    InvalidField,
    MissingRequiredField,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class _Unset:
    """Marker for a field that was not sent."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNSET"

    def __bool__(self):
        return False


UNSET = _Unset()


@dataclass(frozen=True)
class SetTo:
    """A field that was sent, possibly as null."""

    value: Any


FieldUpdate = Union[_Unset, SetTo]
TicketPatch = Dict[str, FieldUpdate]

REQUIRED_ID_FIELDS = ("department_id", "category_id", "status_id")
OPTIONAL_ID_FIELDS = (
    "subcategory_id",
    "user_id",
    "asset_id",
    "pc_part_id",
    "technician_id",
)
ID_FIELDS = REQUIRED_ID_FIELDS + OPTIONAL_ID_FIELDS
TEXT_FIELDS = ("description", "resolution")
TICKET_FIELDS = ID_FIELDS + TEXT_FIELDS

# Table each id field must resolve against
REFERENCES = {
    "department_id": Department,
    "category_id": Category,
    "subcategory_id": SubCategory,
    "user_id": User,
    "asset_id": Asset,
    "pc_part_id": PcPart,
    "status_id": Status,
    "technician_id": User,
}

# Status moves allowed to admins/maintenance when transitions are enforced.
# Any status may additionally be sent to "For Approval" by staff.
STAFF_TRANSITIONS = {
    StatusName.OPEN: {StatusName.IN_PROGRESS},
    StatusName.IN_PROGRESS: {StatusName.CLOSED, StatusName.OPEN},
}
# Approve/reject of a ticket awaiting its creator's sign-off
CREATOR_TRANSITIONS = {
    StatusName.FOR_APPROVAL: {StatusName.CLOSED, StatusName.OPEN},
}


INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


def _to_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise InvalidField(field_name)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise InvalidField(field_name)
    if isinstance(value, str):
        text = value.strip()
        if INTEGER_PATTERN.fullmatch(text):
            return int(text)
    raise InvalidField(field_name)


def parse_id(value: Any, field_name: str) -> Optional[int]:
    """Parse an id the way a JSON client may send it (42, 42.0, "42").

    Only ASCII digits are accepted, and the result must fit a 64-bit
    INTEGER column.
    """
    if value is None:
        return None
    parsed = _to_int(value, field_name)
    if not MIN_ID <= parsed <= MAX_ID:
        raise InvalidField(field_name)
    return parsed


def parse_text(value: Any, field_name: str) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    raise InvalidField(field_name)


def parse_field(field_name: str, value: Any) -> Any:
    if field_name in ID_FIELDS:
        return parse_id(value, field_name)
    return parse_text(value, field_name)


def build_patch(payload: Dict[str, Any]) -> TicketPatch:
    """Tag every ticket field as UNSET or SetTo(parsed value).

    Unknown keys are ignored. Raises InvalidField for a present field that
    does not parse.
    """
    patch = {}
    for field_name in TICKET_FIELDS:
        if field_name in payload:
            patch[field_name] = SetTo(
                parse_field(field_name, payload[field_name])
            )
        else:
            patch[field_name] = UNSET
    return patch


def supplied(patch: TicketPatch) -> Dict[str, Any]:
    """The fields of `patch` that were sent, unwrapped."""
    return {
        name: update.value
        for name, update in patch.items()
        if isinstance(update, SetTo)
    }


@dataclass
class TicketDraft:
    department_id: int
    category_id: int
    status_id: int
    subcategory_id: Optional[int] = None
    user_id: Optional[int] = None
    asset_id: Optional[int] = None
    pc_part_id: Optional[int] = None
    technician_id: Optional[int] = None
    description: Optional[str] = None
    resolution: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TicketDraft":
        values = supplied(build_patch(payload))
        missing = [
            name for name in REQUIRED_ID_FIELDS if values.get(name) is None
        ]
        if missing:
            raise MissingRequiredField(TICKET_REQUIRED_FIELDS, missing)
        return cls(**values)

    def as_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in TICKET_FIELDS}


def can_edit_ticket(user: User, ticket: Ticket) -> bool:
    return user.is_staff or (
        ticket.user_id is not None and ticket.user_id == user.id
    )


def is_transition_allowed(
    current: str, new: str, user: User, ticket: Ticket
) -> bool:
    """Whether `user` may move `ticket` from status `current` to `new`."""
    if current == new:
        return True
    if user.is_staff:
        if new == StatusName.FOR_APPROVAL:
            return True
        if new in STAFF_TRANSITIONS.get(current, set()):
            return True
    if ticket.user_id is not None and ticket.user_id == user.id:
        if new in CREATOR_TRANSITIONS.get(current, set()):
            return True
    return False


class TicketService:
    def __init__(
        self,
        db: Session,
        dispatcher: Optional[NotificationDispatcher] = None,
    ):
        self.db = db
        self.dispatcher = dispatcher or NotificationDispatcher(db)

    def _validate_references(self, values: Dict[str, Any]) -> None:
        for field_name, value in values.items():
            model = REFERENCES.get(field_name)
            if model is None or value is None:
                continue
            if self.db.get(model, value) is None:
                raise InvalidField(field_name)

    def _status_name(self, status_id: Optional[int]) -> Optional[str]:
        if status_id is None:
            return None
        status = self.db.get(Status, status_id)
        return status.name if status else None

    def create(self, draft: TicketDraft) -> Ticket:
        values = draft.as_dict()
        self._validate_references(values)

        now = datetime.now(timezone.utc)
        ticket = Ticket(**values, created_at=now, updated_at=now)
        self.db.add(ticket)
        self.db.commit()
        self.db.refresh(ticket)
        logger.info(
            f"Ticket #{ticket.id} created in department "
            f"{ticket.department_id}"
        )

        self.dispatcher.ticket_created(
            ticket, self._status_name(ticket.status_id)
        )
        return ticket

    def get(self, ticket_id: int) -> Ticket:
        ticket = self.db.get(Ticket, ticket_id)
        if ticket is None:
            raise NotFoundError("Ticket not found")
        return ticket

    def update(
        self, ticket_id: int, patch: TicketPatch, actor: User
    ) -> Ticket:
        """Apply the SetTo fields of `patch`; updated_at always moves."""
        ticket = self.get(ticket_id)

        if not can_edit_ticket(actor, ticket):
            logger.warning(
                f"User {actor.id} may not update ticket #{ticket_id}"
            )
            raise ForbiddenError(TICKET_EDIT_FORBIDDEN)

        values = supplied(patch)
        for field_name in REQUIRED_ID_FIELDS:
            if field_name in values and values[field_name] is None:
                raise InvalidField(field_name)
        self._validate_references(values)

        if (
            settings.enforce_status_transitions
            and "status_id" in values
            and values["status_id"] != ticket.status_id
        ):
            current = self._status_name(ticket.status_id)
            new = self._status_name(values["status_id"])
            if not is_transition_allowed(current, new, actor, ticket):
                raise ValidationError(
                    f"Cannot move ticket from {current} to {new}."
                )

        before = TicketState.of(ticket)
        for field_name, value in values.items():
            setattr(ticket, field_name, value)
        ticket.updated_at = datetime.now(timezone.utc)
        self.db.commit()
        self.db.refresh(ticket)
        logger.info(
            f"Ticket #{ticket.id} updated by user {actor.id}: "
            f"{sorted(values) or 'timestamp only'}"
        )

        self.dispatcher.ticket_updated(
            before,
            TicketState.of(ticket),
            self._status_name(ticket.status_id),
        )
        return ticket

    def _rows_query(self):
        creator = aliased(User)
        technician = aliased(User)
        return (
            self.db.query(
                Ticket.id,
                Ticket.department_id,
                Department.name.label("department_name"),
                Ticket.category_id,
                Category.name.label("category_name"),
                Ticket.subcategory_id,
                SubCategory.name.label("subcategory_name"),
                Ticket.user_id,
                creator.name.label("user_name"),
                Ticket.asset_id,
                Asset.item_code.label("asset_item_code"),
                Ticket.pc_part_id,
                PcPart.part_name.label("pc_part_name"),
                Ticket.description,
                Ticket.resolution,
                Ticket.status_id,
                Status.name.label("status_name"),
                Ticket.technician_id,
                technician.name.label("technician_name"),
                Ticket.created_at,
                Ticket.updated_at,
            )
            .outerjoin(Department, Ticket.department_id == Department.id)
            .outerjoin(Category, Ticket.category_id == Category.id)
            .outerjoin(SubCategory, Ticket.subcategory_id == SubCategory.id)
            .outerjoin(creator, Ticket.user_id == creator.id)
            .outerjoin(technician, Ticket.technician_id == technician.id)
            .outerjoin(Asset, Ticket.asset_id == Asset.id)
            .outerjoin(PcPart, Ticket.pc_part_id == PcPart.id)
            .outerjoin(Status, Ticket.status_id == Status.id)
        )

    def list_tickets(self) -> List[dict]:
        """All tickets, newest first, with joined display names."""
        rows = self._rows_query().order_by(
            Ticket.created_at.desc(), Ticket.id.desc()
        )
        return [dict(row._mapping) for row in rows.all()]

    def get_row(self, ticket_id: int) -> dict:
        row = self._rows_query().filter(Ticket.id == ticket_id).first()
        if row is None:
            raise NotFoundError("Ticket not found")
        return dict(row._mapping)
