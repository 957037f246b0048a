from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Path, status
from sqlalchemy.orm import Session

from database import get_db
from models.user import User
from schemas.ticket import MessageResponse, TicketCreateResponse, TicketRow
from services.ticket_service import TicketDraft, TicketService, build_patch
from utils.auth_dependencies import admin_required, get_current_user
from utils.constants import MAX_ID

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.post(
    "",
    response_model=TicketCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_ticket(
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    """Create a ticket. Department, category and status are required."""
    draft = TicketDraft.from_payload(payload)
    ticket = TicketService(db).create(draft)
    return {"message": "Ticket created successfully.", "ticketId": ticket.id}


@router.put("/{ticket_id}", response_model=MessageResponse)
def update_ticket(
    ticket_id: int = Path(..., le=MAX_ID),
    payload: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Partially update a ticket.

    Only the keys present in the body are written; a key sent as null
    clears that association. Admins, maintenance staff and the ticket's
    creator may update.
    """
    patch = build_patch(payload)
    TicketService(db).update(ticket_id, patch, current_user)
    return {"message": "Ticket updated successfully."}


@router.get("", response_model=List[TicketRow])
def list_tickets(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return TicketService(db).list_tickets()


@router.get("/{ticket_id}", response_model=TicketRow)
def get_ticket(
    ticket_id: int = Path(..., le=MAX_ID),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return TicketService(db).get_row(ticket_id)
