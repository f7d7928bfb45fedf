"""Inquiry workflow: submit, list, review status (new -> read -> replied), email reply."""
import logging
from collections.abc import Callable

from sqlalchemy.orm import Session

from app.exceptions import MailDispatchError, NotFoundError, ValidationError
from app.models.inquiry import Inquiry, InquiryStatus
from app.schemas.inquiry import InquiryCreate
from app.services.notifications import notify_new_inquiry

log = logging.getLogger("uvicorn.error")

# send(to_email, name, body) -> True when the provider accepted the message
ReplySender = Callable[[str, str, str], bool]


def submit(db: Session, data: InquiryCreate) -> Inquiry:
    inquiry = Inquiry(
        name=data.name,
        email=str(data.email),
        phone=data.phone,
        message=data.message,
        tour_date=data.tour_date,
        status=InquiryStatus.new,
    )
    db.add(inquiry)
    db.commit()
    db.refresh(inquiry)
    notify_new_inquiry(inquiry)
    return inquiry


def list_inquiries(db: Session, status: InquiryStatus | None = None) -> list[Inquiry]:
    q = db.query(Inquiry)
    if status is not None:
        q = q.filter(Inquiry.status == status)
    return q.order_by(Inquiry.created_at.desc(), Inquiry.id.desc()).all()


def get_inquiry(db: Session, inquiry_id: int) -> Inquiry:
    """Fetch one inquiry. Never changes its status; callers opening a detail view follow up with mark_read."""
    inquiry = db.query(Inquiry).filter(Inquiry.id == inquiry_id).first()
    if not inquiry:
        raise NotFoundError("Inquiry", inquiry_id)
    return inquiry


def advance_status(db: Session, inquiry_id: int, status: InquiryStatus | str) -> Inquiry:
    """Move an inquiry forward to ``status``. Targets at or behind the current status are no-ops."""
    try:
        target = InquiryStatus(status)
    except ValueError:
        raise ValidationError(f"Unknown status '{status}'. Use one of: new, read, replied.")
    inquiry = get_inquiry(db, inquiry_id)
    current = InquiryStatus(inquiry.status)
    if target.rank <= current.rank:
        return inquiry
    inquiry.status = target
    db.commit()
    db.refresh(inquiry)
    log.info("[Inquiry] id=%s status %s -> %s", inquiry.id, current.value, target.value)
    return inquiry


def mark_read(db: Session, inquiry_id: int) -> Inquiry:
    return advance_status(db, inquiry_id, InquiryStatus.read)


def reply(db: Session, inquiry_id: int, body: str, send: ReplySender) -> Inquiry:
    """Email a reply to the visitor; status becomes replied only if the provider accepted it."""
    if not (body or "").strip():
        raise ValidationError("Reply message is required.")
    inquiry = get_inquiry(db, inquiry_id)
    if not send(inquiry.email, inquiry.name, body):
        log.error("[Inquiry] Reply to id=%s (%s) was not sent; status left at %s", inquiry.id, inquiry.email, inquiry.status.value)
        raise MailDispatchError("Failed to send reply email. Check the mail provider settings and try again.")
    return advance_status(db, inquiry.id, InquiryStatus.replied)
