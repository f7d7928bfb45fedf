"""Contact form submissions and the dashboard's inquiry inbox."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_account, get_reply_sender
from app.models.inquiry import InquiryStatus
from app.schemas.image import MessageResponse
from app.schemas.inquiry import InquiryCreate, InquiryCreated, InquiryResponse, ReplyRequest, StatusUpdate
from app.services import inquiries
from app.services.inquiries import ReplySender

router = APIRouter(prefix="/api", tags=["inquiries"])


@router.post("/contact", response_model=InquiryCreated, status_code=201)
def create_inquiry(data: InquiryCreate, db: Session = Depends(get_db)):
    inquiry = inquiries.submit(db, data)
    return InquiryCreated(
        message="Inquiry received successfully.",
        data=InquiryResponse.model_validate(inquiry),
    )


@router.get("/inquiries", response_model=list[InquiryResponse])
def list_inquiries(
    status: InquiryStatus | None = Query(None, description="Only inquiries with this status"),
    db: Session = Depends(get_db),
    _account: str = Depends(get_current_account),
):
    return [InquiryResponse.model_validate(i) for i in inquiries.list_inquiries(db, status)]


@router.get("/inquiries/{inquiry_id}", response_model=InquiryResponse)
def get_inquiry(
    inquiry_id: int,
    db: Session = Depends(get_db),
    _account: str = Depends(get_current_account),
):
    """Detail view. Does not change status; the dashboard calls /read afterwards for new inquiries."""
    return InquiryResponse.model_validate(inquiries.get_inquiry(db, inquiry_id))


@router.post("/inquiries/{inquiry_id}/read", response_model=InquiryResponse)
def mark_inquiry_read(
    inquiry_id: int,
    db: Session = Depends(get_db),
    _account: str = Depends(get_current_account),
):
    return InquiryResponse.model_validate(inquiries.mark_read(db, inquiry_id))


@router.patch("/inquiries/{inquiry_id}/status", response_model=InquiryResponse)
def update_inquiry_status(
    inquiry_id: int,
    data: StatusUpdate,
    db: Session = Depends(get_db),
    _account: str = Depends(get_current_account),
):
    return InquiryResponse.model_validate(inquiries.advance_status(db, inquiry_id, data.status))


@router.post("/inquiries/{inquiry_id}/reply", response_model=MessageResponse)
def reply_to_inquiry(
    inquiry_id: int,
    data: ReplyRequest,
    db: Session = Depends(get_db),
    _account: str = Depends(get_current_account),
    send: ReplySender = Depends(get_reply_sender),
):
    inquiry = inquiries.reply(db, inquiry_id, data.reply_message, send)
    return MessageResponse(message=f"Reply sent to {inquiry.email}.")
