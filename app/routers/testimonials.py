"""Public testimonials."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.testimonial import TestimonialCreate, TestimonialResponse
from app.services import testimonials

router = APIRouter(prefix="/api", tags=["testimonials"])


@router.get("/testimonials", response_model=list[TestimonialResponse])
def list_testimonials(db: Session = Depends(get_db)):
    return [TestimonialResponse.model_validate(t) for t in testimonials.list_testimonials(db)]


@router.post("/testimonials", response_model=TestimonialResponse, status_code=201)
def create_testimonial(data: TestimonialCreate, db: Session = Depends(get_db)):
    return TestimonialResponse.model_validate(testimonials.submit_testimonial(db, data))
