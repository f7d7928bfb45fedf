"""Public testimonials. Append-only; there is no moderation step."""
from sqlalchemy.orm import Session

from app.models.testimonial import Testimonial
from app.schemas.testimonial import TestimonialCreate


def list_testimonials(db: Session) -> list[Testimonial]:
    return db.query(Testimonial).order_by(Testimonial.created_at.desc(), Testimonial.id.desc()).all()


def submit_testimonial(db: Session, data: TestimonialCreate) -> Testimonial:
    testimonial = Testimonial(author=data.author, relation=data.relation, text=data.text)
    db.add(testimonial)
    db.commit()
    db.refresh(testimonial)
    return testimonial
