"""Testimonial schemas."""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class TestimonialCreate(BaseModel):
    author: str
    relation: str
    text: str

    @field_validator("author", "relation", "text")
    @classmethod
    def required_text(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("This field is required.")
        return v


class TestimonialResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    author: str
    relation: str
    text: str
    created_at: datetime
