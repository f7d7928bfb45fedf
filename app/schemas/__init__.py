from app.schemas.auth import AccountLogin, Token
from app.schemas.inquiry import InquiryCreate, InquiryCreated, InquiryResponse, ReplyRequest, StatusUpdate
from app.schemas.image import MessageResponse, UploadResponse
from app.schemas.testimonial import TestimonialCreate, TestimonialResponse
from app.schemas.chat import ChatRequest, ChatResponse, ChatTurn
