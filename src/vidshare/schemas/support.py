# src/vidshare/schemas/support.py
"""Contact form and FAQ schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from vidshare.models.support import ContactStatus


class ContactCreate(BaseModel):
    """Schema for a public contact form submission."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=20, max_length=5000)


class ContactUpdate(BaseModel):
    """Admin update to a contact submission."""

    status: ContactStatus | None = None
    assigned_to: str | None = Field(None, max_length=100)
    response: str | None = Field(None, max_length=5000)


class ContactResponse(BaseModel):
    """Schema for contact submissions returned to admins."""

    id: int
    name: str
    email: str
    subject: str
    message: str
    status: ContactStatus
    assigned_to: str | None
    response: str | None
    responded_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FAQCreate(BaseModel):
    """Schema for adding an FAQ entry."""

    question: str = Field(..., min_length=1, max_length=500)
    answer: str = Field(..., min_length=1, max_length=5000)
    category: str = Field("General", min_length=1, max_length=50)
    published: bool = True


class FAQUpdate(BaseModel):
    """Partial update of an FAQ entry."""

    question: str | None = Field(None, min_length=1, max_length=500)
    answer: str | None = Field(None, min_length=1, max_length=5000)
    category: str | None = Field(None, min_length=1, max_length=50)
    position: int | None = Field(None, ge=0)
    published: bool | None = None


class FAQResponse(BaseModel):
    """An FAQ entry."""

    id: int
    question: str
    answer: str
    category: str
    position: int
    published: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
