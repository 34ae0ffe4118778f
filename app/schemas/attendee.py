"""Attendee registration API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.schemas.fields import UtcDatetime


class AttendeeRegisterRequest(BaseModel):
    """Payload for registering an attendee to an event."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(default=None, max_length=255)
    organization: str | None = Field(default=None, max_length=255)
    job_title: str | None = Field(default=None, max_length=255)
    notes: str | None = None


class AttendeeResponse(BaseModel):
    """Attendee as returned after registration, verification or check-in.

    The verification token and password hash are never exposed.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    event_id: str
    name: str
    email: str
    phone: str | None = None
    organization: str | None = None
    job_title: str | None = None
    is_verified: bool
    email_verified_at: UtcDatetime | None = None
    is_checked_in: bool
    checked_in_at: UtcDatetime | None = None
    registered_at: UtcDatetime
