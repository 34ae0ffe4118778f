"""Presenter API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from app.schemas.fields import UtcDatetime, reject_nulls


class PresenterCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    title: str | None = Field(default=None, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    bio: str | None = None
    website: str | None = Field(default=None, max_length=255)
    linkedin: str | None = Field(default=None, max_length=255)
    twitter: str | None = Field(default=None, max_length=255)
    photo: str | None = Field(default=None, max_length=255)


class PresenterUpdateRequest(BaseModel):
    """Partial update: omitted fields keep their value; name cannot be cleared."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    title: str | None = Field(default=None, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    bio: str | None = None
    website: str | None = Field(default=None, max_length=255)
    linkedin: str | None = Field(default=None, max_length=255)
    twitter: str | None = Field(default=None, max_length=255)
    photo: str | None = Field(default=None, max_length=255)

    @model_validator(mode="before")
    @classmethod
    def reject_explicit_nulls(cls, data: Any) -> Any:
        return reject_nulls(data, ("name",))


class PresenterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str | None = None
    title: str | None = None
    company: str | None = None
    bio: str | None = None
    website: str | None = None
    linkedin: str | None = None
    twitter: str | None = None
    photo: str | None = None
    created_at: UtcDatetime


class PresenterSearchResult(BaseModel):
    """Autocomplete entry for the agenda editor."""

    id: str
    name: str
    title: str | None = None
    company: str | None = None
    full_name: str
