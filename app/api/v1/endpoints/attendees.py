"""Attendee API: registration, e-mail verification, check-in, removal and CSV export."""

import io
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import StreamingResponse

from app.api.v1.dependencies import (
    get_registration_service,
    get_registration_service_for_write,
)
from app.application.services import RegistrationService
from app.core.limiter import limit_writes
from app.schemas.attendee import AttendeeRegisterRequest, AttendeeResponse

router = APIRouter()


@router.get("/events/{event_id}/attendees", response_model=list[AttendeeResponse])
async def list_attendees(
    event_id: str,
    registration_svc: Annotated[RegistrationService, Depends(get_registration_service)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """Attendees of an event in registration order."""
    attendees = await registration_svc.list_attendees(event_id, skip=skip, limit=limit)
    return [AttendeeResponse.model_validate(a) for a in attendees]


@router.post(
    "/events/{event_id}/attendees", response_model=AttendeeResponse, status_code=201
)
@limit_writes
async def register_attendee(
    request: Request,
    event_id: str,
    body: AttendeeRegisterRequest,
    registration_svc: Annotated[
        RegistrationService, Depends(get_registration_service_for_write)
    ],
):
    """Register for an event. 409 when the event is full or the e-mail is taken."""
    created = await registration_svc.register(event_id, **body.model_dump())
    return AttendeeResponse.model_validate(created)


@router.post("/attendees/verify/{token}", response_model=AttendeeResponse)
@limit_writes
async def verify_email(
    request: Request,
    token: str,
    registration_svc: Annotated[
        RegistrationService, Depends(get_registration_service_for_write)
    ],
):
    """Confirm an attendee's e-mail address with the token from the verification link."""
    attendee = await registration_svc.verify_email(token)
    return AttendeeResponse.model_validate(attendee)


@router.post("/attendees/{attendee_id}/check-in", response_model=AttendeeResponse)
@limit_writes
async def check_in(
    request: Request,
    attendee_id: str,
    registration_svc: Annotated[
        RegistrationService, Depends(get_registration_service_for_write)
    ],
):
    """Mark an attendee as present (repeat check-ins are no-ops)."""
    attendee = await registration_svc.check_in(attendee_id)
    return AttendeeResponse.model_validate(attendee)


@router.get("/attendees/export")
async def export_attendees(
    registration_svc: Annotated[RegistrationService, Depends(get_registration_service)],
    event_id: str | None = None,
):
    """CSV of all attendees (or one event's), ordered by event title then name."""
    content = await registration_svc.export_csv(event_id)
    return StreamingResponse(
        io.BytesIO(content.encode("utf-8")),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="attendees-export.csv"'},
    )


@router.delete("/attendees/{attendee_id}", status_code=204)
@limit_writes
async def delete_attendee(
    request: Request,
    attendee_id: str,
    registration_svc: Annotated[
        RegistrationService, Depends(get_registration_service_for_write)
    ],
):
    """Remove an attendee and the messages they sent."""
    await registration_svc.delete_attendee(attendee_id)
    return Response(status_code=204)
