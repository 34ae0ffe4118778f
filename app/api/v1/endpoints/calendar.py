"""Calendar API: iCalendar feed, subscription file and per-event download."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from app.api.v1.dependencies import get_calendar_service
from app.application.services import CalendarService

router = APIRouter()

ICS_MEDIA_TYPE = "text/calendar"
_NO_CACHE = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


@router.get("/calendar/feed.ics")
async def calendar_feed(
    calendar_svc: Annotated[CalendarService, Depends(get_calendar_service)],
):
    """All active events; calendar clients may cache it for an hour."""
    content = await calendar_svc.feed()
    return Response(
        content=content,
        media_type=ICS_MEDIA_TYPE,
        headers={"Cache-Control": "public, max-age=3600"},
    )


@router.get("/calendar/subscribe.ics")
async def calendar_subscribe(
    calendar_svc: Annotated[CalendarService, Depends(get_calendar_service)],
):
    """Upcoming active events as a downloadable events.ics."""
    content = await calendar_svc.subscription()
    return Response(
        content=content,
        media_type=ICS_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="events.ics"', **_NO_CACHE},
    )


@router.get("/events/{slug}/calendar.ics")
async def event_calendar(
    slug: str,
    calendar_svc: Annotated[CalendarService, Depends(get_calendar_service)],
):
    """One event with a reminder an hour before it starts."""
    content, filename = await calendar_svc.event_calendar(slug)
    return Response(
        content=content,
        media_type=ICS_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"', **_NO_CACHE},
    )
