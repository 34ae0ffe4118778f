"""Event API: thin routes delegating to EventService (and AgendaService for the agenda)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import (
    get_agenda_service_for_write,
    get_event_service,
    get_event_service_for_write,
)
from app.application.services import AgendaService, EventService
from app.core.limiter import limit_writes
from app.schemas.event import (
    AgendaItemCreateRequest,
    AgendaItemResponse,
    AgendaReorderRequest,
    EventCreateRequest,
    EventResponse,
    EventUpdateRequest,
    SeriesResponse,
)

router = APIRouter()


@router.get("", response_model=list[EventResponse])
async def list_events(
    event_svc: Annotated[EventService, Depends(get_event_service)],
    active_only: bool = False,
    include_instances: bool = True,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """List events, soonest first."""
    events = await event_svc.list_events(
        active_only=active_only,
        include_instances=include_instances,
        skip=skip,
        limit=limit,
    )
    return [EventResponse.model_validate(e) for e in events]


@router.post("", response_model=EventResponse, status_code=201)
@limit_writes
async def create_event(
    request: Request,
    body: EventCreateRequest,
    event_svc: Annotated[EventService, Depends(get_event_service_for_write)],
):
    """Create an event (slug generated from the title when omitted)."""
    created = await event_svc.create(body.model_dump())
    return EventResponse.model_validate(created)


@router.get("/{slug}", response_model=EventResponse)
async def get_event(
    slug: str,
    event_svc: Annotated[EventService, Depends(get_event_service)],
):
    """Get an event by its slug."""
    event = await event_svc.get_by_slug(slug)
    return EventResponse.model_validate(event)


@router.get("/{event_id}/instances", response_model=list[EventResponse])
async def list_instances(
    event_id: str,
    event_svc: Annotated[EventService, Depends(get_event_service)],
):
    """Generated instances of a recurring event, in date order."""
    instances = await event_svc.get_instances(event_id)
    return [EventResponse.model_validate(e) for e in instances]


@router.get("/{event_id}/agenda", response_model=list[AgendaItemResponse])
async def get_agenda(
    event_id: str,
    event_svc: Annotated[EventService, Depends(get_event_service)],
    include_hidden: bool = False,
):
    """Agenda items in programme order (visible ones unless include_hidden)."""
    items = await event_svc.get_agenda(event_id, include_hidden=include_hidden)
    return [AgendaItemResponse.model_validate(i) for i in items]


@router.delete("/{event_id}", status_code=204)
@limit_writes
async def delete_event(
    request: Request,
    event_id: str,
    event_svc: Annotated[EventService, Depends(get_event_service_for_write)],
):
    """Delete an event together with its attendees, messages, agenda, presenters and files."""
    await event_svc.delete(event_id)
    return Response(status_code=204)


@router.post("/{event_id}/recurrences", response_model=SeriesResponse)
@limit_writes
async def regenerate_series(
    request: Request,
    event_id: str,
    event_svc: Annotated[EventService, Depends(get_event_service_for_write)],
):
    """Replace the instances of a recurring event with a freshly planned series."""
    result = await event_svc.regenerate_series(event_id)
    return SeriesResponse.model_validate(result)


@router.put("/{event_id}", response_model=EventResponse)
@limit_writes
async def update_event(
    request: Request,
    event_id: str,
    body: EventUpdateRequest,
    event_svc: Annotated[EventService, Depends(get_event_service_for_write)],
):
    """Apply the fields present in the body; existing series instances are left as they are."""
    updated = await event_svc.update(event_id, body.model_dump(exclude_unset=True))
    return EventResponse.model_validate(updated)


@router.post("/{event_id}/toggle-status", response_model=EventResponse)
@limit_writes
async def toggle_event_status(
    request: Request,
    event_id: str,
    event_svc: Annotated[EventService, Depends(get_event_service_for_write)],
):
    """Activate an inactive event or deactivate an active one."""
    event = await event_svc.toggle_status(event_id)
    return EventResponse.model_validate(event)


@router.post("/{event_id}/clone", response_model=EventResponse, status_code=201)
@limit_writes
async def clone_event(
    request: Request,
    event_id: str,
    event_svc: Annotated[EventService, Depends(get_event_service_for_write)],
):
    """Copy an event as an inactive "(Copy)" draft one month from now."""
    clone = await event_svc.clone(event_id)
    return EventResponse.model_validate(clone)


@router.post("/{event_id}/agenda", response_model=AgendaItemResponse, status_code=201)
@limit_writes
async def create_agenda_item(
    request: Request,
    event_id: str,
    body: AgendaItemCreateRequest,
    agenda_svc: Annotated[AgendaService, Depends(get_agenda_service_for_write)],
):
    """Append an item to the event's agenda."""
    item = await agenda_svc.create(event_id, body.model_dump())
    return AgendaItemResponse.model_validate(item)


@router.post("/{event_id}/agenda/reorder", response_model=list[AgendaItemResponse])
@limit_writes
async def reorder_agenda(
    request: Request,
    event_id: str,
    body: AgendaReorderRequest,
    agenda_svc: Annotated[AgendaService, Depends(get_agenda_service_for_write)],
):
    """Renumber agenda items in the given order; ids of other events are ignored."""
    items = await agenda_svc.reorder(event_id, body.item_ids)
    return [AgendaItemResponse.model_validate(i) for i in items]
