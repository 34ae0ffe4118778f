"""Featured event API: public banner lists and counters, admin management.

Public lists are served from the cache when Redis is enabled. View and
click beacons always answer 200; recorded tells whether the hit counted.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import (
    get_featured_event_service,
    get_featured_event_service_for_write,
)
from app.application.services import FeaturedEventService
from app.application.services.featured_event_service import rotation_settings, to_card
from app.core.limiter import limit_counters, limit_writes
from app.schemas.featured_event import (
    CounterResponse,
    FeaturedEventCreateRequest,
    FeaturedEventFormResponse,
    FeaturedEventResponse,
    FeaturedEventStatisticsResponse,
    FeaturedEventUpdateRequest,
    RotationResponse,
)

router = APIRouter()


@router.get("", response_model=list[FeaturedEventResponse])
async def list_active(
    featured_svc: Annotated[FeaturedEventService, Depends(get_featured_event_service)],
    display_type: str | None = None,
):
    """Currently active featured events, highest priority first."""
    cards = await featured_svc.get_active(display_type)
    return [FeaturedEventResponse.model_validate(c) for c in cards]


@router.get("/rotation", response_model=RotationResponse)
async def rotation(
    featured_svc: Annotated[FeaturedEventService, Depends(get_featured_event_service)],
    limit: Annotated[int | None, Query(ge=1, le=20)] = None,
):
    """Banner items for the homepage carousel with their rotation settings."""
    cards = await featured_svc.get_for_rotation(limit)
    return RotationResponse(
        items=[FeaturedEventResponse.model_validate(c) for c in cards],
        settings=rotation_settings(cards),
    )


@router.get("/all", response_model=list[FeaturedEventResponse])
async def list_all(
    featured_svc: Annotated[FeaturedEventService, Depends(get_featured_event_service)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """All featured events (active or not) for the admin list."""
    items = await featured_svc.list_all(skip=skip, limit=limit)
    return [FeaturedEventResponse.model_validate(to_card(fe)) for fe in items]


@router.get("/statistics", response_model=FeaturedEventStatisticsResponse)
async def statistics(
    featured_svc: Annotated[FeaturedEventService, Depends(get_featured_event_service)],
):
    stats = await featured_svc.get_statistics()
    return FeaturedEventStatisticsResponse.model_validate(stats)


@router.get("/top-performing", response_model=list[FeaturedEventResponse])
async def top_performing(
    featured_svc: Annotated[FeaturedEventService, Depends(get_featured_event_service)],
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
):
    items = await featured_svc.get_top_performing(limit)
    return [FeaturedEventResponse.model_validate(to_card(fe)) for fe in items]


@router.get("/expiring-soon", response_model=list[FeaturedEventResponse])
async def expiring_soon(
    featured_svc: Annotated[FeaturedEventService, Depends(get_featured_event_service)],
    days: Annotated[int, Query(ge=1, le=365)] = 7,
):
    items = await featured_svc.get_expiring_soon(days)
    return [FeaturedEventResponse.model_validate(to_card(fe)) for fe in items]


@router.post("/cleanup")
@limit_writes
async def cleanup_expired(
    request: Request,
    featured_svc: Annotated[
        FeaturedEventService, Depends(get_featured_event_service_for_write)
    ],
) -> dict[str, int]:
    """Deactivate featured events whose display window has ended."""
    return {"deactivated": await featured_svc.cleanup_expired()}


@router.post("", response_model=FeaturedEventResponse, status_code=201)
@limit_writes
async def create_featured_event(
    request: Request,
    body: FeaturedEventCreateRequest,
    featured_svc: Annotated[
        FeaturedEventService, Depends(get_featured_event_service_for_write)
    ],
):
    """Create a featured event. display_settings may be sent as JSON text or an object."""
    values = body.model_dump(exclude={"created_by_id"})
    created = await featured_svc.create(body.created_by_id, values)
    return FeaturedEventResponse.model_validate(to_card(created))


@router.get("/{featured_id}", response_model=FeaturedEventResponse)
async def get_featured_event(
    featured_id: str,
    featured_svc: Annotated[FeaturedEventService, Depends(get_featured_event_service)],
):
    fe = await featured_svc.get(featured_id)
    return FeaturedEventResponse.model_validate(to_card(fe))


@router.get("/{featured_id}/form", response_model=FeaturedEventFormResponse)
async def get_featured_event_form(
    featured_id: str,
    featured_svc: Annotated[FeaturedEventService, Depends(get_featured_event_service)],
):
    """Values for the admin edit form; display_settings rendered as JSON text."""
    fe = await featured_svc.get(featured_id)
    return FeaturedEventFormResponse.from_model(fe)


@router.put("/{featured_id}", response_model=FeaturedEventResponse)
@limit_writes
async def update_featured_event(
    request: Request,
    featured_id: str,
    body: FeaturedEventUpdateRequest,
    featured_svc: Annotated[
        FeaturedEventService, Depends(get_featured_event_service_for_write)
    ],
):
    """Apply the fields present in the body; malformed display_settings text is a 422."""
    updated = await featured_svc.update(featured_id, body.model_dump(exclude_unset=True))
    return FeaturedEventResponse.model_validate(to_card(updated))


@router.delete("/{featured_id}", status_code=204)
@limit_writes
async def delete_featured_event(
    request: Request,
    featured_id: str,
    featured_svc: Annotated[
        FeaturedEventService, Depends(get_featured_event_service_for_write)
    ],
):
    await featured_svc.delete(featured_id)
    return Response(status_code=204)


@router.post("/{featured_id}/view", response_model=CounterResponse)
@limit_counters
async def record_view(
    request: Request,
    featured_id: str,
    featured_svc: Annotated[
        FeaturedEventService, Depends(get_featured_event_service_for_write)
    ],
):
    return CounterResponse(recorded=await featured_svc.record_view(featured_id))


@router.post("/{featured_id}/click", response_model=CounterResponse)
@limit_counters
async def record_click(
    request: Request,
    featured_id: str,
    featured_svc: Annotated[
        FeaturedEventService, Depends(get_featured_event_service_for_write)
    ],
):
    return CounterResponse(recorded=await featured_svc.record_click(featured_id))
