"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    agenda,
    attendees,
    calendar,
    events,
    featured_events,
    health,
    imports,
    messages,
    presenters,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(agenda.router, prefix="/agenda", tags=["agenda"])
api_router.include_router(presenters.router, prefix="/presenters", tags=["presenters"])
api_router.include_router(calendar.router, tags=["calendar"])
api_router.include_router(attendees.router, tags=["attendees"])
api_router.include_router(messages.router, prefix="/messages", tags=["messages"])
api_router.include_router(
    featured_events.router, prefix="/featured-events", tags=["featured-events"]
)
api_router.include_router(imports.router, prefix="/imports", tags=["imports"])
