"""Agenda item API: single-item edits, visibility and duplication."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from app.api.v1.dependencies import get_agenda_service, get_agenda_service_for_write
from app.application.services import AgendaService
from app.core.limiter import limit_writes
from app.schemas.event import AgendaItemResponse, AgendaItemUpdateRequest

router = APIRouter()


@router.get("/{item_id}", response_model=AgendaItemResponse)
async def get_agenda_item(
    item_id: str,
    agenda_svc: Annotated[AgendaService, Depends(get_agenda_service)],
):
    item = await agenda_svc.get(item_id)
    return AgendaItemResponse.model_validate(item)


@router.put("/{item_id}", response_model=AgendaItemResponse)
@limit_writes
async def update_agenda_item(
    request: Request,
    item_id: str,
    body: AgendaItemUpdateRequest,
    agenda_svc: Annotated[AgendaService, Depends(get_agenda_service_for_write)],
):
    """Apply the fields present in the body."""
    item = await agenda_svc.update(item_id, body.model_dump(exclude_unset=True))
    return AgendaItemResponse.model_validate(item)


@router.delete("/{item_id}", status_code=204)
@limit_writes
async def delete_agenda_item(
    request: Request,
    item_id: str,
    agenda_svc: Annotated[AgendaService, Depends(get_agenda_service_for_write)],
):
    await agenda_svc.delete(item_id)
    return Response(status_code=204)


@router.post("/{item_id}/toggle-visibility", response_model=AgendaItemResponse)
@limit_writes
async def toggle_agenda_item_visibility(
    request: Request,
    item_id: str,
    agenda_svc: Annotated[AgendaService, Depends(get_agenda_service_for_write)],
):
    """Show a hidden item on the public agenda, or hide a visible one."""
    item = await agenda_svc.toggle_visibility(item_id)
    return AgendaItemResponse.model_validate(item)


@router.post("/{item_id}/duplicate", response_model=AgendaItemResponse, status_code=201)
@limit_writes
async def duplicate_agenda_item(
    request: Request,
    item_id: str,
    agenda_svc: Annotated[AgendaService, Depends(get_agenda_service_for_write)],
):
    """Copy an item 30 minutes later, appended to the agenda."""
    item = await agenda_svc.duplicate(item_id)
    return AgendaItemResponse.model_validate(item)
