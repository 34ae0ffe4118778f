"""Presenter API: directory CRUD and autocomplete search."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import get_presenter_service, get_presenter_service_for_write
from app.application.services import PresenterService
from app.application.services.presenter_service import display_name
from app.core.limiter import limit_writes
from app.schemas.presenter import (
    PresenterCreateRequest,
    PresenterResponse,
    PresenterSearchResult,
    PresenterUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=list[PresenterResponse])
async def list_presenters(
    presenter_svc: Annotated[PresenterService, Depends(get_presenter_service)],
    search: str | None = None,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    """Presenters by name; search matches name, e-mail or company."""
    presenters = await presenter_svc.list_presenters(search, skip=skip, limit=limit)
    return [PresenterResponse.model_validate(p) for p in presenters]


@router.get("/search", response_model=list[PresenterSearchResult])
async def search_presenters(
    presenter_svc: Annotated[PresenterService, Depends(get_presenter_service)],
    term: str = "",
):
    """Autocomplete for the agenda editor; fewer than two characters returns []."""
    presenters = await presenter_svc.quick_search(term)
    return [
        PresenterSearchResult(
            id=p.id,
            name=p.name,
            title=p.title,
            company=p.company,
            full_name=display_name(p),
        )
        for p in presenters
    ]


@router.post("", response_model=PresenterResponse, status_code=201)
@limit_writes
async def create_presenter(
    request: Request,
    body: PresenterCreateRequest,
    presenter_svc: Annotated[PresenterService, Depends(get_presenter_service_for_write)],
):
    presenter = await presenter_svc.create(body.model_dump())
    return PresenterResponse.model_validate(presenter)


@router.get("/{presenter_id}", response_model=PresenterResponse)
async def get_presenter(
    presenter_id: str,
    presenter_svc: Annotated[PresenterService, Depends(get_presenter_service)],
):
    presenter = await presenter_svc.get(presenter_id)
    return PresenterResponse.model_validate(presenter)


@router.put("/{presenter_id}", response_model=PresenterResponse)
@limit_writes
async def update_presenter(
    request: Request,
    presenter_id: str,
    body: PresenterUpdateRequest,
    presenter_svc: Annotated[PresenterService, Depends(get_presenter_service_for_write)],
):
    presenter = await presenter_svc.update(presenter_id, body.model_dump(exclude_unset=True))
    return PresenterResponse.model_validate(presenter)


@router.delete("/{presenter_id}", status_code=204)
@limit_writes
async def delete_presenter(
    request: Request,
    presenter_id: str,
    presenter_svc: Annotated[PresenterService, Depends(get_presenter_service_for_write)],
):
    """Delete a presenter; 409 while they are scheduled in an event or agenda."""
    await presenter_svc.delete(presenter_id)
    return Response(status_code=204)
