"""Bulk import API: CSV templates, previews and import jobs."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse

from app.api.v1.dependencies import get_import_service, get_import_service_for_write
from app.application.services import EventImportService
from app.core.config import get_settings
from app.core.limiter import limit_upload, limit_writes
from app.domain.exceptions import ValidationException
from app.schemas.event_import import (
    ImportCreateRequest,
    ImportPreviewRequest,
    ImportPreviewResponse,
    ImportResponse,
    ImportTypeLiteral,
)

router = APIRouter()


def _check_size(csv_text: str) -> None:
    max_bytes = get_settings().import_max_bytes
    if len(csv_text.encode("utf-8")) > max_bytes:
        raise ValidationException(
            f"CSV file must be at most {max_bytes} bytes", field="csv_text"
        )


@router.get("", response_model=list[ImportResponse])
async def list_imports(
    import_svc: Annotated[EventImportService, Depends(get_import_service)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    """Recent import jobs, newest first."""
    jobs = await import_svc.list_imports(skip=skip, limit=limit)
    return [ImportResponse.model_validate(j) for j in jobs]


@router.get("/templates/{import_type}", response_class=PlainTextResponse)
async def download_template(
    import_type: ImportTypeLiteral,
    import_svc: Annotated[EventImportService, Depends(get_import_service)],
):
    """CSV template (header + one sample row) for the given import type."""
    return PlainTextResponse(
        import_svc.generate_template(import_type),
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{import_type}_template.csv"'
        },
    )


@router.post("/preview", response_model=ImportPreviewResponse)
@limit_upload
async def preview_import(
    request: Request,
    body: ImportPreviewRequest,
    import_svc: Annotated[EventImportService, Depends(get_import_service)],
):
    """Parse the CSV without storing it: preview rows and column suggestions."""
    _check_size(body.csv_text)
    preview = import_svc.parse_csv(body.csv_text, body.import_type)
    return ImportPreviewResponse.model_validate(preview)


@router.post("", response_model=ImportResponse, status_code=201)
@limit_upload
async def create_import(
    request: Request,
    body: ImportCreateRequest,
    import_svc: Annotated[EventImportService, Depends(get_import_service_for_write)],
):
    """Store a pending import job with every CSV record."""
    _check_size(body.csv_text)
    job = await import_svc.create_import(
        created_by_id=body.created_by_id,
        filename=body.filename,
        import_type=body.import_type,
        text=body.csv_text,
    )
    return ImportResponse.model_validate(job)


@router.post("/{import_id}/process", response_model=ImportResponse)
@limit_writes
async def process_import(
    request: Request,
    import_id: str,
    import_svc: Annotated[EventImportService, Depends(get_import_service_for_write)],
):
    """Run a pending import; row failures are reported in errors, not as an HTTP error."""
    job = await import_svc.process_import(import_id)
    return ImportResponse.model_validate(job)


@router.get("/{import_id}", response_model=ImportResponse)
async def get_import(
    import_id: str,
    import_svc: Annotated[EventImportService, Depends(get_import_service)],
):
    job = await import_svc.get_import(import_id)
    return ImportResponse.model_validate(job)
