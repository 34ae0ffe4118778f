"""Bulk CSV import API schemas."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.fields import UtcDatetime

ImportTypeLiteral = Literal["events_only", "attendees_only", "agenda_only", "presenters_only"]


class ImportCreateRequest(BaseModel):
    """CSV upload as text (first line is the header row)."""

    created_by_id: str = Field(..., min_length=1)
    filename: str = Field(..., min_length=1, max_length=255)
    import_type: ImportTypeLiteral
    csv_text: str = Field(..., min_length=1)


class ImportPreviewRequest(BaseModel):
    import_type: ImportTypeLiteral
    csv_text: str = Field(..., min_length=1)


class ColumnMappingSuggestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    header: str
    suggested_column: str
    similarity: float


class ImportPreviewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    headers: list[str]
    preview: list[dict[str, str]]
    total_rows: int
    expected_columns: list[str]
    mapping_suggestions: list[ColumnMappingSuggestionResponse]


class ImportResponse(BaseModel):
    """Import job status with per-row results and errors."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    filename: str
    import_type: str
    status: str
    total_rows: int
    successful_rows: int
    failed_rows: int
    success_rate: float
    is_completed: bool
    results: dict[str, Any] | None = None
    errors: list[Any] | None = None
    created_at: UtcDatetime
    processed_at: UtcDatetime | None = None
