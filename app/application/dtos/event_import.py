"""DTOs for bulk CSV import use cases."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ColumnMappingSuggestion:
    """A CSV header that closely resembles an expected column."""

    header: str
    suggested_column: str
    similarity: float


@dataclass(frozen=True)
class CsvPreview:
    """Parsed CSV ready for review before an import is created."""

    headers: list[str]
    preview: list[dict[str, str]]
    total_rows: int
    expected_columns: list[str]
    mapping_suggestions: list[ColumnMappingSuggestion] = field(default_factory=list)
    records: list[dict[str, str]] = field(default_factory=list, repr=False)
