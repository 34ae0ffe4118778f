"""Bulk CSV import of events, attendees, agenda items and presenters.

Flow: parse_csv (preview + column suggestions) -> create_import (job stored as
pending with all records) -> process_import (one savepoint per row, results
and errors recorded on the job).
"""

from __future__ import annotations

import asyncio
import csv
import io
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from difflib import SequenceMatcher
from typing import TYPE_CHECKING, TypeAlias

from dateutil import parser as date_parser

from app.application.dtos.event_import import ColumnMappingSuggestion, CsvPreview
from app.application.interfaces.repositories import (
    IAgendaItemRepository,
    IAttendeeRepository,
    IEventImportRepository,
    IEventRepository,
    IPresenterRepository,
)
from app.application.interfaces.services import IPasswordHasher
from app.domain.enums import AgendaItemType, ImportStatus, ImportType
from app.domain.exceptions import (
    EventHubException,
    ImportProcessingException,
    ValidationException,
)
from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_temporary_password
from app.shared.utils.sanitization import slugify

if TYPE_CHECKING:
    from app.infrastructure.persistence.models import Event, EventImport

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.7

# Template column -> accepted header spellings, per import type.
EXPECTED_COLUMNS: dict[ImportType, dict[str, list[str]]] = {
    ImportType.EVENTS_ONLY: {
        "Event Title": ["title", "event_title", "Event Title", "Event"],
        "Description": ["description", "Description"],
        "Start Date": ["start_date", "Start Date"],
        "End Date": ["end_date", "End Date"],
        "Location": ["location", "Location"],
        "Max Attendees": ["max_attendees", "Max Attendees"],
    },
    ImportType.ATTENDEES_ONLY: {
        "Event": ["event_title", "Event"],
        "Name": ["name", "attendee_name", "Name"],
        "Email": ["email", "attendee_email", "Email"],
        "Phone": ["phone", "Phone"],
        "Organization": ["organization", "Organization"],
        "Job Title": ["job_title", "Job Title"],
    },
    ImportType.AGENDA_ONLY: {
        "Event": ["event_title", "Event"],
        "Agenda Item": ["agenda_title", "agenda_item", "Agenda Item"],
        "Description": ["agenda_description", "Agenda Description", "Description"],
        "Start Time": ["agenda_start", "Start Time"],
        "End Time": ["agenda_end", "End Time"],
        "Item Type": ["item_type", "Item Type", "Type"],
        "Speaker": ["speaker", "Speaker"],
        "Location": ["agenda_location", "Agenda Location", "Location"],
    },
    ImportType.PRESENTERS_ONLY: {
        "Event": ["event_title", "Event"],
        "Presenter": ["presenter_name", "presenter", "Presenter"],
        "Bio": ["presenter_bio", "Bio"],
        "Email": ["presenter_email", "Presenter Email", "Email"],
        "Role": ["presenter_role", "Role"],
    },
}

SAMPLE_ROWS: dict[ImportType, list[str]] = {
    ImportType.EVENTS_ONLY: [
        "Annual Conference",
        "Our annual technology conference",
        "2024-06-15 09:00:00",
        "2024-06-15 17:00:00",
        "Convention Center",
        "100",
    ],
    ImportType.ATTENDEES_ONLY: [
        "Annual Conference",
        "John Doe",
        "john@example.com",
        "555-1234",
        "Acme Corp",
        "Developer",
    ],
    ImportType.AGENDA_ONLY: [
        "Annual Conference",
        "Opening Keynote",
        "Welcome and introduction",
        "2024-06-15 09:00:00",
        "2024-06-15 10:00:00",
        "keynote",
        "Jane Smith",
        "Main Hall",
    ],
    ImportType.PRESENTERS_ONLY: [
        "Annual Conference",
        "Jane Smith",
        "Technology expert with 10 years experience",
        "jane@example.com",
        "Keynote Speaker",
    ],
}

# Key under EventImport.results for each import type.
RESULT_KINDS: dict[ImportType, str] = {
    ImportType.EVENTS_ONLY: "events",
    ImportType.ATTENDEES_ONLY: "attendees",
    ImportType.AGENDA_ONLY: "agenda",
    ImportType.PRESENTERS_ONLY: "presenters",
}

RowHandler: TypeAlias = Callable[[dict[str, str], int], Awaitable[str]]


def _import_type(value: str) -> ImportType:
    try:
        return ImportType(value)
    except ValueError as e:
        raise ValidationException(
            f"import_type must be one of {', '.join(ImportType.values())}",
            field="import_type",
        ) from e


def _pick(record: dict[str, str], *names: str) -> str:
    """First non-empty value among the accepted header spellings."""
    for name in names:
        value = record.get(name)
        if value:
            return value.strip()
    return ""


def _parse_datetime(value: str) -> datetime | None:
    if not value:
        return None
    try:
        parsed = date_parser.parse(value)
    except (ValueError, OverflowError):
        logger.warning("Failed to parse date %r", value)
        return None
    return ensure_utc(parsed)


def _parse_int(value: str) -> int | None:
    return int(value) if value.strip().lstrip("-").isdigit() else None


def similarity(a: str, b: str) -> float:
    """Case-insensitive similarity ratio in [0, 1]."""
    return SequenceMatcher(None, a.lower(), b.lower()).ratio()


class EventImportService:
    """Parses CSV uploads and applies them row by row."""

    def __init__(
        self,
        import_repo: IEventImportRepository,
        event_repo: IEventRepository,
        attendee_repo: IAttendeeRepository,
        presenter_repo: IPresenterRepository,
        agenda_repo: IAgendaItemRepository,
        password_hasher: IPasswordHasher,
        preview_rows: int = 100,
        batch_size: int = 50,
    ) -> None:
        self.import_repo = import_repo
        self.event_repo = event_repo
        self.attendee_repo = attendee_repo
        self.presenter_repo = presenter_repo
        self.agenda_repo = agenda_repo
        self.password_hasher = password_hasher
        self.preview_rows = preview_rows
        self.batch_size = batch_size

    # ---- Parsing ----

    def parse_csv(self, text: str, import_type: str) -> CsvPreview:
        """Read CSV text (first line is the header) and build a preview.

        Raises:
            ValidationException: unknown import type, empty file or missing header.
        """
        kind = _import_type(import_type)
        reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
        headers = [h.strip() for h in (reader.fieldnames or []) if h and h.strip()]
        if not headers:
            raise ValidationException("CSV file has no header row", field="file")
        records: list[dict[str, str]] = []
        for raw in reader:
            record = {
                (k or "").strip(): (v or "").strip()
                for k, v in raw.items()
                if k is not None and isinstance(v, str)
            }
            if any(record.values()):
                records.append(record)
        logger.info(
            "Parsed CSV for %s import: rows=%s columns=%s", kind.value, len(records), len(headers)
        )
        return CsvPreview(
            headers=headers,
            preview=records[: self.preview_rows],
            total_rows=len(records),
            expected_columns=list(EXPECTED_COLUMNS[kind]),
            mapping_suggestions=self.suggest_column_mapping(headers, kind),
            records=records,
        )

    @staticmethod
    def suggest_column_mapping(
        headers: list[str], import_type: ImportType
    ) -> list[ColumnMappingSuggestion]:
        """For each expected column, the best-matching header scoring above 0.7."""
        suggestions: list[ColumnMappingSuggestion] = []
        for column, variations in EXPECTED_COLUMNS[import_type].items():
            best_header, best_score = None, 0.0
            for header in headers:
                for variation in variations:
                    score = similarity(header, variation)
                    if score > best_score:
                        best_header, best_score = header, score
            if best_header is not None and best_score > SIMILARITY_THRESHOLD:
                suggestions.append(
                    ColumnMappingSuggestion(
                        header=best_header,
                        suggested_column=column,
                        similarity=round(best_score, 3),
                    )
                )
        return suggestions

    @staticmethod
    def generate_template(import_type: str) -> str:
        """CSV header plus one fully quoted sample row."""
        kind = _import_type(import_type)
        buf = io.StringIO()
        csv.writer(buf, lineterminator="\n").writerow(EXPECTED_COLUMNS[kind])
        csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_ALL).writerow(
            SAMPLE_ROWS[kind]
        )
        return buf.getvalue()

    # ---- Jobs ----

    async def create_import(
        self, *, created_by_id: str, filename: str, import_type: str, text: str
    ) -> EventImport:
        """Parse text and store a pending job holding every record."""
        preview = self.parse_csv(text, import_type)
        if preview.total_rows == 0:
            raise ValidationException("CSV file contains no data rows", field="file")
        job = await self.import_repo.create_import(
            created_by_id=created_by_id,
            filename=filename,
            import_type=import_type,
            status=ImportStatus.PENDING.value,
            total_rows=preview.total_rows,
            imported_data={"headers": preview.headers, "records": preview.records},
        )
        logger.info("Created import %s (%s, %s rows)", job.id, import_type, preview.total_rows)
        return job

    async def get_import(self, import_id: str) -> EventImport:
        return await self.import_repo.get_or_raise(import_id)

    async def list_imports(self, skip: int = 0, limit: int = 20) -> list[EventImport]:
        """Most recent jobs first."""
        return await self.import_repo.list_recent(skip=skip, limit=limit)

    async def process_import(self, import_id: str) -> EventImport:
        """Apply a pending job. Row failures are recorded and do not stop the run.

        Raises:
            ImportProcessingException: job is not pending or has no data.
        """
        job = await self.import_repo.get_or_raise(import_id)
        if job.status != ImportStatus.PENDING.value:
            raise ImportProcessingException(
                f"Import is {job.status}; only pending imports can be processed",
                import_id=job.id,
            )
        records = (job.imported_data or {}).get("records")
        if not records:
            raise ImportProcessingException("Import has no data to process", import_id=job.id)

        kind = _import_type(job.import_type)
        handler = self._handler_for(kind)
        result_kind = RESULT_KINDS[kind]

        job.status = ImportStatus.PROCESSING.value
        job.total_rows = len(records)
        job.successful_rows = 0
        job.failed_rows = 0
        await self.import_repo.save(job)
        logger.info("Starting import %s (%s rows)", job.id, len(records))

        try:
            for index, record in enumerate(records):
                row = index + 2
                try:
                    async with self.import_repo.savepoint():
                        message = await handler(record, row)
                except (EventHubException, ValueError) as e:
                    text = e.message if isinstance(e, EventHubException) else str(e)
                    job.failed_rows += 1
                    job.add_error(f"Row {row}: {text}", row=row)
                    logger.warning("Import %s row %s failed: %s", job.id, row, text)
                else:
                    job.successful_rows += 1
                    job.add_result(result_kind, message, {"row": row})
                if (index + 1) % self.batch_size == 0:
                    await self.import_repo.save(job)
                    logger.info(
                        "Import %s progress: %s/%s", job.id, index + 1, len(records)
                    )
        except Exception as e:
            job.status = ImportStatus.FAILED.value
            job.add_error(f"Import failed: {e}")
            job.processed_at = utc_now()
            await self.import_repo.save(job)
            logger.exception("Import %s failed", job.id)
            return job

        job.status = ImportStatus.COMPLETED.value
        job.processed_at = utc_now()
        await self.import_repo.save(job)
        logger.info(
            "Import %s completed: successful=%s failed=%s",
            job.id,
            job.successful_rows,
            job.failed_rows,
        )
        return job

    def _handler_for(self, kind: ImportType) -> RowHandler:
        match kind:
            case ImportType.EVENTS_ONLY:
                return self._import_event
            case ImportType.ATTENDEES_ONLY:
                return self._import_attendee
            case ImportType.AGENDA_ONLY:
                return self._import_agenda_item
            case ImportType.PRESENTERS_ONLY:
                return self._import_presenter

    # ---- Row handlers (each returns the result message) ----

    async def _find_event(self, record: dict[str, str]) -> Event:
        identifier = _pick(record, "event_title", "Event", "event")
        if not identifier:
            raise ValidationException("Event is required", field="event")
        event = await self.event_repo.get_by_title(identifier)
        if event is None:
            event = await self.event_repo.get_by_slug(slugify(identifier))
        if event is None:
            raise ValidationException(f"Event '{identifier}' not found", field="event")
        return event

    async def _unique_slug(self, title: str) -> str:
        base = slugify(title) or "event"
        slug, n = base, 1
        while await self.event_repo.slug_exists(slug):
            n += 1
            slug = f"{base}-{n}"
        return slug

    async def _import_event(self, record: dict[str, str], row: int) -> str:
        title = _pick(record, "title", "event_title", "Event Title", "Event")
        if not title:
            raise ValidationException("Event title is required", field="title")
        existing = await self.event_repo.get_by_title(title)
        if existing is not None:
            return f"Row {row}: Event '{title}' already exists"
        start = _parse_datetime(_pick(record, "start_date", "Start Date"))
        if start is None:
            raise ValidationException("Valid start date is required", field="start_date")
        end = _parse_datetime(_pick(record, "end_date", "End Date"))
        if end is not None and end < start:
            raise ValidationException("End date must not be before start date", field="end_date")
        await self.event_repo.create_event(
            title=title,
            slug=await self._unique_slug(title),
            description=_pick(record, "description", "Description") or None,
            start_date=start,
            end_date=end,
            location=_pick(record, "location", "Location") or None,
            max_attendees=_parse_int(_pick(record, "max_attendees", "Max Attendees")),
        )
        return f"Row {row}: Created event '{title}'"

    async def _import_attendee(self, record: dict[str, str], row: int) -> str:
        event = await self._find_event(record)
        name = _pick(record, "name", "attendee_name", "Name")
        email = _pick(record, "email", "attendee_email", "Email").lower()
        if not name or not email:
            raise ValidationException("Attendee name and email are required", field="email")
        if await self.attendee_repo.get_by_email(email) is not None:
            return f"Row {row}: Attendee '{email}' already registered"
        password = await asyncio.to_thread(
            self.password_hasher.hash, generate_temporary_password()
        )
        await self.attendee_repo.create_attendee(
            event_id=event.id,
            name=name,
            email=email,
            phone=_pick(record, "phone", "Phone") or None,
            organization=_pick(record, "organization", "Organization") or None,
            job_title=_pick(record, "job_title", "Job Title") or None,
            password=password,
        )
        return f"Row {row}: Created attendee '{name}' for '{event.title}'"

    async def _import_agenda_item(self, record: dict[str, str], row: int) -> str:
        event = await self._find_event(record)
        title = _pick(record, "agenda_title", "agenda_item", "Agenda Item")
        if not title:
            raise ValidationException("Agenda item title is required", field="agenda_title")
        item_type = _pick(record, "item_type", "Item Type", "Type").lower()
        if item_type not in AgendaItemType.values():
            item_type = AgendaItemType.SESSION.value
        start = _parse_datetime(_pick(record, "agenda_start", "Start Time"))
        await self.agenda_repo.create_agenda_item(
            event_id=event.id,
            title=title,
            description=_pick(record, "agenda_description", "Agenda Description", "Description")
            or None,
            start_time=start or event.start_date,
            end_time=_parse_datetime(_pick(record, "agenda_end", "End Time")),
            item_type=item_type,
            speaker=_pick(record, "speaker", "Speaker") or None,
            location=_pick(record, "agenda_location", "Agenda Location", "Location") or None,
            sort_order=_parse_int(_pick(record, "sort_order", "Sort Order")) or 0,
        )
        return f"Row {row}: Created agenda item '{title}' for '{event.title}'"

    async def _import_presenter(self, record: dict[str, str], row: int) -> str:
        event = await self._find_event(record)
        name = _pick(record, "presenter_name", "presenter", "Presenter")
        if not name:
            raise ValidationException("Presenter name is required", field="presenter_name")
        presenter = await self.presenter_repo.get_by_name(name)
        if presenter is None:
            presenter = await self.presenter_repo.create_presenter(
                name=name,
                bio=_pick(record, "presenter_bio", "Bio") or None,
                email=_pick(record, "presenter_email", "Presenter Email", "Email") or None,
            )
        await self.presenter_repo.add_to_event(
            event_id=event.id,
            presenter_id=presenter.id,
            presentation_title=_pick(record, "presenter_role", "Role") or None,
            sort_order=_parse_int(_pick(record, "presenter_order", "Presenter Order")) or 0,
        )
        return f"Row {row}: Created presenter '{name}' for '{event.title}'"
