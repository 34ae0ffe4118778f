"""RegistrationService: capacity, duplicates, verification and check-in."""

import csv
import io
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from app.application.services import RegistrationService
from app.application.services.registration_service import EXPORT_COLUMNS
from app.domain.exceptions import (
    DuplicateEmailException,
    EventCapacityExceededException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.persistence.models import Attendee, Event


def _event(**overrides) -> Event:
    values = {
        "id": "ev-1",
        "title": "Annual Conference",
        "slug": "annual-conference",
        "start_date": datetime(2030, 6, 15, 9, 0, tzinfo=UTC),
        "is_active": True,
        "max_attendees": None,
    }
    values.update(overrides)
    return Event(**values)


@pytest.fixture
def repos():
    event_repo = AsyncMock()
    event_repo.get_or_raise = AsyncMock(return_value=_event())
    event_repo.count_attendees = AsyncMock(return_value=0)
    attendee_repo = AsyncMock()
    attendee_repo.get_by_email = AsyncMock(return_value=None)
    attendee_repo.create_attendee = AsyncMock(
        side_effect=lambda **fields: Attendee(id="att-1", **fields)
    )
    attendee_repo.save = AsyncMock(side_effect=lambda obj: obj)
    return event_repo, attendee_repo


async def test_register_normalizes_email(repos) -> None:
    event_repo, attendee_repo = repos
    svc = RegistrationService(event_repo, attendee_repo)
    created = await svc.register("ev-1", name="  Jane Doe ", email=" Jane@Example.COM ")
    assert created.email == "jane@example.com"
    assert created.name == "Jane Doe"
    attendee_repo.get_by_email.assert_awaited_once_with("jane@example.com")


async def test_register_inactive_event(repos) -> None:
    event_repo, attendee_repo = repos
    event_repo.get_or_raise = AsyncMock(return_value=_event(is_active=False))
    with pytest.raises(ValidationException):
        await RegistrationService(event_repo, attendee_repo).register(
            "ev-1", name="Jane", email="jane@example.com"
        )


async def test_register_full_event(repos) -> None:
    event_repo, attendee_repo = repos
    event_repo.get_or_raise = AsyncMock(return_value=_event(max_attendees=2))
    event_repo.count_attendees = AsyncMock(return_value=2)
    with pytest.raises(EventCapacityExceededException):
        await RegistrationService(event_repo, attendee_repo).register(
            "ev-1", name="Jane", email="jane@example.com"
        )
    attendee_repo.create_attendee.assert_not_awaited()


async def test_register_duplicate_email(repos) -> None:
    event_repo, attendee_repo = repos
    attendee_repo.get_by_email = AsyncMock(return_value=Attendee(id="att-0"))
    with pytest.raises(DuplicateEmailException):
        await RegistrationService(event_repo, attendee_repo).register(
            "ev-1", name="Jane", email="jane@example.com"
        )


async def test_verify_email_consumes_token(repos) -> None:
    event_repo, attendee_repo = repos
    attendee = Attendee(id="att-1", is_verified=False, email_verification_token="tok")
    attendee_repo.get_by_verification_token = AsyncMock(return_value=attendee)
    verified = await RegistrationService(event_repo, attendee_repo).verify_email("tok")
    assert verified.is_verified is True
    assert verified.email_verification_token is None
    assert verified.email_verified_at is not None


async def test_verify_email_unknown_token(repos) -> None:
    event_repo, attendee_repo = repos
    attendee_repo.get_by_verification_token = AsyncMock(return_value=None)
    with pytest.raises(ResourceNotFoundException):
        await RegistrationService(event_repo, attendee_repo).verify_email("nope")


async def test_check_in_is_idempotent(repos) -> None:
    event_repo, attendee_repo = repos
    attendee = Attendee(id="att-1", is_checked_in=False)
    attendee_repo.get_or_raise = AsyncMock(return_value=attendee)
    svc = RegistrationService(event_repo, attendee_repo)

    first = await svc.check_in("att-1")
    checked_in_at = first.checked_in_at
    second = await svc.check_in("att-1")

    assert second.is_checked_in is True
    assert second.checked_in_at == checked_in_at
    attendee_repo.save.assert_awaited_once()


async def test_export_csv_columns_and_flags(repos) -> None:
    event_repo, attendee_repo = repos
    jane = Attendee(
        name="Jane, Jr.",
        email="jane@example.com",
        phone=None,
        organization="Acme",
        job_title=None,
        is_verified=True,
        is_checked_in=False,
        registered_at=datetime(2030, 5, 1, 8, 30, tzinfo=UTC),
        email_verified_at=datetime(2030, 5, 1, 9, 0, tzinfo=UTC),
        checked_in_at=None,
    )
    attendee_repo.list_for_export = AsyncMock(return_value=[(jane, "Annual Conference")])

    content = await RegistrationService(event_repo, attendee_repo).export_csv("ev-1")
    rows = list(csv.reader(io.StringIO(content)))

    assert rows[0][:3] == ["Event", "Name", "Email"]
    assert rows[1] == [
        "Annual Conference",
        "Jane, Jr.",
        "jane@example.com",
        "",
        "Acme",
        "",
        "Yes",
        "No",
        "2030-05-01 08:30:00",
        "2030-05-01 09:00:00",
        "",
    ]
    event_repo.get_or_raise.assert_awaited_once_with("ev-1")
    attendee_repo.list_for_export.assert_awaited_once_with("ev-1")


async def test_export_all_events_skips_event_lookup(repos) -> None:
    event_repo, attendee_repo = repos
    attendee_repo.list_for_export = AsyncMock(return_value=[])

    content = await RegistrationService(event_repo, attendee_repo).export_csv()

    assert content.splitlines() == [",".join(EXPORT_COLUMNS)]
    assert EXPORT_COLUMNS[-3:] == ["Registered At", "Verified At", "Checked In At"]
    event_repo.get_or_raise.assert_not_awaited()


async def test_delete_attendee(repos) -> None:
    event_repo, attendee_repo = repos
    attendee = Attendee(id="att-1", event_id="ev-1")
    attendee_repo.get_or_raise = AsyncMock(return_value=attendee)

    await RegistrationService(event_repo, attendee_repo).delete_attendee("att-1")
    attendee_repo.delete_attendee.assert_awaited_once_with(attendee)
