"""Application services.

Events and recurrence, agenda, presenters, calendar export, registration,
messaging, featured events and bulk import.
"""

from app.application.services.agenda_service import AgendaService
from app.application.services.calendar_service import CalendarService
from app.application.services.event_import_service import EventImportService
from app.application.services.event_service import EventService
from app.application.services.featured_event_service import FeaturedEventService
from app.application.services.message_service import MessageService
from app.application.services.presenter_service import PresenterService
from app.application.services.recurrence_service import RecurrenceService
from app.application.services.registration_service import RegistrationService

__all__ = [
    "AgendaService",
    "CalendarService",
    "EventImportService",
    "EventService",
    "FeaturedEventService",
    "MessageService",
    "PresenterService",
    "RecurrenceService",
    "RegistrationService",
]
