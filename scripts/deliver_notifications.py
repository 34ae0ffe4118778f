"""Drain the message notification outbox.

Usage:
    uv run python -m scripts.deliver_notifications [batch_size]
Each pending row on the "messages" queue is logged as delivered and stamped
with delivered_at. Rows are committed one batch at a time. A row whose body
is not a JSON object is logged as an error and stamped too, so it cannot
hold up the rows behind it.
"""

import asyncio
import json
import logging
import sys
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

import app.infrastructure.persistence.database as database
from app.core.constants import MESSAGE_NOTIFICATION_QUEUE
from app.infrastructure.persistence.repositories import AsyncMessageRepository
from app.shared.logging import setup_logging

logger = logging.getLogger("scripts.deliver_notifications")

DEFAULT_BATCH_SIZE = 50


@dataclass
class DeliveryReport:
    delivered: int = 0
    discarded: int = 0


def _parse_body(body: str) -> dict | None:
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


async def drain_outbox(
    session_factory: async_sessionmaker[AsyncSession],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> DeliveryReport:
    """Deliver every pending notification, one committed batch at a time."""
    if batch_size < 1:
        raise ValueError("batch_size must be >= 1")
    report = DeliveryReport()
    while True:
        async with session_factory() as session:
            async with session.begin():
                outbox = AsyncMessageRepository(session)
                rows = await outbox.get_pending(MESSAGE_NOTIFICATION_QUEUE, limit=batch_size)
                for row in rows:
                    payload = _parse_body(row.body)
                    if payload is None:
                        logger.error("Discarding outbox row %s: body is not a JSON object", row.id)
                        report.discarded += 1
                    else:
                        logger.info(
                            "Notify administrator %s of message %s (%s)",
                            payload.get("recipient_id"),
                            payload.get("message_id"),
                            payload.get("priority"),
                        )
                        report.delivered += 1
                    await outbox.mark_delivered(row)
        if len(rows) < batch_size:
            return report


def _batch_size_from_argv(argv: list[str]) -> int:
    if not argv:
        return DEFAULT_BATCH_SIZE
    try:
        value = int(argv[0])
    except ValueError:
        value = 0
    if value < 1:
        print("batch_size must be a positive integer", file=sys.stderr)
        sys.exit(1)
    return value


async def main() -> None:
    setup_logging()
    batch_size = _batch_size_from_argv(sys.argv[1:])
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    try:
        report = await drain_outbox(database.AsyncSessionLocal, batch_size)
        print(f"Delivered: {report.delivered}")
        if report.discarded:
            print(f"Discarded (malformed): {report.discarded}")
    finally:
        await database.engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
