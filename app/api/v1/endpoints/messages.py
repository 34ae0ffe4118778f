"""Message API: attendees writing to event administrators."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import get_message_service, get_message_service_for_write
from app.application.services import MessageService
from app.core.limiter import limit_writes
from app.schemas.message import (
    MessageCreateRequest,
    MessageInboxResponse,
    MessageReplyRequest,
    MessageResponse,
)

router = APIRouter()

@router.get("", response_model=MessageInboxResponse)
async def inbox(
    message_svc: Annotated[MessageService, Depends(get_message_service)],
    recipient_id: str,
    unread_only: bool = False,
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
):
    """An administrator's inbox, newest first, with the unread count."""
    messages, unread = await message_svc.inbox(
        recipient_id, unread_only=unread_only, skip=skip, limit=limit
    )
    return MessageInboxResponse(
        items=[MessageResponse.model_validate(m) for m in messages],
        unread_count=unread,
    )


@router.post("", response_model=MessageResponse, status_code=201)
@limit_writes
async def send_message(
    request: Request,
    body: MessageCreateRequest,
    message_svc: Annotated[MessageService, Depends(get_message_service_for_write)],
):
    """Send a message; a notification is queued for the recipient."""
    created = await message_svc.send_message(**body.model_dump())
    return MessageResponse.model_validate(created)


@router.get("/{message_id}/thread", response_model=list[MessageResponse])
async def thread(
    message_id: str,
    message_svc: Annotated[MessageService, Depends(get_message_service)],
):
    """The message followed by its replies."""
    messages = await message_svc.thread(message_id)
    return [MessageResponse.model_validate(m) for m in messages]


@router.post("/{message_id}/reply", response_model=MessageResponse, status_code=201)
@limit_writes
async def reply_to_message(
    request: Request,
    message_id: str,
    body: MessageReplyRequest,
    message_svc: Annotated[MessageService, Depends(get_message_service_for_write)],
):
    created = await message_svc.reply(message_id, body.content)
    return MessageResponse.model_validate(created)


@router.post("/{message_id}/read", response_model=MessageResponse)
@limit_writes
async def mark_read(
    request: Request,
    message_id: str,
    message_svc: Annotated[MessageService, Depends(get_message_service_for_write)],
):
    message = await message_svc.mark_read(message_id)
    return MessageResponse.model_validate(message)


@router.post("/{message_id}/archive", response_model=MessageResponse)
@limit_writes
async def archive_message(
    request: Request,
    message_id: str,
    message_svc: Annotated[MessageService, Depends(get_message_service_for_write)],
):
    message = await message_svc.archive(message_id)
    return MessageResponse.model_validate(message)
