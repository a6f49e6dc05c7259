"""Admin reply inbox: filter, mark as read, respond."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from newsecho.api.v1.dependencies import AdminUser, get_reply_service
from newsecho.application.services import ReplyService
from newsecho.core.limiter import limit_writes
from newsecho.domain.enums import ReplyReadFilter
from newsecho.schemas.reply import ReplyInboxResponse, ReplyRespond, ReplyResponse

router = APIRouter()

Replies = Annotated[ReplyService, Depends(get_reply_service)]


@router.get("", response_model=ReplyInboxResponse)
async def list_inbox(
    replies: Replies,
    search: Annotated[str | None, Query(max_length=200)] = None,
    status: ReplyReadFilter = ReplyReadFilter.ALL,
    newsletter_id: str | None = None,
):
    inbox = await replies.list_inbox(search=search, read_filter=status, newsletter_id=newsletter_id)
    return ReplyInboxResponse.from_inbox(inbox)


@router.post("/{reply_id}/read", status_code=204)
@limit_writes
async def mark_read(request: Request, reply_id: str, replies: Replies):
    await replies.mark_read(reply_id)
    return Response(status_code=204)


@router.post("/{reply_id}/respond", response_model=ReplyResponse, status_code=201)
@limit_writes
async def respond(
    request: Request, reply_id: str, body: ReplyRespond, admin: AdminUser, replies: Replies
):
    """Store an admin response linked to the reply; the original is marked read."""
    return ReplyResponse.from_entity(await replies.respond(admin, reply_id, body.message))
