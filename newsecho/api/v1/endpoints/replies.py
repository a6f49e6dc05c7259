"""Subscriber replies to newsletters."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from newsecho.api.v1.dependencies import CurrentUser, get_reply_service
from newsecho.application.services import ReplyService
from newsecho.core.limiter import limit_writes
from newsecho.schemas.reply import ReplyCreate, ReplyResponse, ReplyThreadResponse

router = APIRouter()

Replies = Annotated[ReplyService, Depends(get_reply_service)]


@router.post("", response_model=ReplyResponse, status_code=201)
@limit_writes
async def send_reply(request: Request, body: ReplyCreate, current_user: CurrentUser, replies: Replies):
    """Send a reply to a subscribed, published newsletter."""
    reply = await replies.send(current_user, body.newsletter_id, body.message)
    return ReplyResponse.from_entity(reply)


@router.get("/mine", response_model=list[ReplyThreadResponse])
async def list_my_replies(current_user: CurrentUser, replies: Replies):
    threads = await replies.list_for_user(current_user.id)
    return [ReplyThreadResponse.from_thread(t) for t in threads]
