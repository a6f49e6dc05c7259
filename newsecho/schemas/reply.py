"""Reply API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from newsecho.application.dtos.reply import ReplyInbox, ReplyThread
from newsecho.domain.entities import Reply


class ReplyCreate(BaseModel):
    newsletter_id: str = Field(..., min_length=1)
    # Length limit (REPLY_MAX_LENGTH) is enforced after trimming by the service.
    message: str = Field(..., min_length=1)


class ReplyRespond(BaseModel):
    message: str = Field(..., min_length=1)


class ReplyResponse(BaseModel):
    id: str
    newsletter_id: str
    newsletter_title: str
    message: str
    sender_id: str
    sender_name: str
    user_email: str
    timestamp: datetime | None
    read: bool
    in_reply_to: str | None = None

    @classmethod
    def from_entity(cls, reply: Reply) -> "ReplyResponse":
        return cls(
            id=reply.id,
            newsletter_id=reply.newsletter_id,
            newsletter_title=reply.newsletter_title,
            message=reply.message,
            sender_id=reply.sender_id,
            sender_name=reply.sender_name,
            user_email=reply.user_email,
            timestamp=reply.timestamp,
            read=reply.read,
            in_reply_to=reply.in_reply_to,
        )


class ReplyThreadResponse(ReplyResponse):
    responses: list[ReplyResponse] = Field(default_factory=list)

    @classmethod
    def from_thread(cls, thread: ReplyThread) -> "ReplyThreadResponse":
        base = ReplyResponse.from_entity(thread.reply).model_dump()
        return cls(**base, responses=[ReplyResponse.from_entity(r) for r in thread.responses])


class NewsletterOption(BaseModel):
    id: str
    title: str


class ReplyInboxResponse(BaseModel):
    replies: list[ReplyResponse]
    total: int
    unread: int
    this_week: int
    newsletters: list[NewsletterOption]

    @classmethod
    def from_inbox(cls, inbox: ReplyInbox) -> "ReplyInboxResponse":
        return cls(
            replies=[ReplyResponse.from_entity(r) for r in inbox.replies],
            total=inbox.total,
            unread=inbox.unread,
            this_week=inbox.this_week,
            newsletters=[NewsletterOption(id=i, title=t) for i, t in inbox.newsletters],
        )
