"""Reply inbox read models."""

from dataclasses import dataclass, field

from newsecho.domain.entities import Reply


@dataclass(frozen=True)
class ReplyInbox:
    """Filtered inbox plus unfiltered badge counters."""

    replies: list[Reply]
    total: int
    unread: int
    this_week: int
    newsletters: list[tuple[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class ReplyThread:
    """A subscriber's reply with any admin responses to it."""

    reply: Reply
    responses: list[Reply] = field(default_factory=list)
