"""Replies: subscribers write to a newsletter, admins triage and respond."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from newsecho.application.dtos.reply import ReplyInbox, ReplyThread
from newsecho.application.interfaces import (
    ICacheService,
    INewsletterRepository,
    IReplyRepository,
    ISubscriptionRepository,
)
from newsecho.application.services.dashboard_service import invalidate_dashboard
from newsecho.domain.entities import Reply, UserProfile
from newsecho.domain.enums import ReplyReadFilter
from newsecho.domain.exceptions import (
    NotSubscribedException,
    ResourceNotFoundException,
    ValidationException,
)
from newsecho.shared.telemetry import get_logger, traced
from newsecho.shared.utils import InputSanitizer, generate_cuid
from newsecho.shared.utils.datetime import utc_now

logger = get_logger(__name__)

_INBOX_WEEK = timedelta(days=7)


class ReplyService:
    def __init__(
        self,
        replies: IReplyRepository,
        newsletters: INewsletterRepository,
        subscriptions: ISubscriptionRepository,
        cache: ICacheService | None = None,
        *,
        max_length: int = 1000,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._replies = replies
        self._newsletters = newsletters
        self._subscriptions = subscriptions
        self._cache = cache
        self._max_length = max_length
        self._clock = clock

    def _clean_message(self, message: str) -> str:
        """Plain text as it will be stored; the length rule applies to that text."""
        text = InputSanitizer.sanitize_text(message or "").strip()
        if not text:
            raise ValidationException("Please enter a message", field="message")
        if len(text) > self._max_length:
            raise ValidationException(
                f"Message must be at most {self._max_length} characters", field="message"
            )
        return text

    @traced("replies.send")
    async def send(self, sender: UserProfile, newsletter_id: str, message: str) -> Reply:
        """Store a reply to a published newsletter.

        The message is validated before anything is read or written. Non-admin
        senders must be subscribed to the newsletter.
        """
        text = self._clean_message(message)
        newsletter = await self._newsletters.get(newsletter_id)
        if newsletter is None or not newsletter.is_published:
            raise ResourceNotFoundException("newsletter", newsletter_id)
        if not sender.is_admin and await self._subscriptions.get(sender.id, newsletter_id) is None:
            raise NotSubscribedException(newsletter_id)
        reply = Reply(
            id=generate_cuid(),
            newsletter_id=newsletter.id,
            newsletter_title=newsletter.title,
            message=text,
            sender_id=sender.id,
            sender_name=sender.name,
            user_email=sender.email,
            timestamp=self._clock(),
        )
        await self._replies.save(reply)
        await invalidate_dashboard(self._cache)
        logger.info("Reply %s sent to newsletter %s", reply.id, newsletter_id)
        return reply

    async def list_for_user(self, user_id: str) -> list[ReplyThread]:
        """The user's own replies (newest first) with admin responses attached."""
        mine = [r for r in await self._replies.list_for_sender(user_id) if r.in_reply_to is None]
        if not mine:
            return []
        ids = {r.id for r in mine}
        responses: dict[str, list[Reply]] = {}
        for r in await self._replies.list_all():
            if r.in_reply_to in ids:
                responses.setdefault(r.in_reply_to, []).append(r)
        for thread in responses.values():
            thread.sort(key=lambda x: x.timestamp.timestamp() if x.timestamp else 0.0)
        return [ReplyThread(reply=r, responses=responses.get(r.id, [])) for r in mine]

    async def list_inbox(
        self,
        search: str | None = None,
        read_filter: ReplyReadFilter = ReplyReadFilter.ALL,
        newsletter_id: str | None = None,
    ) -> ReplyInbox:
        """Admin inbox of subscriber replies (admin responses excluded).

        unread and this_week are computed over the whole inbox, before filtering.
        """
        now = self._clock()
        inbox = [r for r in await self._replies.list_all() if r.in_reply_to is None]
        needle = (search or "").strip().lower()

        def matches(r: Reply) -> bool:
            if newsletter_id and r.newsletter_id != newsletter_id:
                return False
            if read_filter == ReplyReadFilter.READ and not r.read:
                return False
            if read_filter == ReplyReadFilter.UNREAD and r.read:
                return False
            if needle:
                haystack = f"{r.message} {r.sender_name} {r.user_email} {r.newsletter_title}"
                return needle in haystack.lower()
            return True

        newsletters = dict.fromkeys((r.newsletter_id, r.newsletter_title) for r in inbox)
        return ReplyInbox(
            replies=[r for r in inbox if matches(r)],
            total=len(inbox),
            unread=sum(1 for r in inbox if not r.read),
            this_week=sum(1 for r in inbox if r.timestamp and r.timestamp >= now - _INBOX_WEEK),
            newsletters=list(newsletters),
        )

    async def mark_read(self, reply_id: str) -> None:
        if not await self._replies.mark_read(reply_id):
            raise ResourceNotFoundException("reply", reply_id)
        await invalidate_dashboard(self._cache)

    @traced("replies.respond")
    async def respond(self, admin: UserProfile, reply_id: str, message: str) -> Reply:
        """Store an admin response linked to the original reply and mark it read."""
        text = self._clean_message(message)
        original = await self._replies.get(reply_id)
        if original is None:
            raise ResourceNotFoundException("reply", reply_id)
        response = Reply(
            id=generate_cuid(),
            newsletter_id=original.newsletter_id,
            newsletter_title=original.newsletter_title,
            message=text,
            sender_id=admin.id,
            sender_name=admin.name,
            user_email=admin.email,
            timestamp=self._clock(),
            read=True,
            in_reply_to=original.id,
        )
        await self._replies.save(response)
        await self._replies.mark_read(original.id)
        await invalidate_dashboard(self._cache)
        logger.info("Admin %s responded to reply %s", admin.id, reply_id)
        return response
