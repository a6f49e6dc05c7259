"""Reply domain entity: a message from a subscriber (or an admin response)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from newsecho.shared.utils.datetime import ensure_utc

UNKNOWN = "Unknown"


@dataclass
class Reply:
    id: str
    newsletter_id: str
    newsletter_title: str
    message: str
    sender_id: str
    sender_name: str
    user_email: str
    timestamp: datetime | None
    read: bool = False
    in_reply_to: str | None = None

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Reply:
        ts = data.get("timestamp")
        return cls(
            id=doc_id,
            newsletter_id=data.get("newsletterId") or UNKNOWN,
            newsletter_title=data.get("newsletterTitle") or UNKNOWN,
            message=data.get("message") or "",
            sender_id=data.get("senderId") or UNKNOWN,
            # older admin responses were written with userName instead of senderName
            sender_name=data.get("senderName") or data.get("userName") or UNKNOWN,
            user_email=data.get("userEmail") or UNKNOWN,
            timestamp=ensure_utc(ts) if isinstance(ts, datetime) else None,
            read=bool(data.get("read", False)),
            in_reply_to=data.get("inReplyTo") or None,
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "newsletterId": self.newsletter_id,
            "newsletterTitle": self.newsletter_title,
            "message": self.message,
            "senderId": self.sender_id,
            "senderName": self.sender_name,
            "userEmail": self.user_email,
            "timestamp": self.timestamp,
            "read": self.read,
            "inReplyTo": self.in_reply_to,
        }
