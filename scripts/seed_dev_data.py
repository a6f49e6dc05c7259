"""Seed sample newsletters into Firestore for local development.

Loads newsletters from a JSON file (a list of objects with title, content,
status, category, author, image_url) or, without a path, a small built-in
set. Newsletters go through NewsletterService so they are sanitized and
timestamped the same way as admin-created ones.

Usage:
    python -m scripts.seed_dev_data [path/to/newsletters.json]

Requires DATABASE_BACKEND=firestore (the in-memory store does not outlive
the process).
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

from newsecho.application.services import NewsletterService
from newsecho.core.config import get_settings
from newsecho.domain.entities import NewsletterDraft
from newsecho.domain.enums import NewsletterStatus
from newsecho.infrastructure.firebase import close_firebase, get_firestore_client, init_firebase
from newsecho.infrastructure.firebase.repositories import (
    FirestoreNewsletterRepository,
    FirestoreReplyRepository,
    FirestoreSubscriptionRepository,
)

SAMPLE_NEWSLETTERS = [
    {
        "title": "Welcome to NewsEcho",
        "content": "<p>Thanks for joining. Every issue lands here first, and you can reply to any of them.</p>",
        "status": "published",
        "category": "Announcements",
        "author": "Editorial Team",
    },
    {
        "title": "Product Notes: Spring Edition",
        "content": "<p>What shipped this season, what is next, and what we learned from your replies.</p>",
        "status": "published",
        "category": "Product",
        "author": "Product Team",
    },
    {
        "title": "Behind the Scenes (draft)",
        "content": "<p>Work in progress.</p>",
        "status": "draft",
        "category": "Culture",
    },
]


def _load(path: str | None) -> list[dict]:
    if path is None:
        return SAMPLE_NEWSLETTERS
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("Seed file must contain a JSON list of newsletters")
    return data


def _draft(item: dict) -> NewsletterDraft:
    return NewsletterDraft(
        title=item.get("title", ""),
        content=item.get("content", ""),
        status=NewsletterStatus(item.get("status", "draft")),
        category=item.get("category"),
        author=item.get("author"),
        image_url=item.get("image_url"),
    )


async def main() -> None:
    items = _load(sys.argv[1] if len(sys.argv) > 1 else None)
    settings = get_settings()
    if settings.database_backend != "firestore":
        print("seed_dev_data requires DATABASE_BACKEND=firestore", file=sys.stderr)
        sys.exit(1)
    if not init_firebase():
        print("Could not initialize Firestore (check service account settings)", file=sys.stderr)
        sys.exit(1)

    try:
        store = get_firestore_client()
        newsletters = FirestoreNewsletterRepository(store)
        existing = {n.title for n in await newsletters.list_all()}
        service = NewsletterService(
            newsletters,
            FirestoreSubscriptionRepository(store),
            FirestoreReplyRepository(store),
            cooldown_hours=settings.unsubscribe_cooldown_hours,
        )
        created = 0
        for item in items:
            if item.get("title") in existing:
                print(f"skip (exists): {item['title']}")
                continue
            view = await service.create(_draft(item))
            print(f"created {view.newsletter.id}: {view.newsletter.title} [{view.newsletter.status.value}]")
            created += 1
        print(f"Seeded {created} newsletter(s)")
    finally:
        await close_firebase()


if __name__ == "__main__":
    asyncio.run(main())
