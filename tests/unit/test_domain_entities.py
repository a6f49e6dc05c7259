"""Tests for entity normalization from stored documents."""

from datetime import UTC, datetime

import pytest

from newsecho.domain.entities import Newsletter, Reply, Subscription, UserProfile, subscription_id
from newsecho.domain.enums import NewsletterStatus, UserRole
from newsecho.domain.exceptions import ValidationException


def test_newsletter_defaults_for_missing_fields() -> None:
    created = datetime(2024, 1, 2, tzinfo=UTC)
    n = Newsletter.from_document("n1", {"content": "Body", "createdAt": created, "status": "weird"})
    assert n.title == "Untitled"
    assert n.category == "General"
    assert n.author == "Unknown"
    assert n.status == NewsletterStatus.DRAFT
    assert n.updated_at == created
    assert n.activity_date == created


def test_newsletter_activity_date_prefers_publish_date() -> None:
    published = datetime(2024, 3, 1, tzinfo=UTC)
    n = Newsletter.from_document(
        "n1",
        {
            "title": "T",
            "content": "C",
            "status": "published",
            "publishedAt": published,
            "createdAt": datetime(2024, 1, 1, tzinfo=UTC),
        },
    )
    assert n.is_published
    assert n.activity_date == published


def test_newsletter_document_roundtrip_keeps_camel_case_keys() -> None:
    n = Newsletter(id="n1", title="T", content="C", image_url="https://img.example.com/a.png")
    doc = n.to_document()
    assert doc["imageUrl"] == "https://img.example.com/a.png"
    assert Newsletter.from_document("n1", doc).image_url == n.image_url


def test_newsletter_validate_rejects_blank() -> None:
    with pytest.raises(ValidationException):
        Newsletter(id="n1", title=" ", content="C").validate()
    with pytest.raises(ValidationException):
        Newsletter(id="n1", title="T", content="").validate()


def test_reply_reads_legacy_user_name() -> None:
    r = Reply.from_document("r1", {"userName": "Old Admin", "message": "hi"})
    assert r.sender_name == "Old Admin"
    assert r.newsletter_title == "Unknown"
    assert r.read is False
    assert r.timestamp is None


def test_user_profile_enabled_unless_explicitly_false() -> None:
    assert UserProfile.from_document("u1", {"email": "a@example.com"}).enabled is True
    assert UserProfile.from_document("u1", {"enabled": None}).enabled is True
    assert UserProfile.from_document("u1", {"enabled": False}).enabled is False


def test_user_profile_role_and_name_fallbacks() -> None:
    p = UserProfile.from_document(
        "u1",
        {"email": "a@example.com", "role": "superuser", "settings": {"fullName": "Ada"}},
    )
    assert p.role == UserRole.USER
    assert p.name == "Ada"
    assert p.settings.email == "a@example.com"
    assert p.settings.notifications.weekly_summary is False


def test_subscription_id_is_deterministic() -> None:
    s = Subscription(user_id="u1", newsletter_id="n1", subscribed_at=None)
    assert s.id == subscription_id("u1", "n1") == "u1_n1"
