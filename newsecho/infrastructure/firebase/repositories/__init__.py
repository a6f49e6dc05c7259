"""Firestore repository implementations (work against any store with the same surface)."""

from newsecho.infrastructure.firebase.repositories.newsletter_repo_firestore import (
    FirestoreNewsletterRepository,
)
from newsecho.infrastructure.firebase.repositories.reply_repo_firestore import (
    FirestoreReplyRepository,
)
from newsecho.infrastructure.firebase.repositories.subscription_repo_firestore import (
    FirestoreSubscriptionRepository,
)
from newsecho.infrastructure.firebase.repositories.user_repo_firestore import (
    FirestoreUserRepository,
)

__all__ = [
    "FirestoreNewsletterRepository",
    "FirestoreReplyRepository",
    "FirestoreSubscriptionRepository",
    "FirestoreUserRepository",
]
