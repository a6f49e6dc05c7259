"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when the first document is written. These constants are the single source
of truth for the "schema":

    newsletters    generated id; title, content, status, publishedAt, ...
    users          identity-provider uid; email, role, enabled, settings
    subscriptions  "{userId}_{newsletterId}"; userId, newsletterId, subscribedAt
    replies        generated id; newsletterId, message, senderId, read, ...
"""

COLLECTION_NEWSLETTERS = "newsletters"
COLLECTION_USERS = "users"
COLLECTION_SUBSCRIPTIONS = "subscriptions"
COLLECTION_REPLIES = "replies"
