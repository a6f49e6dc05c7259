"""DTOs exchanged with the identity provider."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderAccount:
    """Account as reported by the identity provider after sign-up or sign-in."""

    uid: str
    email: str
    email_verified: bool
    id_token: str
    display_name: str | None = None
