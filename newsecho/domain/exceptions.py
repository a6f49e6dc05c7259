"""Domain exceptions for the NewsEcho application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class NewsEchoException(Exception):
    """Base exception for all NewsEcho application errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(NewsEchoException):
    """Raised when input validation fails (e.g. empty title or too-long reply)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(NewsEchoException):
    """Raised when authentication fails (e.g. invalid credentials or session)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class EmailNotVerifiedException(NewsEchoException):
    """Raised when an account signs in before confirming its e-mail address."""

    def __init__(self, email: str) -> None:
        super().__init__(
            "Please verify your email before logging in",
            "EMAIL_NOT_VERIFIED",
            {"email": email},
        )


class AccountDisabledException(NewsEchoException):
    """Raised when a disabled account tries to use the platform."""

    def __init__(self) -> None:
        super().__init__("This account has been disabled", "ACCOUNT_DISABLED")


class AuthorizationException(NewsEchoException):
    """Raised when the user lacks the role required for the operation."""

    def __init__(
        self,
        required_role: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        details: dict[str, Any] = {}
        if required_role:
            message = f"Permission denied: requires {required_role} role"
            details["required_role"] = required_role
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(NewsEchoException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AlreadySubscribedException(NewsEchoException):
    """Raised when subscribing to a newsletter the user already follows."""

    def __init__(self, newsletter_id: str) -> None:
        super().__init__(
            "Already subscribed to this newsletter",
            "ALREADY_SUBSCRIBED",
            {"newsletter_id": newsletter_id},
        )


class NotSubscribedException(NewsEchoException):
    """Raised when an operation requires a subscription the user does not have."""

    def __init__(self, newsletter_id: str) -> None:
        super().__init__(
            "Not subscribed to this newsletter",
            "NOT_SUBSCRIBED",
            {"newsletter_id": newsletter_id},
        )


class SubscriptionCooldownException(NewsEchoException):
    """Raised when unsubscribing before the cooldown window has elapsed."""

    def __init__(
        self, newsletter_id: str, cooldown_hours: int, remaining_seconds: int
    ) -> None:
        super().__init__(
            f"You cannot unsubscribe for {cooldown_hours} hours after subscribing.",
            "SUBSCRIPTION_COOLDOWN",
            {
                "newsletter_id": newsletter_id,
                "cooldown_hours": cooldown_hours,
                "remaining_seconds": remaining_seconds,
            },
        )


class IdentityProviderException(NewsEchoException):
    """Raised when the identity provider rejects a request.

    provider_code is the raw provider error code (e.g. EMAIL_EXISTS); message is
    the user-facing text chosen for it.
    """

    def __init__(self, message: str, provider_code: str | None = None) -> None:
        details = {"provider_code": provider_code} if provider_code else {}
        super().__init__(message, "IDENTITY_PROVIDER_ERROR", details)
        self.provider_code = provider_code


class ImageUploadException(NewsEchoException):
    """Raised when the image host rejects or fails an upload."""

    def __init__(self, message: str = "Failed to upload image. Please try again.") -> None:
        super().__init__(message, "IMAGE_UPLOAD_ERROR")


class StoreNotConfiguredException(NewsEchoException):
    """Raised when the document store is required but not initialized."""

    def __init__(self) -> None:
        super().__init__(
            message="Document store not configured (set FIREBASE_SERVICE_ACCOUNT_KEY or PATH)",
            error_code="SERVICE_UNAVAILABLE",
        )
