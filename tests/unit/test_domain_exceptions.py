"""Tests for domain exceptions and their HTTP status mapping."""

import pytest

from newsecho.core.exception_handlers import status_for
from newsecho.domain.exceptions import (
    AccountDisabledException,
    AlreadySubscribedException,
    AuthenticationException,
    AuthorizationException,
    EmailNotVerifiedException,
    IdentityProviderException,
    ImageUploadException,
    NewsEchoException,
    NotSubscribedException,
    ResourceNotFoundException,
    StoreNotConfiguredException,
    SubscriptionCooldownException,
    ValidationException,
)


def test_to_dict_shape() -> None:
    exc = ResourceNotFoundException("newsletter", "n1")
    assert exc.to_dict() == {
        "error": "RESOURCE_NOT_FOUND",
        "message": "newsletter not found: n1",
        "details": {"resource_type": "newsletter", "resource_id": "n1"},
    }


def test_error_code_defaults_to_class_name() -> None:
    assert NewsEchoException("boom").error_code == "NewsEchoException"


def test_cooldown_exception_carries_remaining_seconds() -> None:
    exc = SubscriptionCooldownException("n1", 24, 3600)
    assert exc.details == {"newsletter_id": "n1", "cooldown_hours": 24, "remaining_seconds": 3600}
    assert "24 hours" in exc.message


def test_authorization_exception_names_role() -> None:
    exc = AuthorizationException(required_role="admin")
    assert exc.details == {"required_role": "admin"}
    assert exc.message == "Permission denied: requires admin role"


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ValidationException("bad", field="title"), 400),
        (AuthenticationException(), 401),
        (EmailNotVerifiedException("a@example.com"), 403),
        (AccountDisabledException(), 403),
        (AuthorizationException(), 403),
        (ResourceNotFoundException("reply", "r1"), 404),
        (AlreadySubscribedException("n1"), 409),
        (NotSubscribedException("n1"), 409),
        (SubscriptionCooldownException("n1", 24, 10), 409),
        (ImageUploadException(), 502),
        (StoreNotConfiguredException(), 503),
    ],
)
def test_status_for_domain_errors(exc: NewsEchoException, status: int) -> None:
    assert status_for(exc) == status


@pytest.mark.parametrize(
    ("code", "status"),
    [
        ("INVALID_LOGIN_CREDENTIALS", 401),
        ("INVALID_PASSWORD", 401),
        ("EMAIL_NOT_FOUND", 401),
        ("USER_DISABLED", 403),
        ("EMAIL_EXISTS", 409),
        ("TOO_MANY_ATTEMPTS_TRY_LATER", 429),
        ("WEAK_PASSWORD", 400),
        (None, 400),
    ],
)
def test_status_for_provider_errors(code: str | None, status: int) -> None:
    assert status_for(IdentityProviderException("x", provider_code=code)) == status
