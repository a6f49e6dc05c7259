"""Session tokens and password hashing."""

from newsecho.infrastructure.security.jwt import create_access_token, verify_token
from newsecho.infrastructure.security.password import hash_password, verify_password

__all__ = [
    "create_access_token",
    "hash_password",
    "verify_password",
    "verify_token",
]
