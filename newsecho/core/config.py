"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Required fields (SECRET_KEY, Firebase credentials when
the Firebase backends are selected) are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults except those validated in
    validate_required_backends (secret_key, and Firebase credentials when
    database_backend / auth_backend is 'firebase'/'firestore').
    """

    # App
    app_name: str = "newsecho"
    app_version: str = "1.0.0"
    debug: bool = False

    # Document store: "firestore" (Firestore REST) or "memory" (in-process, dev/tests)
    database_backend: str = "firestore"

    # Identity provider: "firebase" (Identity Toolkit REST) or "memory" (dev/tests)
    auth_backend: str = "firebase"

    # Firebase / Firestore: use key (env) or path (file).
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None
    # Web API key for the Identity Toolkit REST API (sign-up, sign-in, oob codes).
    firebase_api_key: SecretStr | None = None
    # Where the provider's verification / reset e-mails send the user back to.
    verification_redirect_url: str | None = None
    password_reset_redirect_url: str | None = None

    # Session tokens
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # Comma-separated e-mails that receive the admin role when their profile is created.
    admin_emails: str = ""

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Newsletter rules
    unsubscribe_cooldown_hours: int = 24
    reply_max_length: int = 1000
    growth_window_days: int = 7
    engagement_window_days: int = 7
    recent_newsletters_limit: int = 3

    # Image hosting (Cloudinary unsigned upload)
    cloudinary_cloud_name: str = ""
    cloudinary_upload_preset: str = ""
    cloudinary_upload_url: str = "https://api.cloudinary.com/v1_1"
    max_image_size: int = 10 * 1024 * 1024  # 10MB
    allowed_image_types: str = "image/jpeg,image/png,image/gif"

    # Request / middleware
    max_request_size: int = 11 * 1024 * 1024  # image limit + multipart overhead
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"

    # Redis Cache
    redis_enabled: bool = False
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    cache_ttl_dashboard: int = 120

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required_backends(self) -> "Settings":
        """Validate required env for the selected backends.

        - Firestore: FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH required.
        - Firebase auth: FIREBASE_API_KEY required.
        """
        if self.database_backend == "firestore":
            has_key = (
                self.firebase_service_account_key
                and self.firebase_service_account_key.get_secret_value()
            )
            if not has_key and not self.firebase_service_account_path:
                raise ValueError(
                    "When database_backend is 'firestore', set FIREBASE_SERVICE_ACCOUNT_KEY (full JSON string) "
                    "or FIREBASE_SERVICE_ACCOUNT_PATH (path to JSON file)."
                )
        elif self.database_backend != "memory":
            raise ValueError(
                f"database_backend must be 'firestore' or 'memory', got: {self.database_backend!r}"
            )
        if self.auth_backend == "firebase":
            if not (self.firebase_api_key and self.firebase_api_key.get_secret_value()):
                raise ValueError(
                    "When auth_backend is 'firebase', set FIREBASE_API_KEY (project Web API key)."
                )
        elif self.auth_backend != "memory":
            raise ValueError(
                f"auth_backend must be 'firebase' or 'memory', got: {self.auth_backend!r}"
            )
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.unsubscribe_cooldown_hours < 0:
            raise ValueError("unsubscribe_cooldown_hours must be >= 0")
        return self

    @property
    def admin_email_set(self) -> frozenset[str]:
        """Lower-cased bootstrap admin e-mails."""
        return frozenset(
            e.strip().lower() for e in self.admin_emails.split(",") if e.strip()
        )

    @property
    def allowed_image_type_set(self) -> frozenset[str]:
        return frozenset(
            t.strip().lower() for t in self.allowed_image_types.split(",") if t.strip()
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
