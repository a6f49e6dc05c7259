"""Process-wide logging setup (stdout, one line per record)."""

import logging
import sys

from newsecho.core.config import get_settings

# Request-level chatter from HTTP clients; httpx also logs query strings
# that carry the identity provider API key.
_NOISY_LOGGERS = ("httpx", "httpcore", "google.auth", "urllib3")


def setup_logging() -> None:
    """Configure the root logger. DEBUG when settings.debug, else INFO."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=f"%(asctime)s - {settings.app_name} - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
