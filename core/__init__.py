"""Pwned Range Check Core Package.

Provides shared components for the CLI and HTTP front ends:
- config: Centralized configuration constants
- siem: Logging setup and JSON lookup events
"""

# Configuration constants
from core.config import (
    PWNED_RANGE_URL,
    REQUEST_TIMEOUT,
    USER_AGENT,
    ADD_PADDING,
    DIGEST_LENGTH,
    PREFIX_LENGTH,
    SUFFIX_LENGTH,
    DEFAULT_HOST,
    DEFAULT_PORT,
    STATIC_DIR,
    UPSTREAM_ERROR_STATUS,
    RATE_LIMIT,
    CORS_ORIGINS,
)

# SIEM logging
from core.siem import (
    configure_logging,
    build_siem_event,
    log_siem_event,
)

__all__ = [
    # Config
    "PWNED_RANGE_URL",
    "REQUEST_TIMEOUT",
    "USER_AGENT",
    "ADD_PADDING",
    "DIGEST_LENGTH",
    "PREFIX_LENGTH",
    "SUFFIX_LENGTH",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "STATIC_DIR",
    "UPSTREAM_ERROR_STATUS",
    "RATE_LIMIT",
    "CORS_ORIGINS",
    # SIEM
    "configure_logging",
    "build_siem_event",
    "log_siem_event",
]
