"""Centralized configuration constants.

All configurable values in one place for easy maintenance.
Deployment-specific settings can be overridden via environment variables.
"""

import os

# Pwned Passwords range endpoint
# The 5-character hash prefix is appended to this URL
PWNED_RANGE_URL = os.environ.get("PWNED_RANGE_URL", "https://api.pwnedpasswords.com/range/")
REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "10"))  # seconds
USER_AGENT = os.environ.get("USER_AGENT", "PwnedRangeCheck/1.0")

# Padding adds decoy rows with count 0 so response size does not leak the prefix
ADD_PADDING = os.environ.get("ADD_PADDING", "true").lower() == "true"

# SHA-1 digest layout used by the range protocol
DIGEST_LENGTH = 40
PREFIX_LENGTH = 5
SUFFIX_LENGTH = DIGEST_LENGTH - PREFIX_LENGTH

# HTTP server
DEFAULT_HOST = os.environ.get("HOST", "0.0.0.0")
DEFAULT_PORT = int(os.environ.get("PORT", "8080"))
STATIC_DIR = os.environ.get("STATIC_DIR", "dist")

# Status returned when the range lookup itself fails.
# 200 keeps the error in the JSON body for existing web clients; 502 is the
# alternative for callers that want the failure reflected in the status line.
UPSTREAM_ERROR_STATUS = int(os.environ.get("UPSTREAM_ERROR_STATUS", "200"))

# Inbound throttling, slowapi limit string
RATE_LIMIT = os.environ.get("RATE_LIMIT", "100/minute")

# CORS configuration
# Set CORS_ORIGINS environment variable to a comma-separated list of origins
_cors_origins_env = os.environ.get("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
CORS_ORIGINS: list[str] = [
    origin.strip() for origin in _cors_origins_env.split(",") if origin.strip()
]

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Optional JSON event log on disk; empty disables the file handler
SIEM_LOG_FILE = os.environ.get("SIEM_LOG_FILE", "")
SIEM_LOG_MAX_BYTES = int(os.environ.get("SIEM_LOG_MAX_BYTES", 10 * 1024 * 1024))  # 10MB default
SIEM_LOG_BACKUP_COUNT = int(os.environ.get("SIEM_LOG_BACKUP_COUNT", 5))
