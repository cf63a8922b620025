"""SIEM-compatible lookup event logging.

Provides structured JSON logging for breach lookups, suitable for
integration with SIEM platforms like Splunk, ELK, or QRadar.

Only the public hash prefix is ever recorded. Passwords, suffixes and full
digests never reach the log.
"""

import json
import logging
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler
from threading import Lock
from typing import Optional

from core.config import (
    LOG_FORMAT,
    LOG_LEVEL,
    SIEM_LOG_FILE,
    SIEM_LOG_MAX_BYTES,
    SIEM_LOG_BACKUP_COUNT,
)


SIEM_LOGGER_NAME = "siem"

# Module-level state
_logging_configured = False
_configure_lock = Lock()


def configure_logging(level: Optional[str] = None, siem_log_file: Optional[str] = None) -> None:
    """Configure standard logging on first use.

    Installs a stream handler on the root logger and, when a SIEM log file
    is configured, a RotatingFileHandler for the ``siem`` logger.

    Args:
        level: Log level name, defaults to LOG_LEVEL
        siem_log_file: Path for JSON event lines, defaults to SIEM_LOG_FILE
    """
    global _logging_configured
    with _configure_lock:
        if _logging_configured:
            return

        root = logging.getLogger()
        root.setLevel(level or LOG_LEVEL)
        if not root.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(handler)

        siem_log_file = SIEM_LOG_FILE if siem_log_file is None else siem_log_file
        if siem_log_file:
            directory = os.path.dirname(siem_log_file)
            if directory:
                os.makedirs(directory, exist_ok=True)
            file_handler = RotatingFileHandler(
                siem_log_file,
                maxBytes=SIEM_LOG_MAX_BYTES,
                backupCount=SIEM_LOG_BACKUP_COUNT,
            )
            # Event lines are already JSON, write them as-is
            file_handler.setFormatter(logging.Formatter("%(message)s"))
            logging.getLogger(SIEM_LOGGER_NAME).addHandler(file_handler)

        _logging_configured = True


def build_siem_event(
    event_type: str,
    status: str,
    source_ip: str = "127.0.0.1",
    details: Optional[dict] = None
) -> dict:
    """Build an event dictionary in the SIEM schema."""
    event = {
        "timestamp": datetime.now().isoformat(),
        "event_type": event_type,
        "status": status,
        "ip_address": source_ip,
        "source": "pwned_range_check"
    }

    if details:
        event["details"] = details

    return event


def log_siem_event(
    event_type: str,
    status: str,
    source_ip: str = "127.0.0.1",
    details: Optional[dict] = None
) -> dict:
    """Log event in JSON format suitable for SIEM tools.

    Args:
        event_type: Type of event (e.g., 'password_lookup', 'hash_lookup')
        status: Event status (e.g., 'FOUND', 'NOT_FOUND', 'ERROR')
        source_ip: Source IP address
        details: Optional additional event details

    Returns:
        The event that was logged
    """
    event = build_siem_event(event_type, status, source_ip=source_ip, details=details)
    level = logging.WARNING if status == "ERROR" else logging.INFO
    logging.getLogger(SIEM_LOGGER_NAME).log(level, json.dumps(event))
    return event
