"""Central Enum definitions for report actions and notifications.

These replace scattered string literals so the service layer, the API and the
tests agree on the same outcome names.
"""
from __future__ import annotations
import enum


class NotificationType(str, enum.Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class ActionStatus(str, enum.Enum):
    """Outcome of a user action against the report store."""
    OK = "ok"
    NOT_CONFIGURED = "not_configured"
    VALIDATION_FAILED = "validation_failed"
    UNAVAILABLE = "unavailable"
    DENIED = "denied"
    NOT_FOUND = "not_found"
    CORRUPT = "corrupt"

__all__ = [
    "NotificationType",
    "ActionStatus",
]
