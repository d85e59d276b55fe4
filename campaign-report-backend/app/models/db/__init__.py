from .reports import ReportDocument
from .enums import NotificationType, ActionStatus

__all__ = [
    "ReportDocument",
    "NotificationType",
    "ActionStatus",
]
