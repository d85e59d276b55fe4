"""
Request-scoped dependencies: the optional report store and the report service.
"""
from typing import Optional
from fastapi import Depends, Request
from app.integrations.base import ReportStore
from app.services.report_service import ReportService


def get_request_id(request: Request) -> str:
    """Request id assigned by the logging middleware, or the caller's header."""
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID", "unknown")


def get_report_store(request: Request) -> Optional[ReportStore]:
    """
    The report store built at startup.

    None means persistence is not configured; the service turns that into
    NOT_CONFIGURED results instead of failing the request.
    """
    return getattr(request.app.state, "report_store", None)


def get_report_service(
    store: Optional[ReportStore] = Depends(get_report_store),
) -> ReportService:
    return ReportService(store)
