"""
SQL-backed report document store.

Each saved report is one JSON document in ``report_documents``, scoped by
project id and collection name. Driver errors never leave this module raw:
they are translated into the ReportStoreError kinds the service layer handles.
"""
from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Iterator, List, Optional

from pydantic import ValidationError
from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.config import DASHBOARD_DEFAULTS, REPORT_STORE_SETTINGS, is_report_store_configured
from app.database import Base, build_engine, build_session_factory
from app.models.db.reports import ReportDocument
from app.models.schemas.reports import ReportPayload, ReportSummary
from app.utils import get_logger
from .base import (
    ReportStore,
    ReportStoreError,
    StoreUnavailableError,
    StoreAccessDeniedError,
    ReportNotFoundError,
    CorruptReportError,
)

logger = get_logger(__name__)

# Driver messages that mean "rejected by access rules" rather than "unreachable"
_DENIED_MARKERS = (
    "permission denied",
    "access denied",
    "insufficient privilege",
    "not authorized",
    "readonly database",
    "read-only",
)


def translate_store_error(error: SQLAlchemyError, operation: str) -> ReportStoreError:
    message = str(error).lower()
    if any(marker in message for marker in _DENIED_MARKERS):
        return StoreAccessDeniedError(f"Report store rejected {operation}: {error}", operation=operation)
    return StoreUnavailableError(f"Report store unavailable during {operation}: {error}", operation=operation)


class SQLReportStore(ReportStore):
    """Report documents in a SQL database reachable through SQLAlchemy.

    A store opened without an access key is read-only: ``create`` and
    ``update`` fail with StoreAccessDeniedError.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        *,
        project_id: str,
        collection: str = "reports",
        api_key: str = "",
    ):
        self._session_factory = session_factory
        self.project_id = project_id
        self.collection = collection
        self._api_key = api_key

    @property
    def writable(self) -> bool:
        return bool(self._api_key)

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            error = translate_store_error(e, operation)
            logger.error(
                "Report store operation failed",
                operation=operation,
                error_type=type(error).__name__,
                error=str(e),
            )
            raise error from e
        finally:
            session.close()

    def _require_write_access(self, operation: str) -> None:
        if not self.writable:
            logger.warning(
                "Report store write rejected: no access key",
                operation=operation,
                project_id=self.project_id,
            )
            raise StoreAccessDeniedError(
                "Report store was opened without an access key; writes are rejected",
                operation=operation,
            )

    def _find(self, session: Session, report_id: str) -> Optional[ReportDocument]:
        return session.scalars(
            select(ReportDocument).where(
                ReportDocument.id == report_id,
                ReportDocument.project_id == self.project_id,
                ReportDocument.collection == self.collection,
            )
        ).first()

    def ensure_schema(self) -> None:
        with self._session("ensure_schema") as session:
            Base.metadata.create_all(bind=session.get_bind())

    def create(self, payload: ReportPayload) -> str:
        self._require_write_access("create")
        report_id = uuid.uuid4().hex
        with self._session("create") as session:
            session.add(ReportDocument(
                id=report_id,
                project_id=self.project_id,
                collection=self.collection,
                report_name=payload.report_name or None,
                data=payload.model_dump(mode="json"),
            ))
            session.commit()
        logger.info("Report document created", report_id=report_id, collection=self.collection)
        return report_id

    def update(self, report_id: str, payload: ReportPayload) -> None:
        self._require_write_access("update")
        with self._session("update") as session:
            document = self._find(session, report_id)
            if document is None:
                raise ReportNotFoundError(report_id, operation="update")
            document.report_name = payload.report_name or None
            document.data = payload.model_dump(mode="json")
            session.commit()
        logger.info("Report document updated", report_id=report_id, collection=self.collection)

    def list(self) -> List[ReportSummary]:
        untitled = DASHBOARD_DEFAULTS["untitled_report_name"]
        with self._session("list") as session:
            rows = session.execute(
                select(ReportDocument.id, ReportDocument.report_name)
                .where(
                    ReportDocument.project_id == self.project_id,
                    ReportDocument.collection == self.collection,
                )
                .order_by(ReportDocument.created_at, ReportDocument.id)
            ).all()
        return [ReportSummary(id=report_id, name=name or untitled) for report_id, name in rows]

    def get(self, report_id: str) -> ReportPayload:
        with self._session("get") as session:
            document = self._find(session, report_id)
            if document is None:
                raise ReportNotFoundError(report_id, operation="get")
            data = document.data if document.data is not None else {}
        try:
            return ReportPayload.model_validate(data)
        except ValidationError as e:
            logger.error(
                "Stored report document failed validation",
                report_id=report_id,
                collection=self.collection,
                error_count=e.error_count(),
            )
            raise CorruptReportError(report_id, str(e), operation="get") from e

    def check_health(self) -> None:
        with self._session("health_check") as session:
            session.execute(text("SELECT 1"))


def create_report_store(settings: dict[str, str | float] | None = None) -> Optional[ReportStore]:
    """Build the report store from configuration, or None when it is not configured."""
    settings = REPORT_STORE_SETTINGS if settings is None else settings
    if not is_report_store_configured(settings):
        logger.warning(
            "Report store is not configured; save & load is disabled. "
            "Set REPORT_STORE_PROJECT_ID to enable it."
        )
        return None

    engine = build_engine(str(settings["url"]), float(settings.get("connect_timeout") or 10))
    store = SQLReportStore(
        build_session_factory(engine),
        project_id=str(settings["project_id"]),
        collection=str(settings.get("collection") or "reports"),
        api_key=str(settings.get("api_key") or ""),
    )
    try:
        store.ensure_schema()
    except ReportStoreError as e:
        # Store stays enabled; actions report it as unavailable until it is reachable.
        logger.error("Report store schema setup failed", error=str(e))

    logger.info(
        "Report store configured",
        project_id=store.project_id,
        collection=store.collection,
        writable=store.writable,
    )
    return store
