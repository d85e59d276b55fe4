"""Pytest fixtures and factories.

Every test gets its own in-memory SQLite database behind a SQLReportStore;
the store dependency is overridden on the app so no test touches the
environment-configured store.
"""
import sys
from datetime import date
from pathlib import Path
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure project root on sys.path so 'app' package resolves when running from the repo root
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from app.main import app  # type: ignore
from app.database import Base  # type: ignore
from app.api import deps  # type: ignore
from app.integrations import ReportStore, SQLReportStore, StoreUnavailableError
from app.models.db import ReportDocument
from app.models.schemas.reports import ChannelRow, PlatformRow, ReportFormState

@pytest.fixture()
def fixed_day():
    return date(2025, 4, 7)


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def report_store(session_factory):
    return SQLReportStore(session_factory, project_id="test-project", api_key="test-key")


@pytest.fixture()
def read_only_store(session_factory):
    return SQLReportStore(session_factory, project_id="test-project", api_key="")


class RecordingFailingStore(ReportStore):
    """Store that raises ``error`` from every call and counts the calls."""

    def __init__(self, error: Exception | None = None):
        self.error = error or StoreUnavailableError("connection refused")
        self.calls: list[str] = []

    def _fail(self, operation: str):
        self.calls.append(operation)
        raise self.error

    def create(self, payload):
        self._fail("create")

    def update(self, report_id, payload):
        self._fail("update")

    def list(self):
        self._fail("list")

    def get(self, report_id):
        self._fail("get")

    def check_health(self):
        self._fail("check_health")


@pytest.fixture()
def failing_store_factory():
    return RecordingFailingStore


@pytest.fixture()
def form_factory():
    def _create(
        brand_name: str = "Acme",
        start_month: str = "January",
        end_month: str = "March",
        year: int = 2025,
        platforms: list[dict] | None = None,
        channels: list[dict] | None = None,
    ) -> ReportFormState:
        if platforms is None:
            platforms = [
                {"name": "Meta", "impressions": 100000, "reach": 60000, "clicks": 500, "ctr": 0.5},
                {"name": "TikTok", "impressions": 50000, "reach": 30000, "clicks": 1000, "ctr": 2.0},
            ]
        if channels is None:
            channels = [{"name": "Social", "active_months": [False, True, True] + [False] * 9}]
        return ReportFormState(
            brand_name=brand_name,
            start_month=start_month,
            end_month=end_month,
            year=year,
            platforms=[PlatformRow(**p) for p in platforms],
            channels=[ChannelRow(**c) for c in channels],
        )
    return _create


@pytest.fixture()
def use_store():
    """Point the app's store dependency at ``store`` (None disables persistence)."""
    def _use(store):
        app.dependency_overrides[deps.get_report_store] = lambda: store
        return store
    yield _use
    app.dependency_overrides.pop(deps.get_report_store, None)


@pytest.fixture()
def client(use_store, report_store):
    use_store(report_store)
    return TestClient(app)


@pytest.fixture()
def unconfigured_client(use_store):
    use_store(None)
    return TestClient(app)


@pytest.fixture()
def stored_document(session_factory):
    """Insert a raw report document, bypassing payload validation."""
    def _insert(report_id: str, data, report_name: str | None = None, project_id: str = "test-project"):
        session = session_factory()
        try:
            session.add(ReportDocument(
                id=report_id,
                project_id=project_id,
                collection="reports",
                report_name=report_name,
                data=data,
            ))
            session.commit()
        finally:
            session.close()
        return report_id
    return _insert


MALFORMED_DOCUMENT = {
    "brand_name": "Acme",
    "start_month": "Jan",
    "channels": [{"name": "TV", "active_months": [True] * 11}],
}


@pytest.fixture()
def malformed_document():
    return dict(MALFORMED_DOCUMENT)
