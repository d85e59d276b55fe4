"""Core application configuration.

Everything that may differ between deployments (report store connection,
dashboard defaults, logging) is centralized here as module constants read from
the environment at import time. Tests monkeypatch these values or build their
own store instead of reloading the module.
"""
from __future__ import annotations

import os
from typing import Final


def _env_str(name: str, default: str = "") -> str:
	value = os.getenv(name)
	return value.strip() if value and value.strip() else default


# ------------------------------ Report Store ------------------------------ #
# Single external-service block. An empty or placeholder project id disables
# persistence entirely (save/load report "not configured"); an empty access
# key leaves the store readable but rejects writes.
PLACEHOLDER_PROJECT_IDS: Final[frozenset[str]] = frozenset({"", "YOUR_PROJECT_ID"})

REPORT_STORE_SETTINGS: dict[str, str | float] = {
	"api_key": _env_str("REPORT_STORE_API_KEY"),
	"project_id": _env_str("REPORT_STORE_PROJECT_ID"),
	# SQLAlchemy URL of the store instance
	"url": _env_str("REPORT_STORE_URL", "sqlite+pysqlite:///./reports.db"),
	"collection": _env_str("REPORT_STORE_COLLECTION", "reports"),
	"connect_timeout": float(_env_str("REPORT_STORE_CONNECT_TIMEOUT", "10")),
}


def is_report_store_configured(settings: dict[str, str | float] | None = None) -> bool:
	"""True when the store block carries a real (non-placeholder) project id."""
	settings = REPORT_STORE_SETTINGS if settings is None else settings
	project_id = str(settings.get("project_id") or "").strip()
	return project_id not in PLACEHOLDER_PROJECT_IDS


# ------------------------------ Dashboard --------------------------------- #
DASHBOARD_DEFAULTS: dict[str, str] = {
	"primary_color": "#667eea",
	"secondary_color": "#764ba2",
	"untitled_report_name": "Untitled Report",
}

# Selectable report years relative to the current year.
YEAR_OPTIONS: dict[str, int] = {
	"years_back": 5,
	"count": 10,
}

# -------------------------------- Logging --------------------------------- #
LOG_LEVEL: str = _env_str("LOG_LEVEL", "INFO")
LOG_FILE: str | None = _env_str("LOG_FILE", "logs/app.log") or None
CORS_ORIGINS: list[str] = [o.strip() for o in _env_str("CORS_ORIGINS", "*").split(",") if o.strip()]

__all__ = [
	"PLACEHOLDER_PROJECT_IDS",
	"REPORT_STORE_SETTINGS",
	"is_report_store_configured",
	"DASHBOARD_DEFAULTS",
	"YEAR_OPTIONS",
	"LOG_LEVEL",
	"LOG_FILE",
	"CORS_ORIGINS",
]
