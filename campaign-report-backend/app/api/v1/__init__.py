"""
API v1 router initialization and setup.
"""
from fastapi import APIRouter
from .endpoints import forms, dashboards, reports

api_router = APIRouter()

api_router.include_router(
    forms.router,
    prefix="/forms",
    tags=["forms"]
)

api_router.include_router(
    dashboards.router,
    prefix="/dashboards",
    tags=["dashboards"]
)

api_router.include_router(
    reports.router,
    prefix="/reports",
    tags=["reports"]
)
