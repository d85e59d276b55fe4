"""
Base schemas used across the application.
"""
from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

class ResponseBase(BaseModel):
    """Common envelope for API responses.

    Endpoints extend this with their own fields; error responses produced by the
    exception handlers use the same ``success``/``message`` keys.
    """
    success: bool = True
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(arbitrary_types_allowed=True)
