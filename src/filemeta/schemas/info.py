from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response schema for GET /api/health."""
    status: Literal["OK"] = "OK"
    service: str
    timestamp: datetime


class InfoResponse(BaseModel):
    """Response schema for GET /api/info and GET /api/test."""
    service: str
    version: str
    endpoints: dict[str, str]
    note: str
