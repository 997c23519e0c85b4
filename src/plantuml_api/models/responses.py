"""Response models for the API."""

from typing import Any, Dict
from pydantic import BaseModel
from datetime import datetime


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str


class InfoResponse(BaseModel):
    """Service description returned by the root endpoint."""
    name: str
    version: str
    description: str
    endpoints: Dict[str, str]
    integration: Dict[str, str]


class ErrorResponse(BaseModel):
    """Error response model."""
    success: bool = False
    error: Dict[str, Any]
    timestamp: datetime
