"""
Shared response schemas.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


# Health Check Schema
class HealthCheck(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    version: str
    timestamp: datetime = Field(default_factory=datetime.now)


# Error Schema
class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str
    detail: Optional[str] = None
    status_code: int
