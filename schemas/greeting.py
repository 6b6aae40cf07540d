from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

class GreetingMessage(BaseModel):
    """Payload returned by the greeting endpoint."""
    timestamp: datetime = Field(..., description="Instant the greeting was computed.")
    language: Optional[str] = Field(default=None, description="Accept-Language value as received.")
    greeting: str

class PingResponse(BaseModel):
    greeting: str
    date: datetime
    url: str
    headers: dict[str, str]
