from __future__ import annotations
from datetime import datetime, timezone
from fastapi import APIRouter, Request
from schemas.greeting import PingResponse

router = APIRouter()

_ECHOED_HEADERS = ("host", "user-agent", "accept-language", "x-request-id")

@router.get("/health")
async def health_check():
    """Simple health check."""
    return {"ok": True}

@router.get("/ping", response_model=PingResponse)
async def ping(request: Request):
    """Liveness probe echoing the request back."""
    return PingResponse(
        greeting="Hello from the greeter API",
        date=datetime.now(timezone.utc),
        url=str(request.url),
        headers={k: v for k, v in request.headers.items() if k in _ECHOED_HEADERS},
    )
