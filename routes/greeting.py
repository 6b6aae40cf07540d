from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Header, Request

from schemas.greeting import GreetingMessage

router = APIRouter()


def _now() -> datetime:
    return datetime.now(timezone.utc)


@router.get("/greet/{name}", response_model=GreetingMessage)
async def greet(
    name: str,
    request: Request,
    accept_language: Optional[str] = Header(default=None),
) -> GreetingMessage:
    """Greets `name` in the language of the Accept-Language header."""
    greeting = request.app.state.greeting_service.greet(accept_language, name)
    return GreetingMessage(timestamp=_now(), language=accept_language, greeting=greeting)
