import time
import uuid
import json
import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from core.cache import CacheStore
from core.errors import ConfigurationError, build_error
from core.interceptor import CachingInterceptor, Invocation
from core.lifecycle import CacheLifecycle
from core.settings import Settings
from core.sweeper import Sweeper
from routes import greeting, system
from services.greeters import build_greeting_service

# -----------------------------
# Load env
# -----------------------------
load_dotenv()

# -----------------------------
# Logging (structured-ish)
# -----------------------------
logger = logging.getLogger("greeter-api")

_LOG_EXTRAS = (
    "request_id", "path", "status", "latency_ms", "cache_key", "removed", "removed_keys", "interval_s", "setting", "error",
)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "ts": datetime.now(timezone.utc).isoformat(),
            "msg": record.getMessage(),
        }
        # extras
        for k in _LOG_EXTRAS:
            if hasattr(record, k):
                payload[k] = getattr(record, k)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(level: str) -> None:
    logger.setLevel(level)
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter())
    logger.handlers = [handler]


# -----------------------------
# Cached HTTP responses
# -----------------------------
@dataclass(frozen=True)
class CachedResponse:
    """Fully buffered response that can be replayed for later requests."""

    status_code: int
    raw_headers: tuple
    body: bytes

    @property
    def successful(self) -> bool:
        return 200 <= self.status_code < 300

    def to_response(self) -> Response:
        response = Response(content=self.body, status_code=self.status_code)
        response.raw_headers = list(self.raw_headers)
        return response


async def snapshot_response(response) -> CachedResponse:
    body = b"".join([chunk async for chunk in response.body_iterator])
    return CachedResponse(
        status_code=response.status_code,
        raw_headers=tuple(response.raw_headers),
        body=body,
    )


# -----------------------------
# App
# -----------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.cache_lifecycle.start()
    try:
        yield
    finally:
        app.state.cache_lifecycle.stop()


def create_app(
    settings: Optional[Settings] = None,
    time_func: Callable[[], float] = time.monotonic,
) -> FastAPI:
    if settings is None:
        try:
            settings = Settings.from_env()
        except ConfigurationError as exc:
            logger.error(
                "invalid_configuration",
                extra={"setting": exc.setting, "error": exc.to_error().to_response()},
            )
            raise
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Greeter API",
        description="Localized greetings behind a cache-aside response cache",
        version="1.0.0",
        docs_url="/explorer/",
        openapi_url="/explorer/openapi.json",
        redoc_url=None,
        lifespan=lifespan,
    )

    store = CacheStore(ttl_seconds=settings.cache.ttl_seconds, time_func=time_func)
    sweeper = Sweeper(store, interval_seconds=settings.cache.sweep_interval_seconds)
    interceptor = CachingInterceptor(
        store,
        excluded_paths=settings.cache.excluded_paths,
        should_store=lambda result: result.successful,
    )

    app.state.settings = settings
    app.state.cache_store = store
    app.state.cache_sweeper = sweeper
    app.state.cache_lifecycle = CacheLifecycle(sweeper)
    app.state.caching_interceptor = interceptor
    app.state.greeting_service = build_greeting_service(
        zh_name_first=settings.greeters.zh_name_first,
        fr_name_first=settings.greeters.fr_name_first,
    )

    app.include_router(system.router)
    app.include_router(greeting.router)

    # -----------------------------
    # Middleware: response cache
    # -----------------------------
    @app.middleware("http")
    async def response_cache_middleware(request: Request, call_next):
        if request.method != "GET":
            return await call_next(request)

        async def proceed() -> CachedResponse:
            return await snapshot_response(await call_next(request))

        result = await interceptor.intercept(
            Invocation(
                path=request.url.path,
                language=request.headers.get("accept-language"),
                proceed=proceed,
            )
        )
        return result.to_response()

    # -----------------------------
    # Middleware: request_id + logging
    # -----------------------------
    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        start = time.time()

        # attach to request state
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:
            latency_ms = int((time.time() - start) * 1000)
            logger.error(
                "unhandled_exception",
                exc_info=True,
                extra={"request_id": request_id, "path": request.url.path, "status": 500, "latency_ms": latency_ms},
            )
            err = build_error(500, "Internal server error.")
            return JSONResponse(
                status_code=500,
                content={"detail": err.message, "error": err.to_response(), "request_id": request_id},
                headers={"X-Request-Id": request_id},
            )

        latency_ms = int((time.time() - start) * 1000)
        logger.info(
            "request",
            extra={
                "request_id": request_id,
                "path": request.url.path,
                "status": response.status_code,
                "latency_ms": latency_ms,
            },
        )
        response.headers["X-Request-Id"] = request_id
        return response

    # -----------------------------
    # Exception handler: HTTPException
    # -----------------------------
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        request_id = getattr(request.state, "request_id", None)
        logger.warning(
            "http_exception",
            extra={"request_id": request_id, "path": request.url.path, "status": exc.status_code},
        )
        payload = {"detail": exc.detail, "error": build_error(exc.status_code, str(exc.detail)).to_response()}
        if request_id:
            payload["request_id"] = request_id
        return JSONResponse(status_code=exc.status_code, content=payload)

    # -----------------------------
    # CORS
    # -----------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins or ["*"]),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()
