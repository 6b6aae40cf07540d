"""Cache-aside interception around request handling.

The interceptor knows nothing about HTTP: it receives the request path, the
raw language header and a continuation that produces the real result. The
HTTP middleware in ``main`` builds those from the incoming request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterable, Optional

from core.cache import CacheStore

logger = logging.getLogger("greeter-api")

DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class Invocation:
    path: str
    language: Optional[str]
    proceed: Callable[[], Awaitable[Any]]


def resolve_language(header_value: Optional[str]) -> str:
    """Language tag for the cache key; the header value is used as-is."""
    if header_value is None:
        return DEFAULT_LANGUAGE
    tag = header_value.strip()
    return tag or DEFAULT_LANGUAGE


def build_cache_key(language: str, path: str) -> str:
    return f"{language}:{path}"


class CachingInterceptor:
    def __init__(
        self,
        store: CacheStore,
        excluded_paths: Iterable[str] = (),
        should_store: Optional[Callable[[Any], bool]] = None,
    ):
        self._store = store
        self.excluded_paths = frozenset(excluded_paths)
        self._should_store = should_store

    def is_excluded(self, path: str) -> bool:
        return path in self.excluded_paths

    async def intercept(self, invocation: Invocation) -> Any:
        if self.is_excluded(invocation.path):
            return await invocation.proceed()

        cache_key = build_cache_key(resolve_language(invocation.language), invocation.path)
        cached = self._store.get(cache_key)
        if cached is not None:
            logger.debug("cache_hit", extra={"cache_key": cache_key})
            return cached

        logger.debug("cache_miss", extra={"cache_key": cache_key})
        result = await invocation.proceed()

        if self._should_store is None or self._should_store(result):
            self._store.set(cache_key, result)
        return result
