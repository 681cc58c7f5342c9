r"""Interceptor logging request traffic."""

from __future__ import annotations

__all__ = ["LoggingInterceptor"]

import logging
import time
from typing import TYPE_CHECKING

from resilnet.core.classifier import classify
from resilnet.interceptors.base import Interceptor
from resilnet.utils.structured_logging import log_structured

if TYPE_CHECKING:
    import httpx

_STARTED_AT = "resilnet.started_at"


class LoggingInterceptor(Interceptor):
    """Log every attempt: the outgoing request, then its response or
    error.

    Records carry the fields ``method``, ``url`` and, once the attempt
    is over, ``status_code``, ``duration_ms`` and ``error_kind``.
    Requests and responses are logged at ``DEBUG``, errors at
    ``WARNING``.

    Args:
        logger: The logger to write to. It is owned by the caller.
    """

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    async def before_request(self, request: httpx.Request) -> None:
        request.extensions[_STARTED_AT] = time.monotonic()
        log_structured(
            self.logger,
            logging.DEBUG,
            f"--> {request.method} {request.url}",
            method=request.method,
            url=str(request.url),
        )

    async def on_response(self, request: httpx.Request, response: httpx.Response) -> None:
        log_structured(
            self.logger,
            logging.DEBUG,
            f"<-- {response.status_code} {request.method} {request.url}",
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
            duration_ms=_duration_ms(request),
        )

    async def on_error(self, request: httpx.Request, error: Exception) -> httpx.Response | None:
        response = getattr(error, "response", None)
        log_structured(
            self.logger,
            logging.WARNING,
            f"<-- {request.method} {request.url} failed: {error}",
            method=request.method,
            url=str(request.url),
            status_code=response.status_code if response is not None else None,
            duration_ms=_duration_ms(request),
            error_kind=classify(error).value,
        )
        return None


def _duration_ms(request: httpx.Request) -> float | None:
    started_at = request.extensions.get(_STARTED_AT)
    if started_at is None:
        return None
    return round((time.monotonic() - started_at) * 1000, 1)
