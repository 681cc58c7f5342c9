r"""Shared test helpers for the service and interceptor tests.

Requests are served by ``httpx.MockTransport`` so the whole stack
(request building, interceptors, classification, retries) runs without
a network.
"""

from __future__ import annotations

__all__ = [
    "BASE_URL",
    "RecordingHandler",
    "create_service",
]

from typing import TYPE_CHECKING, Any

import httpx

from resilnet import NetworkService, ServiceConfig

if TYPE_CHECKING:
    from collections.abc import Callable

BASE_URL = "https://api.example.com"


class RecordingHandler:
    """Handler for ``httpx.MockTransport`` replaying queued outcomes.

    Each queued outcome is used for one attempt: a ``httpx.Response`` is
    returned, an exception class or instance is raised, and a callable
    is called with the request. The last outcome is repeated once the
    queue is exhausted.
    """

    def __init__(self) -> None:
        self.outcomes: list[Any] = []
        self.requests: list[httpx.Request] = []

    def queue(self, *outcomes: Any) -> RecordingHandler:
        self.outcomes.extend(outcomes)
        return self

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, type) and issubclass(outcome, httpx.RequestError):
            raise outcome("simulated failure", request=request)
        if isinstance(outcome, BaseException):
            raise outcome
        if isinstance(outcome, httpx.Response):
            return httpx.Response(
                outcome.status_code,
                headers=outcome.headers,
                content=outcome.content,
            )
        return outcome(request)


def create_service(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    base_url: str = BASE_URL,
    **kwargs: Any,
) -> NetworkService:
    """Create a NetworkService served by ``handler``.

    Logging is disabled unless a config is passed.
    """
    kwargs.setdefault("config", ServiceConfig(enable_logging=False))
    return NetworkService(
        lambda: base_url,
        transport=httpx.MockTransport(handler),
        **kwargs,
    )
