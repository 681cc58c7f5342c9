r"""Interceptor adding default headers to every request."""

from __future__ import annotations

__all__ = ["HeaderInterceptor"]

import inspect
from typing import TYPE_CHECKING, Union

from resilnet.interceptors.base import Interceptor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    import httpx

    HeaderSource = Union[
        Mapping[str, str],
        Callable[[], Mapping[str, str]],
        Callable[[], Awaitable[Mapping[str, str]]],
    ]


class HeaderInterceptor(Interceptor):
    """Add headers the request does not already carry.

    Args:
        headers: A mapping of headers, or a callable (sync or async)
            returning one. The callable is invoked before every attempt,
            so it can return values that change over time (locale,
            app version, ...).

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from resilnet.interceptors import HeaderInterceptor
        >>> request = httpx.Request("GET", "https://api.example.com", headers={"Accept": "text/plain"})
        >>> interceptor = HeaderInterceptor({"Accept": "application/json", "X-App": "demo"})
        >>> asyncio.run(interceptor.before_request(request))
        >>> request.headers["Accept"], request.headers["X-App"]
        ('text/plain', 'demo')

        ```
    """

    def __init__(self, headers: HeaderSource) -> None:
        self._headers = headers

    async def before_request(self, request: httpx.Request) -> None:
        headers = self._headers() if callable(self._headers) else self._headers
        if inspect.isawaitable(headers):
            headers = await headers
        for name, value in headers.items():
            request.headers.setdefault(name, value)
