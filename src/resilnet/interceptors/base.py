r"""Interceptor hooks and the ordered chain that runs them.

Interceptors observe and adjust every attempt of a request without the
service knowing what they do. The chain invokes them in registration
order:

- ``before_request`` may change the outgoing ``httpx.Request`` (e.g.
  headers) or raise ``RequestCancelledError`` to abort the attempt.
- ``on_error`` receives the exception of a failed attempt. Returning an
  ``httpx.Response`` resolves the error and skips the remaining
  interceptors; raising an ``httpx.HTTPError`` or a
  ``RequestCancelledError`` replaces the error and passes the
  replacement on to the next interceptors; returning ``None`` passes
  the error on.
- ``on_response`` sees the final successful response.
"""

from __future__ import annotations

__all__ = ["Interceptor", "InterceptorChain"]

from typing import TYPE_CHECKING

import httpx

from resilnet.exceptions import RequestCancelledError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class Interceptor:
    """Base class of interceptors.

    Every hook is a no-op; subclasses override the ones they need.
    """

    async def before_request(self, request: httpx.Request) -> None:
        """Called before the request is sent."""

    async def on_response(self, request: httpx.Request, response: httpx.Response) -> None:
        """Called with a successful response."""

    async def on_error(self, request: httpx.Request, error: Exception) -> httpx.Response | None:
        """Called when the attempt failed.

        Args:
            request: The request that was sent.
            error: The exception of the attempt. Failed responses are
                reported as ``httpx.HTTPStatusError``.

        Returns:
            A response that replaces the error, or ``None``.
        """
        return None


class InterceptorChain:
    """Ordered list of interceptors.

    Args:
        interceptors: The initial interceptors, in invocation order.

    Example:
        ```pycon
        >>> from resilnet.interceptors import HeaderInterceptor, InterceptorChain
        >>> chain = InterceptorChain([HeaderInterceptor({"X-App": "demo"})])
        >>> len(chain)
        1

        ```
    """

    def __init__(self, interceptors: Iterable[Interceptor] = ()) -> None:
        self._interceptors: list[Interceptor] = list(interceptors)

    def __iter__(self) -> Iterator[Interceptor]:
        return iter(self._interceptors)

    def __len__(self) -> int:
        return len(self._interceptors)

    def add(self, interceptor: Interceptor) -> None:
        self._interceptors.append(interceptor)

    async def before_request(self, request: httpx.Request) -> None:
        for interceptor in self._interceptors:
            await interceptor.before_request(request)

    async def on_response(self, request: httpx.Request, response: httpx.Response) -> None:
        for interceptor in self._interceptors:
            await interceptor.on_response(request, response)

    async def on_error(self, request: httpx.Request, error: Exception) -> httpx.Response | None:
        """Run the ``on_error`` hooks until one resolves the error.

        A hook that raises an ``httpx.HTTPError`` or a
        ``RequestCancelledError`` replaces the error: the remaining hooks
        receive the new error. Any other exception stops the chain.

        Returns:
            The response of the first interceptor that resolved the
            error, or ``None`` if none did and the error was not
            replaced.

        Raises:
            httpx.HTTPError: The replacement error, if no later hook
                resolved it.
            RequestCancelledError: Likewise.
        """
        current = error
        for interceptor in self._interceptors:
            try:
                response = await interceptor.on_error(request, current)
            except (httpx.HTTPError, RequestCancelledError) as exc:
                current = exc
                continue
            if response is not None:
                return response
        if current is not error:
            raise current
        return None
