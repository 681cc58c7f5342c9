r"""Classification of transport outcomes into error kinds.

This module is the single place that maps what httpx reports (timeouts,
connection errors, failed responses) and cancellations onto the closed
``ErrorKind`` taxonomy. All functions are pure.
"""

from __future__ import annotations

__all__ = ["classify", "classify_status_code", "is_success_status"]

import httpx

from resilnet.error_kind import ErrorKind
from resilnet.exceptions import RequestCancelledError

_STATUS_CODE_KINDS: dict[int, ErrorKind] = {
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    404: ErrorKind.NOT_FOUND,
    422: ErrorKind.UNPROCESSABLE,
}


def is_success_status(status_code: int) -> bool:
    """Indicate whether a status code is a successful response.

    Args:
        status_code: The HTTP status code.

    Returns:
        ``True`` for 2xx status codes, otherwise ``False``.

    Example:
        ```pycon
        >>> from resilnet.core.classifier import is_success_status
        >>> is_success_status(204)
        True
        >>> is_success_status(304)
        False

        ```
    """
    return 200 <= status_code < 300


def classify_status_code(status_code: int | None) -> ErrorKind:
    """Map the status code of a failed response to an error kind.

    Args:
        status_code: The HTTP status code, or ``None`` if the response
            has none.

    Returns:
        The error kind for this status code.

    Example:
        ```pycon
        >>> from resilnet.core.classifier import classify_status_code
        >>> classify_status_code(404)
        <ErrorKind.NOT_FOUND: 'not_found'>
        >>> classify_status_code(503)
        <ErrorKind.SERVER: 'server'>
        >>> classify_status_code(418)
        <ErrorKind.OTHER: 'other'>

        ```
    """
    if status_code is None:
        return ErrorKind.OTHER
    if status_code in _STATUS_CODE_KINDS:
        return _STATUS_CODE_KINDS[status_code]
    if status_code >= 500:
        return ErrorKind.SERVER
    return ErrorKind.OTHER


def classify(outcome: Exception | httpx.Response) -> ErrorKind:
    """Classify the outcome of a failed attempt.

    Rules, in priority order:

    1. Timeouts and connection level errors are ``BAD_CONNECTION``.
    2. Cancellations are ``CANCELLED``.
    3. Other transport errors are ``BAD_CONNECTION`` when they wrap a
       socket level ``OSError``, otherwise ``OTHER``.
    4. Failed responses are mapped with ``classify_status_code``.

    Args:
        outcome: The exception raised by the attempt, or the failed
            response.

    Returns:
        The error kind for this outcome.

    Example:
        ```pycon
        >>> import httpx
        >>> from resilnet.core.classifier import classify
        >>> classify(httpx.ConnectTimeout("timed out"))
        <ErrorKind.BAD_CONNECTION: 'bad_connection'>
        >>> classify(httpx.Response(401))
        <ErrorKind.UNAUTHORIZED: 'unauthorized'>

        ```
    """
    if isinstance(outcome, httpx.Response):
        return classify_status_code(outcome.status_code)
    if isinstance(outcome, (httpx.TimeoutException, httpx.NetworkError)):
        return ErrorKind.BAD_CONNECTION
    if isinstance(outcome, RequestCancelledError):
        return ErrorKind.CANCELLED
    if isinstance(outcome, httpx.HTTPStatusError):
        return classify_status_code(outcome.response.status_code)
    if isinstance(outcome, httpx.HTTPError) and _wraps_socket_error(outcome):
        return ErrorKind.BAD_CONNECTION
    return ErrorKind.OTHER


def _wraps_socket_error(exc: BaseException) -> bool:
    seen: set[int] = set()
    current: BaseException | None = exc.__cause__ or exc.__context__
    while current is not None and id(current) not in seen:
        if isinstance(current, OSError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False
