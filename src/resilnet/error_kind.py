r"""Closed taxonomy of request failures exposed to callers."""

from __future__ import annotations

__all__ = ["ErrorKind"]

from enum import Enum


class ErrorKind(Enum):
    """Kinds of failure carried by a ``Failure`` envelope.

    The set is closed: transport specific exceptions are always mapped
    onto one of these members before reaching the caller.

    Attributes:
        CANCELLED: The attempt was cancelled before it completed.
        PARSING: The payload could not be turned into the expected type.
        BAD_REQUEST: The request was rejected as malformed.
        UNAUTHORIZED: HTTP 401.
        FORBIDDEN: HTTP 403.
        NOT_FOUND: HTTP 404.
        UNPROCESSABLE: HTTP 422.
        FEATURE_UNAVAILABLE: The requested feature is not available.
        BAD_CONNECTION: Timeouts and connection level failures.
        SERVER: HTTP 5xx.
        OTHER: Anything else.
    """

    CANCELLED = "cancelled"
    PARSING = "parsing"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    UNPROCESSABLE = "unprocessable"
    FEATURE_UNAVAILABLE = "feature_unavailable"
    BAD_CONNECTION = "bad_connection"
    SERVER = "server"
    OTHER = "other"
