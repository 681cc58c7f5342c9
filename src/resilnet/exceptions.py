r"""Exceptions raised by the resilnet package."""

from __future__ import annotations

__all__ = ["FeatureUnavailableError", "RequestCancelledError", "ResilnetError"]


class ResilnetError(Exception):
    """Base class of all the exceptions raised by resilnet."""


class RequestCancelledError(ResilnetError):
    """Raised to abort a single request attempt.

    Transports and interceptors raise this exception to cancel the
    attempt in flight. The engine classifies it as
    ``ErrorKind.CANCELLED`` and the retry policy decides whether the
    request is attempted again.

    Example:
        ```pycon
        >>> from resilnet.exceptions import RequestCancelledError
        >>> raise RequestCancelledError("user left the screen")
        Traceback (most recent call last):
            ...
        resilnet.exceptions.RequestCancelledError: user left the screen

        ```
    """


class FeatureUnavailableError(ResilnetError):
    """Raised when the backend reports that a feature is not available.

    Args:
        feature_key: The key of the unavailable feature.
        message: The message returned by the backend.

    Example:
        ```pycon
        >>> from resilnet.exceptions import FeatureUnavailableError
        >>> error = FeatureUnavailableError(feature_key="export", message="Upgrade your plan.")
        >>> str(error)
        'Upgrade your plan. (feature: export)'
        >>> error.feature_key
        'export'

        ```
    """

    def __init__(self, feature_key: str, message: str) -> None:
        super().__init__(f"{message} (feature: {feature_key})")
        self.feature_key = feature_key
        self.message = message
