r"""Interceptor turning the backend's ``feature_unavailable`` error
payload into a typed exception."""

from __future__ import annotations

__all__ = ["ErrorParserInterceptor"]

import httpx

from resilnet.exceptions import FeatureUnavailableError
from resilnet.interceptors.base import Interceptor
from resilnet.utils.body import decode_body

# Used when the payload omits or mistypes a field
DEFAULT_FEATURE_KEY = "unknown"
DEFAULT_FEATURE_MESSAGE = "Feature is not available on your current plan."


class ErrorParserInterceptor(Interceptor):
    """Raise ``FeatureUnavailableError`` for feature-gated failures.

    A failed response whose JSON body looks like
    ``{"error_code": "feature_unavailable", "feature": ..., "message": ...}``
    is replaced by a ``FeatureUnavailableError``. The exception is not
    classified into an envelope: it reaches the caller of
    ``NetworkService.request`` so that a higher layer can catch it
    selectively. Any other failure is passed on unchanged.
    """

    async def on_error(self, request: httpx.Request, error: Exception) -> httpx.Response | None:  # noqa: ARG002
        if not isinstance(error, httpx.HTTPStatusError):
            return None
        payload = decode_body(error.response)
        if not isinstance(payload, dict) or payload.get("error_code") != "feature_unavailable":
            return None
        feature_key = payload.get("feature")
        message = payload.get("message")
        raise FeatureUnavailableError(
            feature_key=feature_key if isinstance(feature_key, str) else DEFAULT_FEATURE_KEY,
            message=message if isinstance(message, str) else DEFAULT_FEATURE_MESSAGE,
        ) from error
