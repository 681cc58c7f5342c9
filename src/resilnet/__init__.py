r"""resilnet - Resilient HTTP request layer for client applications.

This package executes HTTP requests over httpx, classifies every failure
into a small, transport independent taxonomy and retries transient
failures according to per-operation retry policies.

Key Features:
    - Success/failure envelopes instead of transport exceptions
    - Stable ``ErrorKind`` taxonomy (bad connection, server, not found, ...)
    - Retry policies with bounded exponential backoff and named presets
    - Default policies per HTTP verb (GET retried, DELETE never retried)
    - Interceptor chain for headers, access tokens, logging and
      backend-specific error payloads
    - Base URL resolved before every attempt
    - Fully async, built on ``httpx.AsyncClient``

Example:
    ```pycon
    >>> from resilnet import NetworkRequest, NetworkService, RetryPolicy
    >>> async def load_user(service: NetworkService):  # doctest: +SKIP
    ...     response = await service.request(
    ...         NetworkRequest.get("/users/1"),
    ...         parse=lambda body: body.get("user"),
    ...         retry_policy=RetryPolicy(max_attempts=5),
    ...     )
    ...     return response.when(success=lambda user: user, failure=lambda kind: None)
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "CRITICAL_POLICY",
    "DATA_FETCH_POLICY",
    "INTERACTIVE_POLICY",
    "NO_RETRY_POLICY",
    "ErrorKind",
    "Failure",
    "FeatureUnavailableError",
    "FormData",
    "NetworkRequest",
    "NetworkResponse",
    "NetworkService",
    "RequestCancelledError",
    "ResilnetError",
    "RetryPolicy",
    "ServiceConfig",
    "Success",
    "__version__",
    "classify",
]

from importlib.metadata import PackageNotFoundError, version

from resilnet.core import ServiceConfig, classify
from resilnet.error_kind import ErrorKind
from resilnet.exceptions import FeatureUnavailableError, RequestCancelledError, ResilnetError
from resilnet.request import FormData, NetworkRequest
from resilnet.response import Failure, NetworkResponse, Success
from resilnet.retry import (
    CRITICAL_POLICY,
    DATA_FETCH_POLICY,
    INTERACTIVE_POLICY,
    NO_RETRY_POLICY,
    RetryPolicy,
)
from resilnet.service import NetworkService

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
