r"""Core shared logic: configuration, validation and error
classification."""

from __future__ import annotations

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_RECEIVE_TIMEOUT",
    "DEFAULT_SEND_TIMEOUT",
    "ServiceConfig",
    "classify",
    "classify_status_code",
    "is_success_status",
    "validate_policy_params",
    "validate_timeout",
]

from resilnet.core.classifier import classify, classify_status_code, is_success_status
from resilnet.core.config import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_RECEIVE_TIMEOUT,
    DEFAULT_SEND_TIMEOUT,
    ServiceConfig,
)
from resilnet.core.validation import validate_policy_params, validate_timeout
