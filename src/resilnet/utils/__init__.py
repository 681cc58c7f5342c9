r"""Utility functions shared by the service and the interceptors."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "decode_body",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

from resilnet.utils.body import decode_body
from resilnet.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)
