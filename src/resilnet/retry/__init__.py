r"""Retry package: policies, policy selection and the attempt loop.

Public API:
    - RetryPolicy: Immutable retry configuration and its presets
    - select_policy / should_retry_by_default: Defaults per HTTP verb
    - RetryDecider: Logic for deciding whether to retry
    - AsyncRetryExecutor: Asynchronous attempt loop
"""

from __future__ import annotations

__all__ = [
    "CRITICAL_POLICY",
    "DATA_FETCH_POLICY",
    "DEFAULT_RETRYABLE_ERRORS",
    "INTERACTIVE_POLICY",
    "NO_RETRY_POLICY",
    "AsyncRetryExecutor",
    "RetryDecider",
    "RetryPolicy",
    "select_policy",
    "should_retry_by_default",
]

from resilnet.retry.decider import RetryDecider
from resilnet.retry.executor_async import AsyncRetryExecutor
from resilnet.retry.policy import (
    CRITICAL_POLICY,
    DATA_FETCH_POLICY,
    DEFAULT_RETRYABLE_ERRORS,
    INTERACTIVE_POLICY,
    NO_RETRY_POLICY,
    RetryPolicy,
)
from resilnet.retry.selector import select_policy, should_retry_by_default
