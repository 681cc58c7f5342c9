r"""Retry decision logic for determining whether to retry requests.

This module provides the RetryDecider class that decides, from the
envelope of an attempt and the retry policy, whether another attempt is
made.
"""

from __future__ import annotations

__all__ = ["RetryDecider"]

from typing import TYPE_CHECKING

from resilnet.response import Failure

if TYPE_CHECKING:
    from resilnet.response import NetworkResponse
    from resilnet.retry.policy import RetryPolicy


class RetryDecider:
    """Decides whether a request should be retried."""

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy

    def should_retry(self, response: NetworkResponse, attempt: int) -> tuple[bool, str]:
        """Determine if the envelope of an attempt should trigger a retry.

        Args:
            response: The envelope produced by the attempt.
            attempt: The attempt number (1-indexed).

        Returns:
            Tuple of (should_retry, reason).
        """
        if not isinstance(response, Failure):
            return (False, "success")
        if not self.policy.is_retryable(response.error_kind):
            return (False, f"non-retryable error {response.error_kind.value}")
        if attempt >= self.policy.max_attempts:
            return (False, "max attempts exhausted")
        return (True, response.error_kind.value)

    def should_retry_exception(self, exception: Exception, attempt: int) -> tuple[bool, str]:
        """Determine if an unclassified exception should trigger a retry.

        Args:
            exception: The exception raised by the attempt.
            attempt: The attempt number (1-indexed).

        Returns:
            Tuple of (should_retry, reason).
        """
        if attempt >= self.policy.max_attempts:
            return (False, "max attempts exhausted")
        return (True, type(exception).__name__)
