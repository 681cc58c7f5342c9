r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that runs the attempt
loop of a request: it performs attempts, asks the decider whether the
envelope deserves another attempt, and waits out the backoff delay in
between.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import asyncio
import logging
from typing import TYPE_CHECKING

from resilnet.exceptions import FeatureUnavailableError
from resilnet.retry.decider import RetryDecider

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from resilnet.response import NetworkResponse
    from resilnet.retry.policy import RetryPolicy


class AsyncRetryExecutor:
    """Executes request attempts with automatic retry logic.

    The loop follows these rules:

    - A ``Success`` envelope is returned immediately.
    - A ``Failure`` whose kind is not retryable is returned immediately,
      even if attempts remain.
    - A retryable ``Failure`` is followed by
      ``policy.get_delay(attempt - 1)`` seconds of sleep and another
      attempt, until ``max_attempts`` is reached. The envelope of the
      last attempt is then returned.
    - An exception raised by an attempt is logged and retried like a
      retryable failure. It is re-raised from the last attempt.
      ``FeatureUnavailableError`` is re-raised at once.

    Args:
        policy: The retry policy of the request.
        logger: Optional logger. Defaults to the module logger.

    Example:
        ```pycon
        >>> import asyncio
        >>> from resilnet.response import Success
        >>> from resilnet.retry import AsyncRetryExecutor, RetryPolicy
        >>> async def attempt():
        ...     return Success(status_code=200, raw_data="ok", data="ok")
        ...
        >>> executor = AsyncRetryExecutor(RetryPolicy(max_attempts=2))
        >>> asyncio.run(executor.execute(attempt, description="GET /ping"))
        Success(status_code=200, raw_data='ok', data='ok')

        ```
    """

    def __init__(self, policy: RetryPolicy, logger: logging.Logger | None = None) -> None:
        self.policy = policy
        self.decider: RetryDecider = RetryDecider(policy)
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    async def execute(
        self,
        attempt_func: Callable[[], Awaitable[NetworkResponse]],
        *,
        description: str = "request",
    ) -> NetworkResponse:
        """Run the attempt loop.

        Args:
            attempt_func: Coroutine function performing one attempt and
                returning its envelope.
            description: Short description of the request used in log
                messages (e.g. ``"GET /users"``).

        Returns:
            The envelope of the last attempt.

        Raises:
            FeatureUnavailableError: If an attempt raised it.
            Exception: Any other exception raised by the last attempt.
        """
        max_attempts = self.policy.max_attempts

        for attempt in range(1, max_attempts + 1):
            try:
                response = await attempt_func()
            except FeatureUnavailableError:
                raise
            except Exception as exc:
                self.logger.warning(
                    f"{description} attempt {attempt}/{max_attempts} failed: {exc!r}"
                )
                should_retry, reason = self.decider.should_retry_exception(exc, attempt)
                if not should_retry:
                    raise
            else:
                should_retry, reason = self.decider.should_retry(response, attempt)
                if not should_retry:
                    if attempt > 1 or reason != "success":
                        self.logger.debug(
                            f"{description} finished on attempt {attempt}/{max_attempts} "
                            f"({reason})"
                        )
                    return response

            delay = self.policy.get_delay(attempt - 1)
            self.logger.debug(
                f"{description} failed ({reason}), retrying in {delay:.2f}s "
                f"(attempt {attempt}/{max_attempts})"
            )
            await asyncio.sleep(delay)

        # Unreachable: the last attempt always returns or raises
        msg = f"{description} made no attempt"  # pragma: no cover
        raise RuntimeError(msg)  # pragma: no cover
