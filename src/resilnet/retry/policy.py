r"""Retry policies and their named presets.

A ``RetryPolicy`` bounds how many attempts a request gets, how long to
wait between them, and which error kinds are worth another attempt.
"""

from __future__ import annotations

__all__ = [
    "CRITICAL_POLICY",
    "DATA_FETCH_POLICY",
    "DEFAULT_RETRYABLE_ERRORS",
    "INTERACTIVE_POLICY",
    "NO_RETRY_POLICY",
    "RetryPolicy",
]

from dataclasses import dataclass, field, replace
from typing import Any

from resilnet.backoff import RoundedExponentialBackoff
from resilnet.core.validation import validate_policy_params
from resilnet.error_kind import ErrorKind

# Error kinds that are usually transient
DEFAULT_RETRYABLE_ERRORS: frozenset[ErrorKind] = frozenset(
    {ErrorKind.BAD_CONNECTION, ErrorKind.SERVER, ErrorKind.CANCELLED}
)


@dataclass(frozen=True)
class RetryPolicy:
    """Immutable retry configuration.

    Args:
        max_attempts: Total number of attempts, including the first one.
            Must be >= 1.
        initial_delay: Delay in seconds before the first retry. Must be >= 0.
        backoff_multiplier: Growth factor of the delay. Must be >= 1.0.
        max_delay: Upper bound of any delay in seconds. Must be >= 0.
        retryable_errors: Error kinds that trigger another attempt.

    Example:
        ```pycon
        >>> from resilnet.retry import RetryPolicy
        >>> policy = RetryPolicy()
        >>> policy.max_attempts
        3
        >>> [policy.get_delay(attempt) for attempt in range(5)]
        [0.5, 1.0, 2.0, 4.0, 5.0]
        >>> policy.merge(max_attempts=5).max_attempts
        5

        ```
    """

    max_attempts: int = 3
    initial_delay: float = 0.5
    backoff_multiplier: float = 2.0
    max_delay: float = 5.0
    retryable_errors: frozenset[ErrorKind] = field(
        default_factory=lambda: DEFAULT_RETRYABLE_ERRORS
    )

    def __post_init__(self) -> None:
        validate_policy_params(
            max_attempts=self.max_attempts,
            initial_delay=self.initial_delay,
            backoff_multiplier=self.backoff_multiplier,
            max_delay=self.max_delay,
        )
        # Accept any iterable of kinds but store a frozenset
        object.__setattr__(self, "retryable_errors", frozenset(self.retryable_errors))

    @property
    def backoff(self) -> RoundedExponentialBackoff:
        return RoundedExponentialBackoff(
            initial_delay=self.initial_delay,
            multiplier=self.backoff_multiplier,
            max_delay=self.max_delay,
        )

    def get_delay(self, attempt: int) -> float:
        """Return the delay before the next attempt.

        Args:
            attempt: The zero-based index of the retry, i.e. ``0`` is the
                delay between the first and the second attempt.

        Returns:
            The delay in seconds. It never decreases with ``attempt``
            and never exceeds ``max_delay``.
        """
        return self.backoff.calculate(attempt)

    def is_retryable(self, error_kind: ErrorKind) -> bool:
        return error_kind in self.retryable_errors

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new RetryPolicy instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)


# Authentication and user data
CRITICAL_POLICY = RetryPolicy(
    max_attempts=3,
    initial_delay=0.3,
    backoff_multiplier=1.5,
    max_delay=3.0,
)

# Data fetching
DATA_FETCH_POLICY = RetryPolicy(
    max_attempts=2,
    initial_delay=0.25,
    backoff_multiplier=1.4,
    max_delay=2.0,
)

# Interactive operations (follow, like, ...); cancellations are final
INTERACTIVE_POLICY = RetryPolicy(
    max_attempts=2,
    initial_delay=0.2,
    backoff_multiplier=1.3,
    max_delay=1.0,
    retryable_errors=frozenset({ErrorKind.BAD_CONNECTION, ErrorKind.SERVER}),
)

NO_RETRY_POLICY = RetryPolicy(
    max_attempts=1,
    initial_delay=0.0,
    backoff_multiplier=1.0,
    max_delay=0.0,
    retryable_errors=frozenset(),
)
