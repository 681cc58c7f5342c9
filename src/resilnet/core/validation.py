r"""Parameter validation utilities for the service configuration and
retry policies.

This module provides validation functions that check parameters meet
the required constraints before they are used to build an HTTP client
or a retry loop.
"""

from __future__ import annotations

__all__ = ["validate_policy_params", "validate_timeout"]


def validate_timeout(name: str, timeout: float) -> None:
    """Validate a timeout parameter.

    Args:
        name: The parameter name, used in the error message.
        timeout: Maximum seconds to wait. Must be > 0.

    Raises:
        ValueError: If timeout is not > 0 (NaN included).

    Example:
        ```pycon
        >>> from resilnet.core.validation import validate_timeout
        >>> validate_timeout("connect_timeout", 8.0)
        >>> validate_timeout("connect_timeout", 0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: connect_timeout must be > 0, got 0

        ```
    """
    if not timeout > 0:
        msg = f"{name} must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_policy_params(
    max_attempts: int,
    initial_delay: float = 0.0,
    backoff_multiplier: float = 1.0,
    max_delay: float = 0.0,
) -> None:
    """Validate retry policy parameters.

    Args:
        max_attempts: Total number of attempts, including the first one.
            Must be >= 1.
        initial_delay: Delay in seconds before the first retry. Must be >= 0.
        backoff_multiplier: Growth factor of the delay. Must be >= 1.0.
        max_delay: Upper bound of any delay in seconds. Must be >= 0.

    Raises:
        ValueError: If any parameter violates its constraint. NaN
            violates every constraint.

    Example:
        ```pycon
        >>> from resilnet.core.validation import validate_policy_params
        >>> validate_policy_params(max_attempts=3, initial_delay=0.5, backoff_multiplier=2.0)
        >>> validate_policy_params(max_attempts=0)  # doctest: +SKIP

        ```
    """
    if not max_attempts >= 1:
        msg = f"max_attempts must be >= 1, got {max_attempts}"
        raise ValueError(msg)
    if not initial_delay >= 0:
        msg = f"initial_delay must be >= 0, got {initial_delay}"
        raise ValueError(msg)
    if not backoff_multiplier >= 1.0:
        msg = f"backoff_multiplier must be >= 1.0, got {backoff_multiplier}"
        raise ValueError(msg)
    if not max_delay >= 0:
        msg = f"max_delay must be >= 0, got {max_delay}"
        raise ValueError(msg)
