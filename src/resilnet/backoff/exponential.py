r"""Exponential backoff strategy with an integer growth factor."""

from __future__ import annotations

__all__ = ["RoundedExponentialBackoff", "round_half_up"]

import math

from resilnet.backoff.base import BaseBackoffStrategy


def round_half_up(value: float) -> int:
    """Round a non-negative number to the nearest integer, ties up.

    ``round`` is not used because it rounds ties to the nearest even
    integer (``round(2.5) == 2``).

    Example:
        ```pycon
        >>> from resilnet.backoff.exponential import round_half_up
        >>> round_half_up(2.5), round_half_up(1.96), round_half_up(1.3)
        (3, 2, 1)

        ```
    """
    return math.floor(value + 0.5)


class RoundedExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff where the growth factor is rounded first.

    Calculates delay as:
    ``min(initial_delay * round_half_up(multiplier ** attempt), max_delay)``.

    The power is rounded to an integer before it is multiplied, so small
    multipliers produce plateaus: with ``multiplier=1.3`` the factors
    are 1, 1, 2, 2, 3, 4, 5, ...

    Args:
        initial_delay: The delay in seconds before the first retry.
            Must be >= 0.
        multiplier: Growth factor of the delay. Must be >= 1.0.
        max_delay: Maximum delay in seconds. Must be >= 0.

    Example:
        ```pycon
        >>> from resilnet.backoff import RoundedExponentialBackoff
        >>> backoff = RoundedExponentialBackoff(initial_delay=0.5, multiplier=2.0, max_delay=5.0)
        >>> [backoff.calculate(attempt) for attempt in range(5)]
        [0.5, 1.0, 2.0, 4.0, 5.0]

        ```
    """

    def __init__(self, initial_delay: float, multiplier: float, max_delay: float) -> None:
        if not initial_delay >= 0:
            msg = f"initial_delay must be non-negative, got {initial_delay}"
            raise ValueError(msg)
        if not multiplier >= 1.0:
            msg = f"multiplier must be >= 1.0, got {multiplier}"
            raise ValueError(msg)
        if not max_delay >= 0:
            msg = f"max_delay must be non-negative, got {max_delay}"
            raise ValueError(msg)

        self.initial_delay = initial_delay
        self.multiplier = multiplier
        self.max_delay = max_delay

    def calculate(self, attempt: int) -> float:
        """Calculate the rounded exponential backoff delay.

        Args:
            attempt: The zero-based index of the retry.

        Returns:
            The delay in seconds, capped at ``max_delay``.
        """
        if self.initial_delay == 0:
            return 0.0
        try:
            factor = round_half_up(self.multiplier ** max(attempt, 0))
        except OverflowError:
            return self.max_delay
        return min(self.initial_delay * factor, self.max_delay)
