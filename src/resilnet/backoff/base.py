r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before the next
    attempt of a failed request.
    """

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the backoff delay before the next attempt.

        Args:
            attempt: The zero-based index of the retry. For example,
                attempt=0 is the delay before the second attempt.

        Returns:
            The delay in seconds.
        """
