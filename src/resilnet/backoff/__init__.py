r"""Backoff strategies for retry delays."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "RoundedExponentialBackoff", "round_half_up"]

from resilnet.backoff.base import BaseBackoffStrategy
from resilnet.backoff.exponential import RoundedExponentialBackoff, round_half_up
