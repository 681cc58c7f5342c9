r"""Configuration dataclass and defaults for NetworkService.

This module provides the timeout defaults and a dataclass-based
configuration object used when the service builds its underlying
``httpx.AsyncClient``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_RECEIVE_TIMEOUT",
    "DEFAULT_SEND_TIMEOUT",
    "ServiceConfig",
]

from dataclasses import dataclass, replace
from typing import Any

import httpx

from resilnet.core.validation import validate_timeout

# Seconds allowed to establish a connection
DEFAULT_CONNECT_TIMEOUT = 8.0

# Seconds allowed to send the request body
DEFAULT_SEND_TIMEOUT = 8.0

# Seconds allowed between two chunks of the response
# Also used for acquiring a connection from the pool
DEFAULT_RECEIVE_TIMEOUT = 10.0


@dataclass
class ServiceConfig:
    """Configuration for NetworkService.

    Args:
        connect_timeout: Seconds to wait for a connection. Must be > 0.
        send_timeout: Seconds to wait while sending the request. Must be > 0.
        receive_timeout: Seconds to wait while receiving the response.
            Must be > 0.
        enable_logging: Whether a LoggingInterceptor is registered
            ahead of the other interceptors.

    Example:
        ```pycon
        >>> from resilnet.core.config import ServiceConfig
        >>> config = ServiceConfig()
        >>> config.connect_timeout
        8.0
        >>> config.merge(receive_timeout=30.0).receive_timeout
        30.0
        >>> config.receive_timeout  # Original unchanged
        10.0

        ```
    """

    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    send_timeout: float = DEFAULT_SEND_TIMEOUT
    receive_timeout: float = DEFAULT_RECEIVE_TIMEOUT
    enable_logging: bool = True

    def __post_init__(self) -> None:
        validate_timeout("connect_timeout", self.connect_timeout)
        validate_timeout("send_timeout", self.send_timeout)
        validate_timeout("receive_timeout", self.receive_timeout)

    def merge(self, **overrides: Any) -> ServiceConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ServiceConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_timeout(self) -> httpx.Timeout:
        """Convert the timeouts to an ``httpx.Timeout``.

        Returns:
            The timeout object to pass to ``httpx.AsyncClient``.

        Example:
            ```pycon
            >>> from resilnet.core.config import ServiceConfig
            >>> timeout = ServiceConfig(connect_timeout=1.0).to_timeout()
            >>> timeout.connect, timeout.write, timeout.read
            (1.0, 8.0, 10.0)

            ```
        """
        return httpx.Timeout(
            self.receive_timeout,
            connect=self.connect_timeout,
            write=self.send_timeout,
        )
