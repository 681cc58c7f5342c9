r"""Default retry behavior per HTTP verb."""

from __future__ import annotations

__all__ = ["select_policy", "should_retry_by_default"]

from typing import TYPE_CHECKING

from resilnet.retry.policy import (
    DATA_FETCH_POLICY,
    INTERACTIVE_POLICY,
    NO_RETRY_POLICY,
)

if TYPE_CHECKING:
    from resilnet.retry.policy import RetryPolicy

_POLICIES_BY_METHOD: dict[str, RetryPolicy] = {
    "GET": DATA_FETCH_POLICY,
    "POST": INTERACTIVE_POLICY,
    "PUT": INTERACTIVE_POLICY,
    "PATCH": INTERACTIVE_POLICY,
    "DELETE": NO_RETRY_POLICY,
}


def should_retry_by_default(method: str) -> bool:
    """Indicate whether requests with this verb are retried when the
    caller does not say.

    Only GET requests are retried by default.

    Example:
        ```pycon
        >>> from resilnet.retry import should_retry_by_default
        >>> should_retry_by_default("get"), should_retry_by_default("POST")
        (True, False)

        ```
    """
    return method.upper() == "GET"


def select_policy(method: str) -> RetryPolicy:
    """Return the default retry policy for a verb.

    GET uses the data-fetch preset, POST/PUT/PATCH the interactive
    preset, DELETE is never retried, and any other verb falls back to
    the data-fetch preset.

    Example:
        ```pycon
        >>> from resilnet.retry import NO_RETRY_POLICY, select_policy
        >>> select_policy("delete") is NO_RETRY_POLICY
        True
        >>> select_policy("PATCH").max_attempts
        2

        ```
    """
    return _POLICIES_BY_METHOD.get(method.upper(), DATA_FETCH_POLICY)
