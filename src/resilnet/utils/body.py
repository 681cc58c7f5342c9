r"""Decoding of response bodies before they reach parsing functions."""

from __future__ import annotations

__all__ = ["decode_body"]

import json
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx

logger: logging.Logger = logging.getLogger(__name__)


def decode_body(response: httpx.Response | None) -> Any:
    """Decode the body of a response.

    JSON bodies (``application/json`` and ``+json`` content types) are
    decoded to Python objects. Other bodies are returned as text, and
    empty bodies as ``None``.

    Args:
        response: The response, or ``None`` if the attempt produced no
            response.

    Returns:
        The decoded body.

    Example:
        ```pycon
        >>> import httpx
        >>> from resilnet.utils.body import decode_body
        >>> decode_body(httpx.Response(200, json={"id": 1}))
        {'id': 1}
        >>> decode_body(httpx.Response(200, text="pong"))
        'pong'
        >>> decode_body(httpx.Response(204)) is None
        True

        ```
    """
    if response is None or not response.content:
        return None
    content_type = response.headers.get("Content-Type", "").split(";")[0].strip().lower()
    if content_type == "application/json" or content_type.endswith("+json"):
        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.debug(f"Could not decode JSON body with content type {content_type}")
    return response.text
