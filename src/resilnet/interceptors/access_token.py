r"""Interceptor authenticating requests with a refreshable access
token."""

from __future__ import annotations

__all__ = ["AccessTokenInterceptor", "AccessTokenOptions"]

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

from resilnet.core.classifier import is_success_status
from resilnet.interceptors.base import Interceptor
from resilnet.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_REFRESHED = "resilnet.access_token_refreshed"


@dataclass
class AccessTokenOptions:
    """How the AccessTokenInterceptor reads and refreshes tokens.

    Args:
        get_access_token: Returns the current access token, or ``None``
            when the user is signed out.
        refresh_access_token: Obtains a new access token and returns
            it, or ``None`` if the refresh failed.
        on_refresh_failed: Optional coroutine called when the token
            could not be refreshed (e.g. to sign the user out).
        header_name: The header carrying the token.
        token_prefix: The scheme placed before the token.
    """

    get_access_token: Callable[[], Awaitable[str | None]]
    refresh_access_token: Callable[[], Awaitable[str | None]]
    on_refresh_failed: Callable[[], Awaitable[None]] | None = None
    header_name: str = "Authorization"
    token_prefix: str = "Bearer"

    def format_token(self, token: str) -> str:
        return f"{self.token_prefix} {token}" if self.token_prefix else token


class AccessTokenInterceptor(Interceptor):
    """Attach the access token and refresh it once on 401.

    When a request fails with 401, the token is refreshed and the
    request is sent again, once, with the new token. The response of
    that second send resolves the error if it is successful; otherwise
    its failure replaces the original one and is passed on to the
    interceptors registered after this one.

    The second send goes straight through the client: the
    ``before_request`` and ``on_response`` hooks of the chain do not
    run for it. It is logged here instead, with the same fields as the
    LoggingInterceptor records.

    Args:
        client: The client used to send the request again.
        options: The token accessors.
        logger: Optional logger for the second send. Defaults to the
            module logger.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        options: AccessTokenOptions,
        logger: logging.Logger | None = None,
    ) -> None:
        self._client = client
        self.options = options
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    async def before_request(self, request: httpx.Request) -> None:
        if self.options.header_name in request.headers:
            return
        token = await self.options.get_access_token()
        if token:
            request.headers[self.options.header_name] = self.options.format_token(token)

    async def on_error(self, request: httpx.Request, error: Exception) -> httpx.Response | None:
        if not isinstance(error, httpx.HTTPStatusError) or error.response.status_code != 401:
            return None
        if request.extensions.get(_REFRESHED):
            return None

        token = await self.options.refresh_access_token()
        if not token:
            self.logger.debug(
                f"Could not refresh the access token for {request.method} {request.url}"
            )
            if self.options.on_refresh_failed is not None:
                await self.options.on_refresh_failed()
            return None

        headers = httpx.Headers(request.headers)
        headers[self.options.header_name] = self.options.format_token(token)
        retry_request = httpx.Request(
            request.method,
            request.url,
            headers=headers,
            content=await request.aread(),
            extensions={**request.extensions, _REFRESHED: True},
        )
        log_structured(
            self.logger,
            logging.DEBUG,
            f"--> {request.method} {request.url} (access token refreshed)",
            method=request.method,
            url=str(request.url),
        )
        response = await self._client.send(retry_request)
        log_structured(
            self.logger,
            logging.DEBUG,
            f"<-- {response.status_code} {request.method} {request.url} (access token refreshed)",
            method=request.method,
            url=str(request.url),
            status_code=response.status_code,
        )
        if not is_success_status(response.status_code):
            msg = f"{request.method} request to {request.url} failed with status {response.status_code}"
            raise httpx.HTTPStatusError(msg, request=retry_request, response=response)
        return response
