r"""Asynchronous service executing requests with classification and
retries.

``NetworkService`` is the request execution engine: it turns a
``NetworkRequest`` into one or more attempts over an
``httpx.AsyncClient``, runs the interceptor chain around each attempt,
classifies failures into ``ErrorKind`` members and returns a single
``Success`` or ``Failure`` envelope.
"""

from __future__ import annotations

__all__ = ["NetworkService"]

import inspect
import logging
from typing import TYPE_CHECKING, Any, TypeVar

import httpx

from resilnet.core.classifier import classify, is_success_status
from resilnet.core.config import ServiceConfig
from resilnet.error_kind import ErrorKind
from resilnet.exceptions import FeatureUnavailableError, RequestCancelledError
from resilnet.interceptors import (
    AccessTokenInterceptor,
    InterceptorChain,
    LoggingInterceptor,
)
from resilnet.request import FormData, NetworkRequest
from resilnet.response import Failure, Success
from resilnet.retry import AsyncRetryExecutor, select_policy, should_retry_by_default
from resilnet.utils.body import decode_body

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable
    from types import TracebackType
    from typing import Self

    from resilnet.interceptors import AccessTokenOptions, Interceptor
    from resilnet.response import NetworkResponse
    from resilnet.retry import RetryPolicy

    BaseUrlBuilder = Callable[[], Awaitable[str] | str]

T = TypeVar("T")


class NetworkService:
    r"""Execute requests and return success/failure envelopes.

    Retry behavior of ``request``:

    - Retries are enabled when ``retry_on_failure`` is ``True``, or when
      it is ``None`` and the verb is GET.
    - Without retries, exactly one attempt is made.
    - With retries, the policy is ``retry_policy`` if given, otherwise
      the default policy of the verb (see ``select_policy``).

    Args:
        base_url_builder: Callable (sync or async) returning the base
            URL. It is called before every attempt, so the base URL can
            change at runtime.
        config: Optional ServiceConfig. If ``None``, a default
            ServiceConfig is used.
        interceptors: Interceptors invoked around every attempt, after
            the built-in ones.
        access_token_options: If given, an AccessTokenInterceptor bound
            to the service client is registered.
        transport: Optional httpx transport used by the client.
        logger: Optional logger owned by the caller. Defaults to the
            module logger.

    Example:
        ```pycon
        >>> import asyncio
        >>> from resilnet import NetworkRequest, NetworkService, Success
        >>> async def main():  # doctest: +SKIP
        ...     async with NetworkService(lambda: "https://api.example.com") as service:
        ...         response = await service.request(NetworkRequest.get("/users/1"))
        ...     match response:
        ...         case Success(data=user):
        ...             print(user)
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        base_url_builder: BaseUrlBuilder,
        *,
        config: ServiceConfig | None = None,
        interceptors: Iterable[Interceptor] = (),
        access_token_options: AccessTokenOptions | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._base_url_builder = base_url_builder
        self._config = config if config is not None else ServiceConfig()
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._client = httpx.AsyncClient(
            timeout=self._config.to_timeout(),
            follow_redirects=True,
            transport=transport,
        )
        self._closed = False

        self._interceptors = InterceptorChain()
        if self._config.enable_logging:
            self._interceptors.add(LoggingInterceptor(self._logger))
        if access_token_options is not None:
            self._interceptors.add(
                AccessTokenInterceptor(self._client, access_token_options, logger=self._logger)
            )
        for interceptor in interceptors:
            self._interceptors.add(interceptor)

    @property
    def config(self) -> ServiceConfig:
        return self._config

    @property
    def interceptors(self) -> InterceptorChain:
        return self._interceptors

    def add_interceptor(self, interceptor: Interceptor) -> None:
        """Append an interceptor to the chain."""
        self._interceptors.add(interceptor)

    async def __aenter__(self) -> Self:
        self._ensure_open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        if not self._closed:
            await self._client.aclose()
            self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            msg = "NetworkService is closed"
            raise RuntimeError(msg)

    async def request(
        self,
        request: NetworkRequest,
        *,
        parse: Callable[[Any], T | None] | None = None,
        retry_on_failure: bool | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> NetworkResponse[T]:
        """Execute a request and return its envelope.

        Args:
            request: The request to execute.
            parse: Optional function turning the decoded body into the
                payload. If it returns ``None`` (or raises
                ``ValueError``, ``TypeError``, ``KeyError`` or
                ``AttributeError``), the envelope is a ``PARSING``
                failure. Without it, the payload is the decoded body.
            retry_on_failure: Enable or disable retries. ``None`` means
                retry GET requests only.
            retry_policy: Override the default policy of the verb.

        Returns:
            The envelope of the last attempt.

        Raises:
            FeatureUnavailableError: If an interceptor reported the
                feature as unavailable.
            RuntimeError: If the service is closed.
            Exception: Unexpected exceptions of the last attempt.
        """
        self._ensure_open()
        should_retry = (
            retry_on_failure
            if retry_on_failure is not None
            else should_retry_by_default(request.method)
        )
        if not should_retry:
            return await self.perform_single_request(request, parse=parse)

        policy = retry_policy if retry_policy is not None else select_policy(request.method)
        executor = AsyncRetryExecutor(policy, logger=self._logger)
        return await executor.execute(
            lambda: self.perform_single_request(request, parse=parse),
            description=f"{request.method} {request.path}",
        )

    async def perform_single_request(
        self,
        request: NetworkRequest,
        *,
        parse: Callable[[Any], T | None] | None = None,
    ) -> NetworkResponse[T]:
        """Perform exactly one attempt of a request.

        Args:
            request: The request to execute.
            parse: Optional parsing function (see ``request``).

        Returns:
            The envelope of the attempt.

        Raises:
            FeatureUnavailableError: If an interceptor reported the
                feature as unavailable.
            Exception: Unexpected exceptions, after they are logged.
        """
        try:
            base_url = await self._resolve_base_url()
            http_request = self._build_http_request(request, base_url)
            response = await self._send(http_request)
        except FeatureUnavailableError:
            raise
        except (httpx.HTTPError, RequestCancelledError) as exc:
            failed_response: httpx.Response | None = getattr(exc, "response", None)
            return Failure(
                status_code=failed_response.status_code if failed_response is not None else None,
                raw_data=decode_body(failed_response),
                error_kind=classify(exc),
            )
        except Exception:
            self._logger.exception(
                f"{request.method} request to {request.path} raised an unexpected error"
            )
            raise

        return self._parse_response(response, parse)

    async def get(self, endpoint: str, **kwargs: Any) -> NetworkResponse[Any]:
        return await self._request_endpoint("GET", endpoint, **kwargs)

    async def post(self, endpoint: str, **kwargs: Any) -> NetworkResponse[Any]:
        return await self._request_endpoint("POST", endpoint, **kwargs)

    async def put(self, endpoint: str, **kwargs: Any) -> NetworkResponse[Any]:
        return await self._request_endpoint("PUT", endpoint, **kwargs)

    async def patch(self, endpoint: str, **kwargs: Any) -> NetworkResponse[Any]:
        return await self._request_endpoint("PATCH", endpoint, **kwargs)

    async def delete(self, endpoint: str, **kwargs: Any) -> NetworkResponse[Any]:
        return await self._request_endpoint("DELETE", endpoint, **kwargs)

    async def _request_endpoint(
        self,
        method: str,
        endpoint: str,
        *,
        parse: Callable[[Any], Any] | None = None,
        retry_on_failure: bool | None = None,
        retry_policy: RetryPolicy | None = None,
        **kwargs: Any,
    ) -> NetworkResponse[Any]:
        return await self.request(
            NetworkRequest(method, endpoint, **kwargs),
            parse=parse,
            retry_on_failure=retry_on_failure,
            retry_policy=retry_policy,
        )

    async def _resolve_base_url(self) -> str:
        base_url = self._base_url_builder()
        if inspect.isawaitable(base_url):
            base_url = await base_url
        return str(base_url)

    def _build_http_request(self, request: NetworkRequest, base_url: str) -> httpx.Request:
        kwargs: dict[str, Any] = {}
        data = request.request_data
        if isinstance(data, FormData):
            kwargs["data"] = data.fields
            kwargs["files"] = data.files or None
        elif data is not None:
            kwargs["json"] = data
        return self._client.build_request(
            request.method,
            base_url.rstrip("/") + request.path,
            params=request.query_parameters,
            headers=dict(request.headers),
            **kwargs,
        )

    async def _send(self, http_request: httpx.Request) -> httpx.Response:
        try:
            await self._interceptors.before_request(http_request)
            response = await self._client.send(http_request)
            if not is_success_status(response.status_code):
                msg = (
                    f"{http_request.method} request to {http_request.url} failed "
                    f"with status {response.status_code}"
                )
                raise httpx.HTTPStatusError(msg, request=http_request, response=response)
        except (httpx.HTTPError, RequestCancelledError) as exc:
            resolved = await self._interceptors.on_error(http_request, exc)
            if resolved is None:
                raise
            response = resolved
        await self._interceptors.on_response(http_request, response)
        return response

    def _parse_response(
        self,
        response: httpx.Response,
        parse: Callable[[Any], T | None] | None,
    ) -> NetworkResponse[T]:
        raw_data = decode_body(response)
        if parse is None:
            return Success(status_code=response.status_code, raw_data=raw_data, data=raw_data)

        try:
            data = parse(raw_data)
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            self._logger.warning(f"Could not parse the response body: {exc!r}")
            data = None

        if data is None:
            return Failure(
                status_code=response.status_code,
                raw_data=raw_data,
                error_kind=ErrorKind.PARSING,
            )
        return Success(status_code=response.status_code, raw_data=raw_data, data=data)
