from __future__ import annotations

import httpx
import pytest

from resilnet import RequestCancelledError
from resilnet.interceptors import Interceptor, InterceptorChain


class RecordingInterceptor(Interceptor):
    def __init__(self, name: str, events: list[str], resolve: bool = False) -> None:
        self.name = name
        self.events = events
        self.resolve = resolve

    async def before_request(self, request: httpx.Request) -> None:
        self.events.append(f"{self.name}.before_request")

    async def on_response(self, request: httpx.Request, response: httpx.Response) -> None:
        self.events.append(f"{self.name}.on_response")

    async def on_error(self, request: httpx.Request, error: Exception) -> httpx.Response | None:
        self.events.append(f"{self.name}.on_error")
        if self.resolve:
            return httpx.Response(200, text=self.name)
        return None


@pytest.fixture
def request_() -> httpx.Request:
    return httpx.Request("GET", "https://api.example.com/users")


##################################
#     Tests for Interceptor      #
##################################


@pytest.mark.asyncio
async def test_interceptor_hooks_are_noops(request_: httpx.Request) -> None:
    interceptor = Interceptor()
    await interceptor.before_request(request_)
    await interceptor.on_response(request_, httpx.Response(200))
    assert await interceptor.on_error(request_, RuntimeError("boom")) is None
    assert "Authorization" not in request_.headers


#######################################
#     Tests for InterceptorChain      #
#######################################


def test_interceptor_chain_empty() -> None:
    chain = InterceptorChain()
    assert len(chain) == 0
    assert list(chain) == []


def test_interceptor_chain_add() -> None:
    first, second = Interceptor(), Interceptor()
    chain = InterceptorChain([first])
    chain.add(second)
    assert len(chain) == 2
    assert list(chain) == [first, second]


@pytest.mark.asyncio
async def test_interceptor_chain_invocation_order(request_: httpx.Request) -> None:
    events: list[str] = []
    chain = InterceptorChain(
        [RecordingInterceptor("a", events), RecordingInterceptor("b", events)]
    )
    await chain.before_request(request_)
    await chain.on_response(request_, httpx.Response(200))
    assert await chain.on_error(request_, RuntimeError("boom")) is None
    assert events == [
        "a.before_request",
        "b.before_request",
        "a.on_response",
        "b.on_response",
        "a.on_error",
        "b.on_error",
    ]


@pytest.mark.asyncio
async def test_interceptor_chain_on_error_first_resolution_wins(request_: httpx.Request) -> None:
    events: list[str] = []
    chain = InterceptorChain(
        [
            RecordingInterceptor("a", events),
            RecordingInterceptor("b", events, resolve=True),
            RecordingInterceptor("c", events, resolve=True),
        ]
    )
    response = await chain.on_error(request_, RuntimeError("boom"))
    assert response is not None
    assert response.text == "b"
    assert events == ["a.on_error", "b.on_error"]


@pytest.mark.asyncio
async def test_interceptor_chain_on_error_raise_stops_chain(request_: httpx.Request) -> None:
    class RaisingInterceptor(Interceptor):
        async def on_error(
            self, request: httpx.Request, error: Exception
        ) -> httpx.Response | None:
            msg = "replaced"
            raise ValueError(msg) from error

    events: list[str] = []
    chain = InterceptorChain([RaisingInterceptor(), RecordingInterceptor("b", events)])
    with pytest.raises(ValueError, match=r"replaced"):
        await chain.on_error(request_, RuntimeError("boom"))
    assert events == []


class ReplacingInterceptor(Interceptor):
    """Replace every error with a 403 status error."""

    async def on_error(self, request: httpx.Request, error: Exception) -> httpx.Response | None:
        response = httpx.Response(403, request=request)
        msg = "forbidden after retry"
        raise httpx.HTTPStatusError(msg, request=request, response=response)


class SeenErrorsInterceptor(Interceptor):
    def __init__(self, resolve: bool = False) -> None:
        self.errors: list[Exception] = []
        self.resolve = resolve

    async def on_error(self, request: httpx.Request, error: Exception) -> httpx.Response | None:
        self.errors.append(error)
        if self.resolve:
            return httpx.Response(200, text="resolved")
        return None


@pytest.mark.asyncio
async def test_interceptor_chain_on_error_replacement_passed_on(request_: httpx.Request) -> None:
    seen = SeenErrorsInterceptor()
    chain = InterceptorChain([ReplacingInterceptor(), seen])
    with pytest.raises(httpx.HTTPStatusError, match=r"forbidden after retry") as exc_info:
        await chain.on_error(request_, httpx.ConnectError("refused", request=request_))
    assert seen.errors == [exc_info.value]
    assert exc_info.value.response.status_code == 403


@pytest.mark.asyncio
async def test_interceptor_chain_on_error_replacement_resolved(request_: httpx.Request) -> None:
    seen = SeenErrorsInterceptor(resolve=True)
    chain = InterceptorChain([ReplacingInterceptor(), seen])
    response = await chain.on_error(request_, httpx.ConnectError("refused", request=request_))
    assert response is not None
    assert response.text == "resolved"
    assert isinstance(seen.errors[0], httpx.HTTPStatusError)


@pytest.mark.asyncio
async def test_interceptor_chain_on_error_cancellation_passed_on(request_: httpx.Request) -> None:
    class CancellingInterceptor(Interceptor):
        async def on_error(
            self, request: httpx.Request, error: Exception
        ) -> httpx.Response | None:
            msg = "aborted"
            raise RequestCancelledError(msg)

    seen = SeenErrorsInterceptor()
    chain = InterceptorChain([CancellingInterceptor(), seen])
    with pytest.raises(RequestCancelledError, match=r"aborted"):
        await chain.on_error(request_, RuntimeError("boom"))
    assert len(seen.errors) == 1
