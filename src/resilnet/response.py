r"""Success/failure envelope returned by every request.

A request always resolves to exactly one of two frozen dataclasses:
``Success`` holding the parsed payload, or ``Failure`` holding the
``ErrorKind``. Callers either branch with ``when`` (both handlers are
required) or use structural pattern matching:

```python
match response:
    case Success(data=user):
        show(user)
    case Failure(error_kind=ErrorKind.NOT_FOUND):
        show_empty()
    case Failure():
        show_error()
```
"""

from __future__ import annotations

__all__ = ["Failure", "NetworkResponse", "Success"]

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar, Union

if TYPE_CHECKING:
    from collections.abc import Callable

    from resilnet.error_kind import ErrorKind

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Envelope of a successful request.

    Attributes:
        status_code: The HTTP status code, if any.
        raw_data: The decoded body as received from the server.
        data: The parsed payload, or the raw body when no parsing
            function was supplied.

    Example:
        ```pycon
        >>> from resilnet.response import Success
        >>> response = Success(status_code=200, raw_data={"id": 1}, data={"id": 1})
        >>> response.when(success=lambda data: data["id"], failure=lambda kind: None)
        1

        ```
    """

    status_code: int | None
    raw_data: Any
    data: T | None

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def when(
        self,
        *,
        success: Callable[[T | None], R],
        failure: Callable[[ErrorKind], R],  # noqa: ARG002
    ) -> R:
        """Dispatch on the envelope variant.

        Args:
            success: Called with the payload of a ``Success``.
            failure: Called with the error kind of a ``Failure``.

        Returns:
            The value returned by the handler that was called.
        """
        return success(self.data)


@dataclass(frozen=True)
class Failure:
    """Envelope of a failed request.

    Attributes:
        status_code: The HTTP status code, if the server answered.
        raw_data: The decoded body of the failed response, if any.
        error_kind: Why the request failed.

    Example:
        ```pycon
        >>> from resilnet import ErrorKind
        >>> from resilnet.response import Failure
        >>> response = Failure(status_code=404, raw_data=None, error_kind=ErrorKind.NOT_FOUND)
        >>> response.when(success=lambda data: "ok", failure=lambda kind: kind.value)
        'not_found'

        ```
    """

    status_code: int | None
    raw_data: Any
    error_kind: ErrorKind

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def when(
        self,
        *,
        success: Callable[[Any], R],  # noqa: ARG002
        failure: Callable[[ErrorKind], R],
    ) -> R:
        """Dispatch on the envelope variant.

        Args:
            success: Called with the payload of a ``Success``.
            failure: Called with the error kind of a ``Failure``.

        Returns:
            The value returned by the handler that was called.
        """
        return failure(self.error_kind)


NetworkResponse = Union[Success[T], Failure]
