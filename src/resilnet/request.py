r"""Description of an outbound request.

A ``NetworkRequest`` names the verb, the endpoint and the payload of a
request without knowing where it is sent: the base URL is resolved by
the service before every attempt.
"""

from __future__ import annotations

__all__ = ["HTTP_METHODS", "FormData", "NetworkRequest"]

from dataclasses import dataclass, field
from typing import Any

# Verbs accepted by NetworkRequest
HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")


@dataclass
class FormData:
    """Multipart payload of a request.

    Attributes:
        fields: Plain form fields, forwarded to httpx as ``data``.
        files: File fields, forwarded to httpx as ``files``. Values
            follow the httpx conventions (bytes, file object or
            ``(filename, content, content_type)`` tuples).
    """

    fields: dict[str, Any] = field(default_factory=dict)
    files: dict[str, Any] = field(default_factory=dict)


@dataclass
class NetworkRequest:
    """Verb, endpoint and payload of a request.

    Query parameters and headers may be added until the request is
    handed to the service; they are not modified afterwards.

    Args:
        method: The HTTP verb. It is upper-cased and must be one of
            ``HTTP_METHODS``.
        endpoint: The endpoint path, relative to the base URL.
        endpoint_version: Optional version segment placed before the
            endpoint.
        body: Optional JSON body.
        form_data: Optional multipart payload. It takes priority over
            ``body`` when both are set.
        query_parameters: Initial query parameters.
        headers: Initial headers.

    Raises:
        ValueError: If the method is not supported.

    Example:
        ```pycon
        >>> from resilnet.request import NetworkRequest
        >>> request = NetworkRequest.get("/users", endpoint_version="v2")
        >>> request.add_query_parameter("page", "2")
        >>> request.method, request.path, request.query_parameters
        ('GET', '/v2/users', {'page': '2'})

        ```
    """

    method: str
    endpoint: str
    endpoint_version: str = ""
    body: dict[str, Any] | None = None
    form_data: FormData | None = None
    query_parameters: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        if self.method not in HTTP_METHODS:
            msg = f"method must be one of {HTTP_METHODS}, got {self.method!r}"
            raise ValueError(msg)

    @classmethod
    def get(cls, endpoint: str, **kwargs: Any) -> NetworkRequest:
        return cls("GET", endpoint, **kwargs)

    @classmethod
    def post(cls, endpoint: str, **kwargs: Any) -> NetworkRequest:
        return cls("POST", endpoint, **kwargs)

    @classmethod
    def put(cls, endpoint: str, **kwargs: Any) -> NetworkRequest:
        return cls("PUT", endpoint, **kwargs)

    @classmethod
    def patch(cls, endpoint: str, **kwargs: Any) -> NetworkRequest:
        return cls("PATCH", endpoint, **kwargs)

    @classmethod
    def delete(cls, endpoint: str, **kwargs: Any) -> NetworkRequest:
        return cls("DELETE", endpoint, **kwargs)

    @classmethod
    def options(cls, endpoint: str, **kwargs: Any) -> NetworkRequest:
        return cls("OPTIONS", endpoint, **kwargs)

    def add_query_parameter(self, key: str, value: str) -> None:
        self.query_parameters[key] = value

    def add_header(self, key: str, value: str) -> None:
        self.headers[key] = value

    @property
    def request_data(self) -> FormData | dict[str, Any] | None:
        """The payload to send, multipart first."""
        if self.form_data is not None:
            return self.form_data
        return self.body

    @property
    def path(self) -> str:
        """The version segment and the endpoint joined with single
        slashes."""
        parts = [part.strip("/") for part in (self.endpoint_version, self.endpoint)]
        return "/" + "/".join(part for part in parts if part)
