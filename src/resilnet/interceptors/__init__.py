r"""Interceptors invoked around every request attempt."""

from __future__ import annotations

__all__ = [
    "AccessTokenInterceptor",
    "AccessTokenOptions",
    "ErrorParserInterceptor",
    "HeaderInterceptor",
    "Interceptor",
    "InterceptorChain",
    "LoggingInterceptor",
]

from resilnet.interceptors.access_token import AccessTokenInterceptor, AccessTokenOptions
from resilnet.interceptors.base import Interceptor, InterceptorChain
from resilnet.interceptors.error_parser import ErrorParserInterceptor
from resilnet.interceptors.header import HeaderInterceptor
from resilnet.interceptors.logging_interceptor import LoggingInterceptor
