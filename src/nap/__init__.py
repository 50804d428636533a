"""A small REST client built on httpx."""

from typing import Any, Mapping, Optional, Union

import httpx

from nap.error import DisconnectedError, InvalidArgumentError, NapError
from nap.proxy import ProxySettings
from nap.request import Request, Verb
from nap.response import Response
from nap.status import Status
from nap.tls import TLSSettings

__all__ = [
    "DisconnectedError",
    "InvalidArgumentError",
    "NapError",
    "ProxySettings",
    "Request",
    "Response",
    "Status",
    "TLSSettings",
    "Verb",
    "delete",
    "get",
    "head",
    "post",
    "put",
]

URL = Union[httpx.URL, str]
Body = Union[bytes, str]


def get(
    url: URL,
    headers: Optional[Mapping[str, str]] = None,
    options: Optional[Mapping[str, Any]] = None,
) -> Response:
    """Perform a GET request."""
    return Request.perform_request(Verb.GET, url, b"", headers, options)


def head(
    url: URL,
    headers: Optional[Mapping[str, str]] = None,
    options: Optional[Mapping[str, Any]] = None,
) -> Response:
    """Perform a HEAD request."""
    return Request.perform_request(Verb.HEAD, url, b"", headers, options)


def delete(
    url: URL,
    headers: Optional[Mapping[str, str]] = None,
    options: Optional[Mapping[str, Any]] = None,
) -> Response:
    """Perform a DELETE request."""
    return Request.perform_request(Verb.DELETE, url, b"", headers, options)


def put(
    url: URL,
    body: Body,
    headers: Optional[Mapping[str, str]] = None,
    options: Optional[Mapping[str, Any]] = None,
) -> Response:
    """Perform a PUT request."""
    return Request.perform_request(Verb.PUT, url, body, headers, options)


def post(
    url: URL,
    body: Body,
    headers: Optional[Mapping[str, str]] = None,
    options: Optional[Mapping[str, Any]] = None,
) -> Response:
    """Perform a POST request."""
    return Request.perform_request(Verb.POST, url, body, headers, options)
