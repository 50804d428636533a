from __future__ import annotations

import enum
import logging
import os
import ssl
from typing import Any, Dict, Mapping, Optional, Union

import httpx

from nap.error import DisconnectedError, InvalidArgumentError
from nap.proxy import ProxySettings, proxy_env, settings_for_scheme
from nap.response import Response
from nap.status import Status, register_error_type, status_for_error
from nap.tls import TLSSettings

logger = logging.getLogger(__name__)


@enum.unique
class Verb(str, enum.Enum):
    """HTTP verbs supported by Request."""

    GET = "get"
    HEAD = "head"
    DELETE = "delete"
    PUT = "put"
    POST = "post"

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, verb: Union[Verb, str]) -> Verb:
        try:
            return cls(str(verb).lower())
        except ValueError:
            raise InvalidArgumentError(f"unsupported HTTP verb: {verb!r}") from None


# Errors that mean the connection ended before a full response was read.
DISCONNECT_ERRORS = (httpx.RemoteProtocolError, httpx.ReadError, EOFError)


class Request:
    """A single HTTP request, performed through an httpx transport.

    Usage:
        request = Request("get", "https://example.com/resources/1")
        response = request.perform()

    The options mapping configures authentication and TLS:

        username, password: HTTP basic authentication credentials.
        tls_verify: verify the server certificate (off by default).
        tls_ca_file: CA bundle used when tls_verify is set.
        tls_key, tls_certificate: client key and certificate objects.
        tls_key_and_certificate: PEM data holding both a key and a
            certificate.
        tls_key_and_certificate_file: path to such PEM data.

    Proxies are read from the HTTP_PROXY and HTTPS_PROXY environment variables
    (or their lowercase forms) each time the request is performed.
    """

    def __init__(
        self,
        verb: Union[Verb, str],
        url: Union[httpx.URL, str],
        body: Union[bytes, str] = b"",
        headers: Optional[Mapping[str, str]] = None,
        options: Optional[Mapping[str, Any]] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.verb = verb
        self.url = httpx.URL(url)
        self.body = body
        self.headers = dict(headers or {})
        self.options = dict(options or {})
        self.transport = transport
        self.request: Optional[httpx.Request] = None

    def __repr__(self):
        return f"Request({self.verb!r}, {str(self.url)!r})"

    @classmethod
    def perform_request(cls, *args, **kwargs) -> Response:
        """Construct a request and perform it."""
        return cls(*args, **kwargs).perform()

    @property
    def proxy_env(self) -> Dict[str, str]:
        """Proxy URLs from the process environment, keyed by scheme."""
        return proxy_env(os.environ)

    @property
    def proxy_settings(self) -> Optional[ProxySettings]:
        """Proxy settings for the scheme of this request's URL."""
        return settings_for_scheme(self.url.scheme, self.proxy_env)

    @property
    def http_proxy(self) -> Optional[httpx.Proxy]:
        settings = self.proxy_settings
        if settings is None:
            return None
        return httpx.Proxy(settings.url, auth=settings.auth)

    @property
    def tls_settings(self) -> TLSSettings:
        return TLSSettings.from_options(self.options)

    def ssl_context(self) -> ssl.SSLContext:
        return self.tls_settings.ssl_context()

    @property
    def http_request(self) -> httpx.BaseTransport:
        """The transport this request is sent through."""
        if self.transport is not None:
            return self.transport

        verify: Union[bool, ssl.SSLContext] = True
        if self.url.scheme == "https":
            verify = self.ssl_context()

        proxy = self.http_proxy
        if proxy is not None:
            logger.debug("using proxy %s for %s", proxy.url, self.url)
        return httpx.HTTPTransport(verify=verify, proxy=proxy)

    def perform(self) -> Response:
        """Send the request and return the response.

        Raises:
            InvalidArgumentError: if the verb is not supported, or if the TLS
                options are inconsistent.

            DisconnectedError: if the connection ended before the response
                was read.
        """
        verb = Verb.parse(self.verb)

        auth = None
        if self.options.get("username") is not None:
            auth = httpx.BasicAuth(
                self.options["username"], self.options.get("password") or ""
            )

        self.request = httpx.Request(
            verb.value.upper(),
            self.url,
            headers=self.headers,
            content=self.body or None,
        )

        logger.debug("performing %s %s", self.request.method, self.url)
        transport = self.http_request
        try:
            with httpx.Client(
                transport=transport, trust_env=False, follow_redirects=False
            ) as client:
                response = client.send(self.request, auth=auth)
        except DISCONNECT_ERRORS as e:
            logger.debug("%s %s failed: %s", self.request.method, self.url, e)
            raise DisconnectedError(str(e) or type(e).__name__) from e
        except Exception as e:
            logger.debug(
                "%s %s failed with status %s: %s",
                self.request.method,
                self.url,
                status_for_error(e),
                e,
            )
            raise

        logger.debug(
            "%s %s returned %d", self.request.method, self.url, response.status_code
        )
        return Response.from_httpx(response)


def httpx_error_status(error: BaseException) -> Status:
    # See https://www.python-httpx.org/exceptions/
    match error:
        case httpx.RemoteProtocolError() | httpx.ReadError():
            return Status.DISCONNECTED
        case httpx.InvalidURL() | httpx.UnsupportedProtocol():
            return Status.INVALID_ARGUMENT
        case httpx.TimeoutException():
            return Status.TIMEOUT
        case httpx.ConnectError():
            return Status.TCP_ERROR

    return Status.HTTP_ERROR


register_error_type(httpx.HTTPError, httpx_error_status)
register_error_type(httpx.InvalidURL, httpx_error_status)
