"""Helpers for testing code that performs nap requests."""

from typing import List, Mapping, Optional, Union

import httpx


class StubTransport(httpx.MockTransport):
    """StubTransport answers every request with the same canned response, or
    raises the configured error, and records the requests it receives.

    Usage:
        transport = StubTransport(200, b"It works!")
        response = Request("get", "http://example.com", transport=transport).perform()
        assert transport.request.url.path == "/"
    """

    def __init__(
        self,
        status_code: int = 200,
        body: Union[bytes, str] = b"",
        headers: Optional[Mapping[str, str]] = None,
        error: Optional[BaseException] = None,
    ):
        super().__init__(self._handle)
        self.status_code = status_code
        self.body = body
        self.headers = dict(headers or {})
        self.error = error
        self.requests: List[httpx.Request] = []

    @property
    def request(self) -> Optional[httpx.Request]:
        """The last request received, or None."""
        return self.requests[-1] if self.requests else None

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(
            self.status_code, content=self.body, headers=self.headers
        )
