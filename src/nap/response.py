import codecs
from dataclasses import dataclass, field
from typing import Any, List, Optional

import httpx
from requests.structures import CaseInsensitiveDict

from nap.status import Status, http_response_code_status


@dataclass
class Response:
    """A response to a nap.Request.

    Headers map each name to the list of values the server sent for it and
    are looked up case-insensitively.
    """

    status_code: int
    body: bytes = b""
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    encoding: str = "utf-8"

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "Response":
        headers: Any = CaseInsensitiveDict()
        for name, value in response.headers.multi_items():
            values: List[str] = headers.setdefault(name, [])
            values.append(value)
        return cls(
            status_code=response.status_code,
            body=response.content,
            headers=headers,
            encoding=known_encoding(response.charset_encoding),
        )

    @property
    def text(self) -> str:
        return self.body.decode(self.encoding, errors="replace")

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def status(self) -> Status:
        return http_response_code_status(self.status_code)


def known_encoding(charset: Optional[str]) -> str:
    """Returns charset when Python has a codec for it, otherwise utf-8."""
    if charset:
        try:
            return codecs.lookup(charset).name
        except LookupError:
            pass
    return "utf-8"
