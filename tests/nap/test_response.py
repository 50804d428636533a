import httpx

from nap import Response, Status


def test_from_httpx():
    response = Response.from_httpx(
        httpx.Response(
            201,
            content=b"created",
            headers=[
                ("Content-Type", "text/plain"),
                ("Set-Cookie", "a=1"),
                ("Set-Cookie", "b=2"),
            ],
        )
    )

    assert response.status_code == 201
    assert response.body == b"created"
    assert response.headers["content-type"] == ["text/plain"]
    assert response.headers["set-cookie"] == ["a=1", "b=2"]
    assert response.ok
    assert response.status is Status.OK


def test_text_uses_charset():
    response = Response.from_httpx(
        httpx.Response(
            200,
            content="héllo".encode("latin-1"),
            headers={"Content-Type": "text/plain; charset=latin-1"},
        )
    )
    assert response.text == "héllo"


def test_unknown_charset_falls_back_to_utf8():
    response = Response.from_httpx(
        httpx.Response(
            200,
            content="héllo".encode(),
            headers={"Content-Type": "text/plain; charset=bogus"},
        )
    )
    assert response.encoding == "utf-8"
    assert response.text == "héllo"


def test_text_defaults_to_utf8():
    response = Response(200, "héllo".encode())
    assert response.text == "héllo"


def test_not_ok():
    response = Response(404)
    assert not response.ok
    assert response.status is Status.NOT_FOUND
    assert response.body == b""
    assert len(response.headers) == 0
