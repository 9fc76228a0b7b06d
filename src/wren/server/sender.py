"""Write a ``Response`` to the ASGI ``send`` channel."""

from wren._internal.asgi import Send
from wren.http.response import Response

# Statuses that never carry a body
_BODYLESS = frozenset({204, 304})


def _encode(name: str, value: str) -> tuple[bytes, bytes]:
    return name.lower().encode("latin-1"), value.encode("latin-1")


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send the start and body messages for *response*.

    A ``HEAD`` answer keeps the headers of the matching ``GET``,
    ``content-length`` included, and sends no body bytes.
    """
    status = response.status
    body = b"" if status < 200 or status in _BODYLESS else response.body_bytes

    headers = [_encode("content-type", response.content_type)]
    headers.extend(_encode(name, value) for name, value in response.headers)
    headers.extend(_encode("set-cookie", cookie.to_header_value()) for cookie in response.cookies)
    headers.append(_encode("content-length", str(len(body))))

    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": b"" if head else body})
