"""Request body size limit middleware.

Rejects bodies larger than max_bytes with 413. A declared Content-Length is
checked up front; bodies without one (chunked uploads) are read and counted
before the app sees them, then replayed. Raw ASGI.
"""

from typing import Callable

from newsecho.middleware._asgi import get_header, send_json_error


async def _reject(send: Callable, max_bytes: int, received: int) -> None:
    await send_json_error(
        send,
        413,
        "PAYLOAD_TOO_LARGE",
        f"Request body must be at most {max_bytes} bytes",
        {"max_bytes": max_bytes, "content_length": received},
    )


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared and declared.strip().isdigit():
            if int(declared) > max_bytes:
                await _reject(send, max_bytes, int(declared))
                return
            await app(scope, receive, send)
            return

        buffered: list[dict] = []
        received = 0
        while True:
            message = await receive()
            buffered.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > max_bytes:
                await _reject(send, max_bytes, received)
                return
            if not message.get("more_body", False):
                break

        async def replay_receive() -> dict:
            if buffered:
                return buffered.pop(0)
            return await receive()

        await app(scope, replay_receive, send)

    return asgi_app
