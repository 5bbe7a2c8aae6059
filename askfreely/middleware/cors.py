"""CORS headers middleware.

The public endpoints are called from the browser client on any origin, without
credentials. Adds the same permissive CORS headers to every response;
preflight OPTIONS requests are answered by the routes themselves (204).
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming and background tasks.
"""

from typing import Callable

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type, X-Fingerprint",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def CORSHeadersMiddleware(
    app: Callable, headers: dict[str, str] | None = None
) -> Callable:
    """Set CORS headers on all HTTP responses. Raw ASGI."""
    resolved = headers if headers is not None else CORS_HEADERS.copy()
    header_list = [(k.lower().encode(), v.encode()) for k, v in resolved.items()]
    names = {name for name, _ in header_list}

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = [
                    h for h in message.get("headers", []) if h[0].lower() not in names
                ]
                headers.extend(header_list)
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
