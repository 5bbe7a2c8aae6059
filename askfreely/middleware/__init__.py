"""HTTP middleware: timeout, request ID, security headers, CORS headers.

Applied in main app; order matters (last added = outermost).
Import and use from askfreely.main.
"""

from askfreely.middleware.cors import CORS_HEADERS, CORSHeadersMiddleware
from askfreely.middleware.request_id import RequestIDMiddleware
from askfreely.middleware.security_headers import SecurityHeadersMiddleware
from askfreely.middleware.timeout import TimeoutMiddleware

__all__ = [
    "CORS_HEADERS",
    "CORSHeadersMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
