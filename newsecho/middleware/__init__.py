"""HTTP middleware: timeout, request size limit, request ID, security headers.

Applied in newsecho.main; first added is outermost.
"""

from newsecho.middleware.request_id import RequestIDMiddleware
from newsecho.middleware.request_size_limit import RequestSizeLimitMiddleware
from newsecho.middleware.security_headers import SecurityHeadersMiddleware
from newsecho.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
