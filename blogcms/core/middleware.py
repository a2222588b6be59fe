from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from blogcms.core.errors import unhandled_exception_handler

CONTENT_SECURITY_POLICY = "; ".join([
    "default-src 'self'",
    "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com",
    "font-src 'self' https://fonts.gstatic.com",
    "img-src 'self' data: https:",
    "script-src 'self'",
])


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses, error responses included"""

    def __init__(self, app, production: bool = False):
        super().__init__(app)
        self.production = production

    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception as exc:
            # Unhandled errors become the 500 envelope inside the middleware stack
            response = await unhandled_exception_handler(request, exc)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
        if self.production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response
