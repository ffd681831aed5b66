import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from urbannest.core.jwt_handler import resolve_session
from urbannest.core.exceptions import ResponseBody
from fastapi.responses import JSONResponse
from fastapi import status

logger = logging.getLogger(__name__)

exempt_paths = [
    "/auth/register",
    "/auth/login",
    "/auth/forgot-password",
    "/health",
    "/openapi.json",
    "/docs",
    "/docs/oauth2-redirect",
]

# The reset token travels in the path itself
exempt_prefixes = [
    "/auth/reset-password/",
]


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=ResponseBody(
            message=message,
            errors=[],
            data=None,
        ).model_dump(),
        headers={"WWW-Authenticate": "Bearer"},
    )


class TokenAuthMiddleware(BaseHTTPMiddleware):
    """Middleware to validate the bearer token on incoming requests.

    Public endpoints are listed in ``exempt_paths`` / ``exempt_prefixes``.
    Everything else needs ``Authorization: Bearer <token>``; the resolved
    ``SessionContext`` is stored on ``request.state.session``.
    """

    def __init__(self, app):
        super().__init__(app)
        self.exempt_paths = set(exempt_paths)
        self.exempt_prefixes = tuple(exempt_prefixes)

    def is_exempt(self, path: str) -> bool:
        return path in self.exempt_paths or path.startswith(self.exempt_prefixes)

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if request.method == "OPTIONS" or self.is_exempt(path):
            return await call_next(request)

        auth_header = request.headers.get("authorization")
        if not auth_header:
            return _unauthorized("Not authorized to access this route")

        parts = auth_header.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            return _unauthorized("Invalid authorization header")

        try:
            request.state.session = resolve_session(parts[1])
        except Exception as e:
            logger.info("Rejected bearer token on %s: %s", path, e)
            return _unauthorized("Not authorized to access this route")

        return await call_next(request)
