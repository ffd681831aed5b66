"""
Global exception handlers for FastAPI
"""
import logging

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from urbannest.core.exceptions import (
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    InternalServerErrorException,
    ResponseBody,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ResponseBody(
            message=message,
            errors=errors or [],
            data=None
        ).model_dump()
    )


def register_exception_handlers(app: FastAPI):
    """Register all exception handlers to the FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request, exc: RequestValidationError):
        """Malformed request bodies are client errors (400), not 422"""
        errors = [
            f"{'.'.join(str(part) for part in err.get('loc', ())[1:]) or 'body'}: {err.get('msg')}"
            for err in exc.errors()
        ]
        return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", errors)

    @app.exception_handler(BadRequestException)
    async def bad_request_exception_handler(request, exc: BadRequestException):
        """Handle BadRequestException (400)"""
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.errors)

    @app.exception_handler(UnauthorizedException)
    async def unauthorized_exception_handler(request, exc: UnauthorizedException):
        """Handle UnauthorizedException (401)"""
        return _error_response(status.HTTP_401_UNAUTHORIZED, exc.message, exc.errors)

    @app.exception_handler(ForbiddenException)
    async def forbidden_exception_handler(request, exc: ForbiddenException):
        """Handle ForbiddenException (403)"""
        return _error_response(status.HTTP_403_FORBIDDEN, exc.message, exc.errors)

    @app.exception_handler(NotFoundException)
    async def not_found_exception_handler(request, exc: NotFoundException):
        """Handle NotFoundException (404)"""
        return _error_response(status.HTTP_404_NOT_FOUND, exc.message, exc.errors)

    @app.exception_handler(InternalServerErrorException)
    async def internal_server_error_exception_handler(request, exc: InternalServerErrorException):
        """Handle InternalServerErrorException (500)"""
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message, exc.errors)

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request, exc: Exception):
        """Last resort: log it, never leak it"""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Sorry something went wrong")
