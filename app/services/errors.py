"""
Classified service errors and their HTTP rendering.

Services raise these at the point of detection. Anything else escaping a
service operation is flattened to InternalError by ``guarded``.
"""

import functools
from typing import Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = structlog.get_logger()


class POSError(Exception):
    """Base error with an HTTP status and a stable error code"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_SERVER_ERROR"
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(POSError):
    """Referenced entity does not exist"""

    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    default_detail = "Resource not found"


class ForbiddenError(POSError):
    """No activated membership, or insufficient role"""

    status_code = status.HTTP_403_FORBIDDEN
    error_code = "FORBIDDEN"
    default_detail = "You don't have access to this restaurant"


class UnprocessableError(POSError):
    """Well-typed request that breaks a business rule"""

    status_code = 422
    error_code = "UNPROCESSABLE_CONTENT"
    default_detail = "Request violates a business rule"


class InternalError(POSError):
    """Unanticipated failure; cause is logged, not returned"""


def guarded(message: str):
    """Wrap an async service operation taking a RequestContext first.

    Classified errors propagate unchanged, anything else is logged and
    re-raised as InternalError(message). The session is rolled back on any
    failure so no partial write survives.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(ctx, *args, **kwargs):
            try:
                return await func(ctx, *args, **kwargs)
            except POSError:
                await ctx.db.rollback()
                raise
            except Exception as exc:
                await ctx.db.rollback()
                logger.exception(message, operation=func.__name__, user_id=str(ctx.user_id), error=str(exc))
                raise InternalError(message) from exc
        return wrapper
    return decorator


async def handle_pos_error(request: Request, exc: POSError) -> JSONResponse:
    """Render a classified error"""
    if exc.status_code >= 500:
        logger.error("Request failed", path=request.url.path, error_code=exc.error_code)
    else:
        logger.info("Request rejected", path=request.url.path, error_code=exc.error_code, detail=exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "error_code": exc.error_code,
            "path": str(request.url.path),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(POSError, handle_pos_error)
