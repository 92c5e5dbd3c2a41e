"""
Domain Error Handler.

Renders ``ChanchisError`` subclasses raised by the services with the HTTP
status they carry.
"""

from fastapi import Request
from fastapi.responses import JSONResponse

from chanchis.core.errors import ChanchisError, TransferRelayError
from chanchis.core.logging_config import get_logger

logger = get_logger(__name__)


async def domain_exception_handler(request: Request, exc: ChanchisError) -> JSONResponse:
    """
    Convert a domain error into a JSON response.

    Client errors are logged at warning level, server side errors at error
    level. The permit transaction of a half-completed transfer is included in
    the log record.
    """
    extra = {
        "method": request.method,
        "path": request.url.path,
        "error_type": type(exc).__name__,
    }
    if isinstance(exc, TransferRelayError):
        extra["stage"] = exc.stage
        extra["permit_tx_hash"] = exc.permit_tx_hash

    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", extra=extra)
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}", extra=extra)

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.message,
            "error_type": type(exc).__name__,
        },
    )
