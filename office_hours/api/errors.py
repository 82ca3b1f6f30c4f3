# office_hours/api/errors.py
"""
Exception handlers turning domain errors into JSON responses.

Status code mapping:
- ``NotFoundError``      -> 404
- ``InvalidInputError``  -> 400
- ``ConflictError``      -> 409
- ``UnauthorizedError``  -> 401
"""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from office_hours.core.errors import SchedulerError

logger = logging.getLogger(__name__)


async def _handle_scheduler_error(request: Request, exc: SchedulerError) -> JSONResponse:
    logger.info(
        "%s on %s %s: %s",
        type(exc).__name__,
        request.method,
        request.url.path,
        exc.detail,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def register_error_handlers(app: FastAPI) -> None:
    """
    Attach the domain exception handler to the FastAPI application.
    """
    app.add_exception_handler(SchedulerError, _handle_scheduler_error)  # type: ignore[arg-type]
