"""Exception handlers mapping service errors to JSON responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from journalbot.exceptions import ConflictError, JournalBotError
from journalbot.web.state import state

logger = logging.getLogger(__name__)


async def journalbot_error_handler(request: Request, exc: JournalBotError) -> JSONResponse:
    logger.warning("%s %s -> %d: %s", request.method, request.url.path, exc.status_code, exc)
    body = {"error": str(exc)}
    if isinstance(exc, ConflictError) and exc.field:
        body["field"] = exc.field
    return JSONResponse(body, status_code=exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse({"error": "Validation failed", "details": details}, status_code=400)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Error occurred on %s %s", request.method, request.url.path)
    settings = getattr(state, "settings", None)
    if settings is not None and settings.is_production:
        return JSONResponse({"error": "Internal server error"}, status_code=500)
    return JSONResponse({"error": str(exc)}, status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JournalBotError, journalbot_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
