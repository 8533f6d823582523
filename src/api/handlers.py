"""
Exception handlers converting harvester errors into JSON error responses.
"""

import traceback
from logging import Logger

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.schemas import ErrorResponse
from exceptions import PRHarvesterError


class ErrorHandler:
    def __init__(self, logger: Logger):
        self.logger = logger

    async def handle_harvester_error(self, request: Request, exc: PRHarvesterError):
        self.logger.warning(
            {
                "message": "Request failed",
                "method": request.method,
                "path": request.url.path,
                "error_type": type(exc).__name__,
                "error": exc.message,
            }
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=exc.message).model_dump(),
        )

    async def handle_validation_error(
        self, request: Request, exc: RequestValidationError
    ):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request body: {first.get('msg', 'malformed body')}"
        if field:
            message = f"Invalid request body: {field}: {first.get('msg')}"
        self.logger.warning(
            {
                "message": "Request validation failed",
                "method": request.method,
                "path": request.url.path,
                "error": message,
            }
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error=message).model_dump(),
        )

    async def handle_generic_exception(self, request: Request, exc: Exception):
        self.logger.error(
            {
                "message": "Unexpected error",
                "method": request.method,
                "path": request.url.path,
                "error": str(exc),
                "traceback": traceback.format_exc(),
            }
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=str(exc) or type(exc).__name__).model_dump(),
        )


def add_exception_handlers(app: FastAPI, logger: Logger) -> None:
    handler = ErrorHandler(logger)
    app.add_exception_handler(RequestValidationError, handler.handle_validation_error)
    app.add_exception_handler(PRHarvesterError, handler.handle_harvester_error)
    app.add_exception_handler(Exception, handler.handle_generic_exception)
