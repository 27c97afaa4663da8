import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class GiftApiError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(GiftApiError):
    status_code = 404


class InvalidArgumentError(GiftApiError):
    status_code = 400


def _field_name(loc) -> str:
    # Drop the leading "body"/"query"/"path" marker FastAPI puts in loc
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


async def gift_api_error_handler(request: Request, exc: GiftApiError) -> JSONResponse:
    logger.warning(
        "%s %s rejected | %s | %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning(
        "%s %s validation failed | %s",
        request.method,
        request.url.path,
        errors,
    )
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation failed", "errors": errors},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GiftApiError, gift_api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
