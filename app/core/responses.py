"""Uniform response envelopes and the route class that applies them.

Success: ``{statusCode, data, message, success}``.
Failure: ``{statusCode, message, success, errors, data, stack?}``.
"""
import logging
import traceback
from typing import Any, Callable, Coroutine

from bson import ObjectId
from fastapi import Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.errors import ApiError

log = logging.getLogger(__name__)

ENCODERS = {ObjectId: str}


def api_response(status_code: int, data: Any, message: str = "Success") -> JSONResponse:
    body = {
        "statusCode": status_code,
        "data": data,
        "message": message,
        "success": status_code < 400,
    }
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body, custom_encoder=ENCODERS))


def _validation_errors(exc: RequestValidationError) -> list[dict]:
    out = []
    for err in exc.errors():
        out.append({
            "field": ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "header")),
            "message": err.get("msg", ""),
        })
    return out


def error_response(exc: Exception) -> JSONResponse:
    if isinstance(exc, ApiError):
        status_code, message, errors = exc.status_code, exc.message, exc.errors
    elif isinstance(exc, RequestValidationError):
        errors = _validation_errors(exc)
        status_code = 400
        message = errors[0]["message"] if len(errors) == 1 else "Invalid request"
    elif isinstance(exc, StarletteHTTPException):
        status_code, message, errors = exc.status_code, str(exc.detail), []
    else:
        status_code, message, errors = 500, str(exc) or "Internal server error", []

    if status_code >= 500:
        log.error("request failed with %s: %s", status_code, message, exc_info=exc)

    body = {
        "statusCode": status_code,
        "message": message,
        "success": False,
        "errors": errors,
        "data": None,
    }
    if settings.ENV != "prod":
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    headers = getattr(exc, "headers", None)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body, custom_encoder=ENCODERS), headers=headers)


class EnvelopeRoute(APIRoute):
    """Route class that maps every failure raised by an endpoint (its
    dependencies and request parsing included) into the error envelope."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        original_route_handler = super().get_route_handler()

        async def envelope_route_handler(request: Request) -> Response:
            try:
                return await original_route_handler(request)
            except Exception as exc:
                return error_response(exc)

        return envelope_route_handler
