"""
API Error Handling.

Every rejected request is answered with a JSON array of Error objects:
- 400 on body/path validation failures and malformed JSON
- 404 on unknown resources
- 405 on unsupported HTTP methods
- 406 / 415 on media type mismatches
- 500 on anything unexpected
"""

from typing import Any, Sequence

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from fastapi.routing import APIRoute
from loguru import logger
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from starlette.exceptions import HTTPException as StarletteHTTPException

JSON_MEDIA_TYPE = "application/json"


class Error(BaseModel):
    """Single problem found in a request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    field_name: str | None = None
    object_name: str | None = None
    rejected_value: str | None = None
    expected_value: str | None = None
    message: str


class MediaTypeError(Exception):
    """Request negotiated a media type the API does not speak."""

    status_code = 400
    object_name = ""

    def __init__(self, rejected_value: str | None = None) -> None:
        self.rejected_value = rejected_value
        super().__init__(self.describe())

    def describe(self) -> str:
        return f"Media type {self.rejected_value!r} is not supported"


class NotAcceptableError(MediaTypeError):
    """Accept header excludes JSON."""

    status_code = 406
    object_name = "Accept Header"

    def describe(self) -> str:
        return "Could not find acceptable representation"


class UnsupportedMediaTypeError(MediaTypeError):
    """Request body is not JSON."""

    status_code = 415
    object_name = "Content-Type Header"

    def describe(self) -> str:
        return f"Content type '{self.rejected_value or ''}' not supported"


def error_response(
    status_code: int,
    errors: list[Error],
    headers: dict[str, str] | None = None,
) -> ORJSONResponse:
    """Render errors as a JSON array response."""
    return ORJSONResponse(
        status_code=status_code,
        content=[error.model_dump(by_alias=True) for error in errors],
        headers=headers,
    )


def _validation_error(detail: dict[str, Any]) -> Error:
    """Convert one pydantic error entry to an Error."""
    if detail.get("type") == "json_invalid":
        return Error(object_name="Request Body", message=detail.get("msg", ""))

    loc = detail.get("loc", ())
    # Prefer the raw validator message over pydantic's "Value error, ..." text
    ctx_error = detail.get("ctx", {}).get("error")
    message = str(ctx_error) if isinstance(ctx_error, ValueError) else detail["msg"]

    raw = detail.get("input")
    rejected = None if raw is None or isinstance(raw, (dict, list)) else str(raw)

    return Error(
        field_name=".".join(str(part) for part in loc[1:]) or None,
        object_name=str(loc[0]) if loc else None,
        rejected_value=rejected,
        message=message,
    )


def _allowed_methods(request: Request) -> list[str]:
    """
    Collect methods of every API route whose path matches the request.

    Routes are looked up on the endpoint routers registered through
    register_exception_handlers(), each under the prefix it is mounted at.
    """
    path = request.scope["path"]
    methods: set[str] = set()
    for prefix, router in getattr(request.app.state, "api_routers", []):
        if not path.startswith(prefix):
            continue
        sub_path = path[len(prefix):]
        for route in router.routes:
            if isinstance(route, APIRoute) and route.path_regex.match(sub_path):
                methods |= route.methods
    return sorted(methods)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> ORJSONResponse:
    """400 with one Error per failing field."""
    errors = [_validation_error(detail) for detail in exc.errors()]
    logger.warning(
        f"Rejected {request.method} {request.url.path}: "
        f"{'; '.join(error.message for error in errors)}"
    )
    return error_response(400, errors)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> ORJSONResponse:
    """Wrap HTTP errors (404, 405, ...) in the Error array format."""
    if exc.status_code == 405:
        methods = _allowed_methods(request)
        logger.warning(f"Method {request.method} not allowed on {request.url.path}")
        error = Error(
            field_name="Http request method",
            object_name="",
            rejected_value=request.method,
            expected_value=" ".join(methods),
            message=f"Request method '{request.method}' is not supported",
        )
        return error_response(405, [error], headers={"Allow": ", ".join(methods)})

    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return error_response(
        exc.status_code,
        [Error(message=str(exc.detail))],
        headers=getattr(exc, "headers", None),
    )


async def media_type_exception_handler(
    request: Request,
    exc: MediaTypeError,
) -> ORJSONResponse:
    """406 / 415 describing the expected media type."""
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc}")
    error = Error(
        object_name=exc.object_name,
        rejected_value=exc.rejected_value,
        expected_value=JSON_MEDIA_TYPE,
        message=str(exc),
    )
    return error_response(exc.status_code, [error])


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """500 carrying the exception message."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(500, [Error(message=str(exc))])


def register_exception_handlers(
    app: FastAPI,
    api_routers: Sequence[tuple[str, APIRouter]] = (),
) -> None:
    """
    Install all API exception handlers on the application.

    Args:
        app: Application to install the handlers on
        api_routers: (mount prefix, router) pairs used to list the
            methods a path supports when answering 405
    """
    app.state.api_routers = list(api_routers)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(MediaTypeError, media_type_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
