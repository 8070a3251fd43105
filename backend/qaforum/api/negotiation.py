"""
Content negotiation dependencies.

The API only speaks JSON, both ways.
"""

from fastapi import Request

from qaforum.api.errors import NotAcceptableError, UnsupportedMediaTypeError

_ACCEPTABLE = {"*/*", "application/*", "application/json"}


def _media_type(value: str) -> str:
    """Strip parameters (charset, q, ...) from a media type."""
    return value.split(";", 1)[0].strip().lower()


def _is_json(media_type: str) -> bool:
    return media_type == "application/json" or media_type.endswith("+json")


async def accept_json(request: Request) -> None:
    """Reject requests whose Accept header rules out JSON."""
    accept = request.headers.get("accept")
    if not accept:
        return

    ranges = [_media_type(part) for part in accept.split(",") if part.strip()]
    if not any(r in _ACCEPTABLE or _is_json(r) for r in ranges):
        raise NotAcceptableError(accept)


async def require_json_body(request: Request) -> None:
    """Reject request bodies that are not declared as JSON."""
    content_type = request.headers.get("content-type")
    if content_type is None or not _is_json(_media_type(content_type)):
        raise UnsupportedMediaTypeError(content_type)
