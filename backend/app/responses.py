"""
Postboard Backend: Response & Request Body Helpers
===================================================

What:  The error envelope builder and the raw-body decoding used by the
       mutating endpoints.
Why:   Every error, whether produced by a route or by a global exception
       handler, must have the same `{"error": "<message>"}` shape.
How:   error_response() is the only place that shape is built.
       decode_body() reads the body under the configured size limit and
       validates it into a Pydantic model, converting every failure into
       RequestDecodeError (400) or PayloadTooLargeError (413).
"""

import logging
from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.config import settings
from app.exceptions import PayloadTooLargeError, RequestDecodeError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def error_response(status_code: int, message: str) -> JSONResponse:
    """Builds the `{"error": message}` response with the given status."""
    return JSONResponse(status_code=status_code, content={"error": message})


async def read_body(request: Request, limit: int) -> bytes:
    """
    Read the raw request body, refusing anything larger than `limit` bytes.

    A declared Content-Length over the limit is rejected before reading.
    Chunked or mis-declared bodies are counted while streaming, so the
    limit holds either way.
    """
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError(limit=limit, context={"content_length": int(declared)})

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise PayloadTooLargeError(limit=limit)
    return bytes(body)


def format_validation_errors(exc) -> str:
    """
    Flattens Pydantic-style errors into one line, e.g.
    "id: Field required; slug: String should have at least 1 character".

    Works for Pydantic's ValidationError and FastAPI's RequestValidationError.
    """
    parts = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        parts.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(parts)


async def decode_body(request: Request, model: Type[ModelT]) -> ModelT:
    """
    Read and validate the request body as `model`.

    Raises:
        PayloadTooLargeError: body exceeds settings.max_body_size
        RequestDecodeError:   empty body, invalid JSON, or a payload that
                              fails the model's validation
    """
    raw = await read_body(request, settings.max_body_size)
    try:
        return model.model_validate_json(raw)
    except PydanticValidationError as e:
        detail = format_validation_errors(e)
        logger.info("Rejected %s body for %s: %s", model.__name__, request.url.path, detail)
        raise RequestDecodeError(
            message=f"Failed to decode post: {detail}",
            context={"model": model.__name__, "size": len(raw)},
        )
