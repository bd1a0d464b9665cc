"""Error taxonomy and the JSON envelopes they are rendered as.

Every failure surfaces to the HTTP caller as a small envelope:
- InvalidRequest -> 400 {"error": ...}
- UpstreamFailure (and MalformedToolArguments) -> 500 {"error": ..., "details": ...}

Only a message is ever returned, never a stack trace.
"""
from typing import Any, Dict, Iterable, Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


logger = logging.getLogger(__name__)


class MoneyCoachError(Exception):
    """Base class for errors rendered as an error envelope."""

    status_code: int = 500

    def __init__(self, error: str, details: Any = None):
        super().__init__(error)
        self.error = error
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.error, "details": self.details}


class InvalidRequest(MoneyCoachError):
    """A required request field is missing or unusable."""

    status_code = 400

    @classmethod
    def missing(cls, fields: Iterable[str]) -> "InvalidRequest":
        return cls(f"Missing required field(s): {', '.join(fields)}")

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.error}


class UpstreamFailure(MoneyCoachError):
    """The LLM service or the transaction data source call failed."""

    def __init__(self, error: str, details: Any = None):
        super().__init__(error, details if details is not None else error)


class MalformedToolArguments(UpstreamFailure):
    """A tool call's argument payload could not be parsed or validated."""

    def __init__(self, details: Any):
        super().__init__("Failed to parse function call arguments", details)


def describe_http_error(response: Optional[Any], fallback: str) -> Any:
    """
    Pick the most useful error detail from an upstream HTTP response.

    Prefers the parsed JSON body, then the raw text, then the local message.
    """
    if response is None:
        return fallback
    try:
        body = response.json()
    except ValueError:
        body = None
    if body:
        return body
    return response.text or fallback


async def _moneycoach_error_handler(request: Request, exc: MoneyCoachError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Render body validation failures with the same 400 envelope as missing fields
    errors = exc.errors()
    if any(err.get("type") == "json_invalid" for err in errors):
        invalid = InvalidRequest("Request body is not valid JSON")
    else:
        fields = []
        for err in errors:
            loc = [str(part) for part in err.get("loc", ()) if part != "body"]
            fields.append(".".join(loc) or "body")
        invalid = InvalidRequest(f"Invalid request field(s): {', '.join(dict.fromkeys(fields))}")
    logger.warning(f"Rejected request to {request.url.path}: {invalid.error}")
    return JSONResponse(status_code=invalid.status_code, content=invalid.to_payload())


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to the FastAPI app."""
    app.add_exception_handler(MoneyCoachError, _moneycoach_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
