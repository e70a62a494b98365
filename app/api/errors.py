"""Deterministic error payloads shared by API routers."""

from fastapi import status
from fastapi.responses import JSONResponse

from app.db import AssemblyStateError


def api_error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """Build one error envelope response.

    Args:
        status_code: HTTP status code.
        code: Stable machine-readable error code.
        message: Human-readable message.

    Returns:
        JSONResponse: Error envelope.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    payload = {
        "status": "error",
        "code": code,
        "message": message,
    }
    return JSONResponse(content=payload, status_code=status_code)


def api_error_from_exception(error: Exception) -> JSONResponse:
    """Map service-layer exceptions to error envelopes.

    `ValueError` maps to 400, `LookupError` to 404, `AssemblyStateError` to 409
    and any other `RuntimeError` (failed data access) to 503.

    Args:
        error: Exception raised by a service call.

    Returns:
        JSONResponse: Error envelope.

    Raises:
        TypeError: Raised when the exception type has no mapping.
    """

    if isinstance(error, ValueError):
        return api_error_response(status.HTTP_400_BAD_REQUEST, "INVALID_INPUT", str(error))
    if isinstance(error, LookupError):
        return api_error_response(status.HTTP_404_NOT_FOUND, "NOT_FOUND", str(error))
    if isinstance(error, AssemblyStateError):
        return api_error_response(status.HTTP_409_CONFLICT, "INVALID_STATE", str(error))
    if isinstance(error, RuntimeError):
        return api_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "DATA_UNAVAILABLE", str(error))
    raise TypeError(f"unmapped service error type: {type(error).__name__}")
