from fastapi.responses import JSONResponse

from src.weather_lookup.exceptions import (
    UnknownError,
    UpstreamError,
    WeatherLookupError,
)
from src.weather_lookup.services.logger_service import get_logger

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Not found"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


def as_lookup_error(exc: Exception) -> WeatherLookupError:
    """Return `exc` itself, or an `UnknownError` chained to it."""
    if isinstance(exc, WeatherLookupError):
        return exc
    error = UnknownError(f"{type(exc).__name__}: {exc}")
    error.__cause__ = exc
    return error


def handle_error(
    exc: Exception,
    failure_message: str,
    not_found_message: str = NOT_FOUND_MESSAGE,
) -> JSONResponse:
    """Map an exception raised inside a route to a client-safe response.

    Validation messages are written for end users and are returned as is.
    Everything else gets the route's fixed message; provider status and body
    go to the log only. Must be called from inside an `except` block.

    Args:
        exc (Exception): The caught exception.
        failure_message (str): Fixed message for 500 responses.
        not_found_message (str): Fixed message for 404 responses.

    Returns:
        JSONResponse: `{"success": false, "error": ...}` with the mapped
        status code.
    """
    error = as_lookup_error(exc)
    if error.status_code == 400:
        return error_response(400, error.message)
    if error.status_code == 404:
        return error_response(404, not_found_message)

    if isinstance(error, UpstreamError):
        logger.exception(
            f"❌ {failure_message}",
            extra={
                "context": {
                    "provider": error.provider,
                    "status": error.status,
                    "body": error.body[:1000],
                }
            },
        )
    else:
        logger.exception(
            f"🔥 {failure_message}: {error.message}",
            extra={"context": {"kind": type(error).__name__}},
        )
    return error_response(500, failure_message)
