from typing import Optional


class WeatherLookupError(Exception):
    """Base class for errors raised by the weather lookup service.

    Every subclass carries the HTTP status the API layer maps it to, so the
    routes can translate errors without inspecting their type twice.

    Attributes:
        message (str): Human-readable description of the failure.
        status_code (int): HTTP status code associated with the error kind.
    """

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(WeatherLookupError):
    """Client input is missing or invalid. Safe to return to the user."""

    status_code = 400


class NotFoundError(WeatherLookupError):
    """A requested record or location does not exist."""

    status_code = 404


class ConfigError(WeatherLookupError):
    """A required credential or setting is missing (operator error)."""

    status_code = 500


class UpstreamError(WeatherLookupError):
    """A third-party provider returned non-2xx or could not be reached.

    The raw provider status and body are kept for logging only and must never
    be passed on to API clients.

    Attributes:
        provider (str): Short provider name, e.g. "geoapify".
        status (Optional[int]): HTTP status returned by the provider, or None
            for network-level failures.
        body (str): Raw response body or transport error text.
    """

    status_code = 500

    def __init__(
        self, provider: str, status: Optional[int] = None, body: str = ""
    ) -> None:
        self.provider = provider
        self.status = status
        self.body = body
        detail = f"status={status}" if status is not None else "network error"
        super().__init__(f"{provider} request failed ({detail}): {body[:200]}")


class UnknownError(WeatherLookupError):
    """Unexpected failure with no more specific category."""

    status_code = 500
