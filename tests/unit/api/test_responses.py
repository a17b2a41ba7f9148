import json

import pytest
from pytest_mock import MockerFixture

from src.weather_lookup.api.responses import as_lookup_error, handle_error
from src.weather_lookup.exceptions import (
    NotFoundError,
    UnknownError,
    UpstreamError,
    ValidationError,
)


def test_as_lookup_error_wraps_unexpected_exception() -> None:
    # Arrange
    cause = RuntimeError("socket closed")

    # Act
    error = as_lookup_error(cause)

    # Assert
    assert isinstance(error, UnknownError)
    assert error.status_code == 500
    assert error.message == "RuntimeError: socket closed"
    assert error.__cause__ is cause


@pytest.mark.parametrize(  # type: ignore[misc]
    "error",
    [
        ValidationError("Invalid coordinates"),
        NotFoundError("Query 3 not found"),
        UpstreamError("geoapify", status=401, body="bad key"),
    ],
)
def test_as_lookup_error_keeps_known_errors(error: Exception) -> None:
    # Act / Assert
    assert as_lookup_error(error) is error


def test_handle_error_logs_unexpected_exception_as_unknown(
    mocker: MockerFixture,
) -> None:
    # Arrange
    logger = mocker.patch("src.weather_lookup.api.responses.logger")

    # Act
    try:
        raise KeyError("items")
    except Exception as e:
        response = handle_error(e, "Failed to search YouTube videos")

    # Assert
    assert response.status_code == 500
    assert json.loads(response.body) == {
        "success": False,
        "error": "Failed to search YouTube videos",
    }
    logger.exception.assert_called_once()
    context = logger.exception.call_args.kwargs["extra"]["context"]
    assert context == {"kind": "UnknownError"}


def test_handle_error_returns_validation_message_as_is() -> None:
    # Act
    try:
        raise ValidationError("Location parameter is required")
    except Exception as e:
        response = handle_error(e, "Failed to search YouTube videos")

    # Assert
    assert response.status_code == 400
    assert json.loads(response.body)["error"] == (
        "Location parameter is required"
    )


def test_handle_error_hides_not_found_detail() -> None:
    # Act
    try:
        raise NotFoundError("Query 3 not found")
    except Exception as e:
        response = handle_error(e, "Failed to fetch query", "Query not found")

    # Assert
    assert response.status_code == 404
    assert json.loads(response.body)["error"] == "Query not found"
