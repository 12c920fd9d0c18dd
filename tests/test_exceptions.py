"""Tests for the exception hierarchy."""

import pytest

from custom_components.vicare_dashboard.infrastructure.errors import (
    ViCareDashboardAPIError,
    ViCareDashboardAuthError,
    ViCareDashboardConnectionError,
    ViCareDashboardError,
    ViCareDashboardTimeoutError,
    ViCareDashboardValidationError,
)


@pytest.mark.parametrize(
    "exception_class",
    [
        ViCareDashboardAPIError,
        ViCareDashboardAuthError,
        ViCareDashboardConnectionError,
        ViCareDashboardTimeoutError,
        ViCareDashboardValidationError,
    ],
)
def test_inherits_from_base(exception_class):
    """Test that every error can be caught as ViCareDashboardError."""
    assert issubclass(exception_class, ViCareDashboardError)


def test_api_error_status():
    """Test that the HTTP status is kept."""
    error = ViCareDashboardAPIError("API returned status 503", status=503)

    assert error.status == 503
    assert str(error) == "API returned status 503"


def test_api_error_without_status():
    """Test the default status."""
    assert ViCareDashboardAPIError("bad json").status is None


def test_auth_error_is_api_error():
    """Test that auth errors carry a status and are API errors."""
    error = ViCareDashboardAuthError("rejected", status=401)

    assert isinstance(error, ViCareDashboardAPIError)
    assert error.status == 401


def test_raise_and_catch():
    """Test catching a specific error through the base class."""
    with pytest.raises(ViCareDashboardError) as exc_info:
        raise ViCareDashboardTimeoutError("Timeout after 15s")

    assert isinstance(exc_info.value, ViCareDashboardTimeoutError)
