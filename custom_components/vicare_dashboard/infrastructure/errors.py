"""Custom exceptions for the ViCare dashboard integration."""


class ViCareDashboardError(Exception):
    """Base exception for the ViCare dashboard."""


class ViCareDashboardConnectionError(ViCareDashboardError):
    """Raised when the connection to the heating API fails."""


class ViCareDashboardAPIError(ViCareDashboardError):
    """Raised when the heating API returns an error status."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ViCareDashboardAuthError(ViCareDashboardAPIError):
    """Raised when the access token is rejected (401/403)."""


class ViCareDashboardTimeoutError(ViCareDashboardError):
    """Raised when a request times out."""


class ViCareDashboardValidationError(ViCareDashboardError):
    """Raised when input validation fails."""
