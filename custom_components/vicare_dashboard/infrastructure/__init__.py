"""Infrastructure layer for the ViCare dashboard integration.

This package contains the error hierarchy shared by the API client,
the coordinator and the pure calculation modules.
"""

from .errors import (
    ViCareDashboardAPIError,
    ViCareDashboardAuthError,
    ViCareDashboardConnectionError,
    ViCareDashboardError,
    ViCareDashboardTimeoutError,
    ViCareDashboardValidationError,
)

__all__ = [
    "ViCareDashboardError",
    "ViCareDashboardConnectionError",
    "ViCareDashboardAPIError",
    "ViCareDashboardAuthError",
    "ViCareDashboardTimeoutError",
    "ViCareDashboardValidationError",
]
