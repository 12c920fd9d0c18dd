"""Input validation for the ViCare dashboard integration.

Validates what the user types into the config and options flows before
any request reaches the vendor API:
- Installation ids and device ids (numeric)
- Gateway serials (16 digits on current gateways)
- Access tokens (non-empty bearer tokens without whitespace)
- Compressor RPM ranges

Each validator returns ``(is_valid, error_message)``.
"""

from __future__ import annotations

import re

GATEWAY_SERIAL_PATTERN = re.compile(r"^\d{16}$")
TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9._~+/=-]+$")


def validate_installation_id(installation_id: str | int) -> tuple[bool, str | None]:
    """Validate a ViCare installation id.

    Example:
        >>> validate_installation_id("123456")
        (True, None)
        >>> validate_installation_id("12a")
        (False, 'Installation id must be numeric')
    """
    text = str(installation_id).strip()
    if not text:
        return False, "Installation id cannot be empty"
    if not text.isdigit():
        return False, "Installation id must be numeric"
    return True, None


def validate_gateway_serial(serial: str) -> tuple[bool, str | None]:
    """Validate a gateway serial number.

    Example:
        >>> validate_gateway_serial("7633107012345678")
        (True, None)
    """
    serial = serial.strip()
    if not serial:
        return False, "Gateway serial cannot be empty"
    if not GATEWAY_SERIAL_PATTERN.match(serial):
        return False, "Gateway serial must be 16 digits"
    return True, None


def validate_device_id(device_id: str | int) -> tuple[bool, str | None]:
    text = str(device_id).strip()
    if not text:
        return False, "Device id cannot be empty"
    if not text.isdigit():
        return False, "Device id must be numeric"
    return True, None


def validate_access_token(token: str) -> tuple[bool, str | None]:
    """Validate the shape of a bearer access token.

    The token is not checked against the API here; the config flow does
    that with a test fetch.
    """
    token = token.strip()
    if not token:
        return False, "Access token cannot be empty"
    if token.lower().startswith("bearer "):
        return False, "Access token should not include the Bearer prefix"
    if not TOKEN_PATTERN.match(token):
        return False, "Access token contains invalid characters"
    return True, None


def validate_rpm_range(rpm_min: int, rpm_max: int) -> tuple[bool, str | None]:
    """Validate the compressor RPM range used for the load percentage.

    ``0/0`` means "not configured" and is accepted.

    Example:
        >>> validate_rpm_range(1200, 4800)
        (True, None)
        >>> validate_rpm_range(4800, 1200)
        (False, 'Maximum RPM must be greater than minimum RPM')
    """
    if rpm_min < 0 or rpm_max < 0:
        return False, "RPM values cannot be negative"
    if rpm_min == 0 and rpm_max == 0:
        return True, None
    if rpm_max <= rpm_min:
        return False, "Maximum RPM must be greater than minimum RPM"
    return True, None
