"""Value unwrapping, unit conversion and display formatting.

Telemetry values may be wrapped in several layers of ``{value, unit}``
envelopes. Everything here is total: functions return a placeholder or
None instead of raising on shapes they do not understand.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from .constants import MAX_UNWRAP_DEPTH, UNIT_LABELS
from .models import FEATURE_TYPES, Feature

PLACEHOLDER = "--"


def _value_member(value: Any) -> tuple[bool, Any]:
    if isinstance(value, FEATURE_TYPES):
        return True, value.value
    if isinstance(value, Mapping) and "value" in value:
        return True, value["value"]
    return False, None


def unwrap(value: Any) -> Any:
    """Strip nested ``value`` envelopes down to the innermost value.

    Stops when the current value has no ``value`` member. Nesting beyond
    MAX_UNWRAP_DEPTH levels is left as is.

    Example:
        >>> unwrap({"value": {"value": 21.5, "unit": "celsius"}})
        21.5
    """
    for _ in range(MAX_UNWRAP_DEPTH):
        has_member, inner = _value_member(value)
        if not has_member:
            break
        value = inner
    return value


def is_number(value: Any) -> bool:
    """Return True for int/float values (bool excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def numeric_value(feature: Feature | Mapping[str, Any] | None) -> float | None:
    """Unwrap a feature and return its value when it is numeric."""
    if feature is None:
        return None
    value = unwrap(feature)
    return value if is_number(value) else None


def convert_unit(value: Any, unit: str | None) -> tuple[Any, str | None]:
    """Apply the known display conversions.

    ``revolutionsPerSecond`` becomes RPM (×60) and ``watt`` values with a
    magnitude of at least 1000 become kilowatt. Anything else is returned
    unchanged with its original unit.
    """
    if not is_number(value):
        return value, unit
    if unit == "revolutionsPerSecond":
        return value * 60, "revolutionsPerMinute"
    if unit == "watt" and abs(value) >= 1000:
        return value / 1000, "kilowatt"
    return value, unit


def format_unit(unit: str | None, value: Any = None) -> str:
    """Map a vendor unit name to its display label.

    Example:
        >>> format_unit("celsius")
        '°C'
        >>> format_unit("watt", 1500)
        'kW'
    """
    if not unit:
        return ""
    if unit == "watt" and is_number(value) and value >= 1000:
        return UNIT_LABELS["kilowatt"]
    return UNIT_LABELS.get(unit, unit)


def normalize(feature: Feature | None) -> tuple[Any, str]:
    """Return the display scalar and unit label of a feature."""
    if feature is None:
        return None, ""
    value, unit = convert_unit(unwrap(feature), feature.unit)
    return value, format_unit(unit)


def format_num(value: Any, decimals: int = 1) -> str:
    if value is None:
        return PLACEHOLDER
    if is_number(value):
        return f"{value:.{decimals}f}"
    return str(value)


def format_value(feature: Feature | None) -> str:
    """Render a resolved feature as ``"<value> <unit>"``.

    Returns the placeholder when the feature is absent or its value cannot
    be reduced to a scalar.
    """
    if feature is None:
        return PLACEHOLDER

    value = unwrap(feature)
    if value is None or isinstance(value, (Mapping, list, *FEATURE_TYPES)):
        return PLACEHOLDER

    value, label = normalize(feature)
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = format_num(value)
    return f"{text} {label}" if label else text


def is_valid_numeric_value(feature: Feature | None) -> bool:
    """Return True when the feature carries a plain number.

    The same feature name may carry a number on one device and a
    ``{status, value}`` compound on another; only the former is valid.
    """
    if feature is None:
        return False
    value = feature.value
    if value is None or isinstance(value, (Mapping, list)):
        return False
    return is_number(value)


def first_present(*suppliers: Any | Callable[[], Any]) -> Any:
    """Return the first supplier result that is not None.

    Callables are evaluated lazily in order; other arguments are taken as
    values.

    Example:
        >>> first_present(None, lambda: None, 3, 4)
        3
    """
    for supplier in suppliers:
        value = supplier() if callable(supplier) else supplier
        if value is not None:
            return value
    return None
