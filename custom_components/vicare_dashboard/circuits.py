"""Heating circuit detection and per-circuit heating curve data."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable

from .constants import (
    CIRCUIT_FEATURE_ORDER,
    CIRCUIT_SCAN_ORDER,
    DEFAULT_CIRCUITS,
    DEFAULT_ROOM_SETPOINT_C,
)
from .feature_locator import find, find_nested
from .models import ArrayFeature, Feature, HeatingCurveData, ObjectFeature, TelemetryDocument
from .normalizer import numeric_value
from .physics import target_supply_temperature

_LOGGER = logging.getLogger(__name__)

CIRCUIT_KEY_PATTERN = re.compile(r"^heating\.circuits\.(\d+)\.")


def _parse_circuit(value: object) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)) and math.isfinite(value) and value >= 0:
        return int(value)
    if isinstance(value, str):
        match = re.match(r"\s*(\d+)", value)
        if match:
            return int(match.group(1))
    return None


def _enabled_circuits(enabled: Feature) -> list[int] | None:
    value = enabled.value
    if isinstance(enabled, ArrayFeature) or isinstance(value, list):
        circuits = [c for c in (_parse_circuit(item) for item in value or []) if c is not None]
        return circuits or None
    circuit = _parse_circuit(value)
    return [circuit] if circuit is not None else None


def detect_circuits(document: TelemetryDocument) -> list[int]:
    """Return the heating circuit numbers present on the device.

    Uses the advertised ``heating.circuits`` enabled list when there is
    one, otherwise the circuit numbers found in feature key prefixes, and
    finally the single default circuit.

    Example:
        >>> detect_circuits(TelemetryDocument())
        [0]
    """
    feature = document.circuits.get("heating.circuits")
    if isinstance(feature, ObjectFeature):
        enabled = feature.child("enabled")
        if enabled is not None:
            circuits = _enabled_circuits(enabled)
            if circuits is not None:
                return circuits

    found: set[int] = set()
    for category in document.iter_categories(CIRCUIT_SCAN_ORDER):
        for key in category:
            match = CIRCUIT_KEY_PATTERN.match(key)
            if match:
                found.add(int(match.group(1)))

    if found:
        return sorted(found)

    _LOGGER.debug(f"No heating circuits advertised by device {document.device_id}, assuming circuit 0")
    return list(DEFAULT_CIRCUITS)


def room_setpoint_for_circuit(document: TelemetryDocument, circuit: int) -> float:
    """Return the room setpoint of the circuit's active operating program."""
    prefix = f"heating.circuits.{circuit}"
    program = find(document, f"{prefix}.operating.programs.active", order=CIRCUIT_FEATURE_ORDER)
    if program is None or not isinstance(program.value, str) or not program.value:
        return DEFAULT_ROOM_SETPOINT_C

    temperature = find_nested(
        document,
        f"{prefix}.operating.programs.{program.value}",
        "temperature",
        order=CIRCUIT_FEATURE_ORDER,
    )
    setpoint = numeric_value(temperature)
    if setpoint is None:
        _LOGGER.debug(f"No temperature for program {program.value} on circuit {circuit}, using default")
        return DEFAULT_ROOM_SETPOINT_C
    return float(setpoint)


def heating_curve_for_circuit(
    document: TelemetryDocument, circuit: int, outside_temp: float | None
) -> HeatingCurveData:
    """Collect the heating curve inputs of one circuit."""
    prefix = f"heating.circuits.{circuit}"

    def nested(name: str, prop: str) -> float | None:
        return numeric_value(find_nested(document, f"{prefix}.{name}", prop, order=CIRCUIT_FEATURE_ORDER))

    supply = find(document, f"{prefix}.sensors.temperature.supply", order=CIRCUIT_FEATURE_ORDER)

    return HeatingCurveData(
        circuit=circuit,
        slope=nested("heating.curve", "slope"),
        shift=nested("heating.curve", "shift"),
        current_outside=outside_temp,
        current_supply=numeric_value(supply),
        min_supply=nested("temperature.levels", "min"),
        max_supply=nested("temperature.levels", "max"),
        room_setpoint=room_setpoint_for_circuit(document, circuit),
    )


def heating_curves(
    document: TelemetryDocument, circuits: Iterable[int], outside_temp: float | None
) -> dict[int, HeatingCurveData]:
    """Return heating curve data keyed by circuit number."""
    return {circuit: heating_curve_for_circuit(document, circuit, outside_temp) for circuit in circuits}


def current_target_supply(curve: HeatingCurveData) -> float | None:
    """Evaluate the curve at the current outside temperature."""
    if not curve.is_complete or curve.current_outside is None:
        return None
    return target_supply_temperature(
        curve.current_outside,
        curve.slope,
        curve.shift,
        room_setpoint=curve.room_setpoint,
        min_supply=curve.min_supply,
        max_supply=curve.max_supply,
    )


def heating_curve_points(
    curve: HeatingCurveData, start: float = -30.0, stop: float = 20.0, step: float = 1.0
) -> list[tuple[float, float]]:
    """Sample the heating curve as ``(outside, target supply)`` pairs.

    Returns an empty list when slope or shift is unknown.
    """
    if step <= 0:
        raise ValueError("step must be positive")
    if not curve.is_complete:
        return []

    count = int(math.floor((stop - start) / step + 1e-9)) + 1
    points = []
    for index in range(max(count, 0)):
        outside = start + index * step
        points.append(
            (
                outside,
                target_supply_temperature(
                    outside,
                    curve.slope,
                    curve.shift,
                    room_setpoint=curve.room_setpoint,
                    min_supply=curve.min_supply,
                    max_supply=curve.max_supply,
                ),
            )
        )
    return points
