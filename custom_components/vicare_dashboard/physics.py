"""Physical calculators fed by the key feature record.

All functions are pure. A calculator that lacks an input returns None
instead of raising; the only error raised is for a heating curve whose
configured floor lies above its ceiling.
"""

from __future__ import annotations

import logging
import math

from .constants import (
    C_WATER_J_KG_K,
    CURVE_COEFF_CUBIC,
    CURVE_COEFF_LINEAR,
    CURVE_COEFF_QUADRATIC,
    DEFAULT_ROOM_SETPOINT_C,
    LITERS_PER_HOUR_PER_M3_S,
    MIN_SPREIZUNG_FLOW_L_H,
    SPREIZUNG_LABEL_CIRCUIT,
    SPREIZUNG_LABEL_SECONDARY,
    WATER_DENSITY_BASE_KG_M3,
    WATER_DENSITY_SLOPE_KG_M3_K,
)
from .infrastructure.errors import ViCareDashboardValidationError
from .key_features import KeyFeatures
from .models import (
    CompressorRuntime,
    DeviceSettings,
    EnergySnapshot,
    Feature,
    ObjectFeature,
    SpreizungResult,
)
from .normalizer import first_present, is_number, numeric_value

_LOGGER = logging.getLogger(__name__)

# Property name sets used by different firmware for compressor load classes
LOAD_CLASS_PATTERNS: tuple[tuple[str, ...], ...] = (
    ("hoursLoadClassOne", "hoursLoadClassTwo", "hoursLoadClassThree", "hoursLoadClassFour", "hoursLoadClassFive"),
    ("loadClassOne", "loadClassTwo", "loadClassThree", "loadClassFour", "loadClassFive"),
    ("hoursLoadClass1", "hoursLoadClass2", "hoursLoadClass3", "hoursLoadClass4", "hoursLoadClass5"),
    ("class1", "class2", "class3", "class4", "class5"),
    ("one", "two", "three", "four", "five"),
)


def water_density(temp_c: float) -> float:
    """Return the density of heating water in kg/m³.

    Linear approximation ``1000 - 0.3 * T``, intended for the 0..90 °C range
    of heating water. It is not an exact equation of state.
    """
    return WATER_DENSITY_BASE_KG_M3 - WATER_DENSITY_SLOPE_KG_M3_K * temp_c


def resolve_spreizung(key_features: KeyFeatures, has_hot_water_buffer: bool = True) -> SpreizungResult:
    """Choose the supply/return pair for the ΔT display.

    With a hot water buffer the secondary circuit is measured, falling back
    to the primary circuit sensor by sensor. Without a buffer the shared
    circuit supply and the common return are used.
    """
    if has_hot_water_buffer:
        label = SPREIZUNG_LABEL_SECONDARY
        supply = first_present(
            lambda: key_features.number("secondarySupplyTemp"),
            lambda: key_features.number("primarySupplyTemp"),
        )
        ret = first_present(
            lambda: key_features.number("secondaryReturnTemp"),
            lambda: key_features.number("primaryReturnTemp"),
        )
    else:
        label = SPREIZUNG_LABEL_CIRCUIT
        supply = key_features.number("supplyTemp")
        ret = key_features.number("returnTemp")

    if supply is None or ret is None:
        return SpreizungResult(supply_temp=supply, return_temp=ret, label=label)

    return SpreizungResult(
        spreizung=supply - ret,
        supply_temp=supply,
        return_temp=ret,
        label=label,
        is_valid=True,
    )


def flow_permits_spreizung(volumetric_flow: float | None) -> bool:
    """Return True when the flow is high enough for ΔT to be meaningful."""
    return is_number(volumetric_flow) and volumetric_flow > MIN_SPREIZUNG_FLOW_L_H


def thermal_power(supply_temp: float, volumetric_flow_l_h: float, delta_t: float) -> float:
    """Return ``Q = rho(supply) * V * c * dT`` in watt.

    Example:
        >>> round(thermal_power(35.0, 1000.0, 5.0))
        5745
    """
    mass_flow = water_density(supply_temp) * (volumetric_flow_l_h / LITERS_PER_HOUR_PER_M3_S)
    return mass_flow * C_WATER_J_KG_K * delta_t


def thermal_power_w(key_features: KeyFeatures, spreizung: SpreizungResult) -> float | None:
    """Return the current thermal output in watt.

    Computed from flow and ΔT when both are available; otherwise the
    compressor's own heat production reading is used.
    """
    flow = key_features.number("volumetricFlow")
    if spreizung.is_valid and flow is not None:
        return thermal_power(spreizung.supply_temp, flow, spreizung.spreizung)

    return key_features.number("compressorHeatProductionCurrent")


def electrical_power_w(key_features: KeyFeatures, correction_factor: float = 1.0) -> float | None:
    """Return the corrected electrical input power in watt.

    Prefers the inverter output power. Devices without an inverter sensor
    report the compressor consumption in kW instead.
    """
    inverter = key_features.number("compressorPower")
    if inverter is not None:
        return inverter * correction_factor

    consumption_kw = key_features.number("compressorPowerConsumptionCurrent")
    if consumption_kw is not None:
        return consumption_kw * 1000 * correction_factor
    return None


def coefficient_of_performance(thermal_w: float | None, electrical_w: float | None) -> float | None:
    """Return thermal / electrical power, None when undefined."""
    if not is_number(thermal_w) or not is_number(electrical_w) or electrical_w <= 0:
        return None
    cop = thermal_w / electrical_w
    return cop if math.isfinite(cop) else None


def target_supply_temperature(
    outside_temp: float,
    slope: float,
    shift: float,
    room_setpoint: float = DEFAULT_ROOM_SETPOINT_C,
    min_supply: float | None = None,
    max_supply: float | None = None,
) -> float:
    """Evaluate the Viessmann heating curve.

    ``VT = RTSoll + shift - slope * DAR * (1.4347 + 0.021 * DAR + 247.9e-6 * DAR²)``
    with ``DAR = AT - RTSoll``. The result is capped at ``max_supply`` first
    and then floored at ``min_supply``.

    Args:
        outside_temp: Outside temperature AT in °C.
        slope: Curve slope (Neigung).
        shift: Curve shift (Niveau) in K.
        room_setpoint: Room setpoint RTSoll in °C.
        min_supply: Optional supply temperature floor.
        max_supply: Optional supply temperature ceiling.

    Returns:
        Target supply temperature in °C.

    Raises:
        ViCareDashboardValidationError: If ``min_supply > max_supply``.

    Example:
        >>> target_supply_temperature(20.0, 1.0, 0.0, room_setpoint=20.0)
        20.0
    """
    if min_supply is not None and max_supply is not None and min_supply > max_supply:
        raise ViCareDashboardValidationError(
            f"Minimum supply temperature {min_supply} exceeds maximum {max_supply}"
        )

    dar = outside_temp - room_setpoint
    target = room_setpoint + shift - slope * dar * (
        CURVE_COEFF_LINEAR + CURVE_COEFF_QUADRATIC * dar + CURVE_COEFF_CUBIC * dar * dar
    )

    if max_supply is not None and target > max_supply:
        target = max_supply
    if min_supply is not None and target < min_supply:
        target = min_supply
    return target


def compressor_rpm(feature: Feature | None) -> float | None:
    """Return the compressor speed in RPM (rev/s readings are scaled by 60)."""
    speed = numeric_value(feature)
    if speed is None:
        return None
    if feature.unit == "revolutionsPerSecond":
        return speed * 60
    return speed


def rpm_percentage(rpm: float | None, rpm_min: int, rpm_max: int) -> int | None:
    """Map an RPM onto the configured 0..100 % compressor load range."""
    if not is_number(rpm) or rpm <= 0 or rpm_max <= rpm_min:
        return None
    percentage = round((rpm - rpm_min) / (rpm_max - rpm_min) * 100)
    return max(0, min(100, percentage))


def energy_snapshot(key_features: KeyFeatures, settings: DeviceSettings) -> EnergySnapshot:
    """Bundle spreizung, thermal and electrical power and COP."""
    spreizung = resolve_spreizung(key_features, settings.buffer_present)
    flow = key_features.number("volumetricFlow")
    thermal = thermal_power_w(key_features, spreizung)
    electrical = electrical_power_w(key_features, settings.power_correction_factor)

    return EnergySnapshot(
        spreizung=spreizung,
        spreizung_visible=spreizung.is_valid and flow_permits_spreizung(flow),
        volumetric_flow=flow,
        thermal_power_w=thermal,
        electrical_power_w=electrical,
        cop=coefficient_of_performance(thermal, electrical),
    )


def _child_number(stats: ObjectFeature, name: str) -> float | None:
    child = stats.child(name)
    return numeric_value(child) if child is not None else None


def compressor_runtime(stats: Feature | None) -> CompressorRuntime | None:
    """Derive run hours, starts and load class hours from a statistics compound."""
    if not isinstance(stats, ObjectFeature):
        return None

    hours = _child_number(stats, "hours")
    starts = _child_number(stats, "starts")

    load_classes: dict[str, float] = {}
    for pattern in LOAD_CLASS_PATTERNS:
        if stats.child(pattern[0]) is None:
            continue
        for name in pattern:
            value = _child_number(stats, name)
            if value is not None:
                load_classes[name] = float(value)
        break

    if hours is None and starts is None and not load_classes:
        _LOGGER.debug("Compressor statistics carry neither hours, starts nor load classes")
        return None

    return CompressorRuntime(
        hours=float(hours or 0.0),
        starts=int(starts or 0),
        load_class_hours=load_classes,
    )
