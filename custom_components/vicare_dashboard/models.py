"""Data models for the ViCare dashboard integration.

This module provides Pydantic models for the telemetry document delivered
by the Viessmann feature API, the tagged feature union the rest of the
integration works on, and the frozen result models produced by the
calculators.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, ValidationError, model_validator

from .constants import (
    CATEGORY_SEARCH_ORDER,
    CONF_COMPRESSOR_RPM_MAX,
    CONF_COMPRESSOR_RPM_MIN,
    CONF_HAS_HOT_WATER_BUFFER,
    CONF_POWER_CORRECTION_FACTOR,
    CONF_USE_AIR_INTAKE_LABEL,
    ENVELOPE_METADATA_PROPERTIES,
    FeatureCategory,
)


# Base model for all ViCare dashboard data models
class ViCareModel(BaseModel):
    """Base model for all ViCare dashboard data structures.

    Provides common configuration for all Pydantic models used in the
    integration.
    """

    model_config = {"validate_assignment": True, "populate_by_name": True}


class FeatureBase(ViCareModel):
    """Common shape of every feature variant.

    Attributes:
        unit: Vendor unit name (e.g. ``celsius``), None when not reported.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    unit: str | None = Field(default=None, description="Vendor unit name")

    @property
    def is_null(self) -> bool:
        """Return True when the feature is present but carries no value."""
        return self.value is None  # type: ignore[attr-defined]


class NumberFeature(FeatureBase):
    """A numeric measurement or setting."""

    type: Literal["number"] = "number"
    value: int | float | None = None


class StringFeature(FeatureBase):
    """A textual state such as an operating mode."""

    type: Literal["string"] = "string"
    value: str | None = None


class BooleanFeature(FeatureBase):
    """An on/off state such as ``compressor active``."""

    type: Literal["boolean"] = "boolean"
    value: bool | None = None


class ArrayFeature(FeatureBase):
    """A list of scalar items, e.g. a day/week history or an enabled list."""

    type: Literal["array"] = "array"
    value: list[Any] | None = None


class ObjectFeature(FeatureBase):
    """A compound feature whose children are features themselves.

    Example:
        >>> curve = parse_feature({
        ...     "type": "object",
        ...     "value": {"slope": {"type": "number", "value": 1.2}},
        ... })
        >>> curve.child("slope").value
        1.2
    """

    type: Literal["object"] = "object"
    value: dict[str, Feature] = Field(default_factory=dict)

    def child(self, name: str) -> Feature | None:
        """Return the named child feature, None when absent."""
        return self.value.get(name)


Feature = Annotated[
    Union[NumberFeature, StringFeature, BooleanFeature, ArrayFeature, ObjectFeature],
    Field(discriminator="type"),
]

ObjectFeature.model_rebuild()

FEATURE_TYPES = (NumberFeature, StringFeature, BooleanFeature, ArrayFeature, ObjectFeature)


def _clean_unit(unit: Any) -> str | None:
    if isinstance(unit, str) and unit:
        return unit
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_children(container: Mapping[str, Any]) -> dict[str, Feature]:
    return {str(name): parse_feature(child) for name, child in container.items()}


def _infer_feature(value: Any, unit: str | None) -> Feature:
    """Build a feature from the Python type of a bare value."""
    if isinstance(value, bool):
        return BooleanFeature(value=value, unit=unit)
    if _is_number(value):
        return NumberFeature(value=value, unit=unit)
    if isinstance(value, str):
        return StringFeature(value=value, unit=unit)
    if isinstance(value, list):
        return ArrayFeature(value=value, unit=unit)
    if isinstance(value, Mapping):
        return ObjectFeature(value=_parse_children(value), unit=unit)
    if value is None:
        return NumberFeature(value=None, unit=unit)
    return StringFeature(value=str(value), unit=unit)


def parse_feature(raw: Any) -> Feature:
    """Parse one JSON feature into the tagged feature union.

    Dispatches on ``type``. Objects accept the legacy ``properties``
    container next to ``value``. When the tag is missing, empty or does not
    fit the value, the variant is inferred from the Python value instead.
    Bare scalars (children written without an envelope) become features
    without a unit.

    Args:
        raw: A ``{type, value, unit}`` mapping, a bare scalar or an already
            parsed feature.

    Returns:
        The parsed feature. Never raises on odd input.
    """
    if isinstance(raw, FEATURE_TYPES):
        return raw

    if not isinstance(raw, Mapping):
        return _infer_feature(raw, None)

    if not ({"type", "value", "properties"} & raw.keys()):
        # A plain mapping of named children, e.g. {"slope": {...}}
        return ObjectFeature(value=_parse_children(raw))

    tag = raw.get("type") or ""
    unit = _clean_unit(raw.get("unit"))
    value = raw.get("value")

    if tag == "object" or (value is None and isinstance(raw.get("properties"), Mapping)):
        container = value if isinstance(value, Mapping) and value else raw.get("properties")
        if isinstance(container, Mapping):
            return ObjectFeature(value=_parse_children(container), unit=unit)
        return _infer_feature(value, unit)

    try:
        if tag == "number":
            if value is None or _is_number(value):
                return NumberFeature(value=value, unit=unit)
            if isinstance(value, str):
                return NumberFeature(value=float(value), unit=unit)
        elif tag == "string":
            if value is None or isinstance(value, str):
                return StringFeature(value=value, unit=unit)
        elif tag == "boolean":
            if value is None or isinstance(value, bool):
                return BooleanFeature(value=value, unit=unit)
        elif tag == "array":
            if value is None or isinstance(value, list):
                return ArrayFeature(value=value, unit=unit)
    except (ValueError, ValidationError):
        pass

    return _infer_feature(value, unit)


def envelope_to_feature(properties: Mapping[str, Any] | None) -> Feature:
    """Reduce a vendor ``properties`` block to a single feature.

    A ``value`` envelope becomes the main value. Additional envelope
    properties other than status/active/enabled promote the feature to an
    object that keeps the main value under ``value``. Without a ``value``
    envelope the properties themselves become the object's children.

    Example:
        >>> envelope_to_feature({
        ...     "value": {"type": "number", "value": 5, "unit": "kelvin"},
        ...     "switchOnValue": {"type": "number", "value": 2.5, "unit": "kelvin"},
        ... }).type
        'object'
    """
    properties = properties or {}
    main = properties.get("value")

    if isinstance(main, Mapping):
        main_feature = parse_feature(
            {"type": main.get("type") or "", "value": main.get("value"), "unit": main.get("unit")}
        )
        extras = {
            name: parse_feature(prop)
            for name, prop in properties.items()
            if name not in ENVELOPE_METADATA_PROPERTIES and isinstance(prop, Mapping)
        }
        if not extras:
            return main_feature
        return ObjectFeature(value={**extras, "value": main_feature}, unit=main_feature.unit)

    children = {name: parse_feature(prop) for name, prop in properties.items() if isinstance(prop, Mapping)}
    if children:
        return ObjectFeature(value=children)
    return NumberFeature(value=None)


def categorize_feature_name(name: str) -> FeatureCategory:
    """Assign a dotted feature name to its document category.

    Example:
        >>> categorize_feature_name("heating.dhw.sensors.temperature.hotWaterStorage")
        <FeatureCategory.TEMPERATURES: 'temperatures'>
    """
    if "temperature" in name:
        return FeatureCategory.TEMPERATURES
    if "dhw" in name or "hotwater" in name:
        return FeatureCategory.DHW
    if any(word in name for word in ("operating", "mode", "program", "session")):
        return FeatureCategory.OPERATING_MODES
    if "circuit" in name:
        return FeatureCategory.CIRCUITS
    return FeatureCategory.OTHER


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO 8601 timestamp, returning None when it cannot be read."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


class RawFeature(ViCareModel):
    """One entry of the flat vendor feature list.

    Used for array-valued history features and enablement checks.

    Attributes:
        feature: Dotted feature name.
        properties: Raw property envelopes as delivered by the API.
        is_enabled: False when the API marks the capability as disabled.
        timestamp: Last change timestamp reported by the API.
    """

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    feature: str = Field(..., min_length=1, description="Dotted feature name")
    properties: dict[str, Any] = Field(default_factory=dict)
    is_enabled: bool = Field(default=True, alias="isEnabled")
    timestamp: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_nulls(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            data = dict(data)
            if data.get("properties") is None:
                data["properties"] = {}
            if data.get("isEnabled") is None and data.get("is_enabled") is None:
                data.pop("isEnabled", None)
                data.pop("is_enabled", None)
        return data

    def property_value(self, name: str) -> Any:
        """Return ``properties[name].value``, None when missing."""
        prop = self.properties.get(name)
        if isinstance(prop, Mapping):
            return prop.get("value")
        return None


class TelemetryDocument(ViCareModel):
    """Categorized telemetry of one device, immutable per fetch.

    An absent category is an empty mapping. The same key may legitimately
    appear in more than one category.

    Attributes:
        installation_id: Installation the device belongs to.
        gateway_id: Gateway serial.
        device_id: Device id on the gateway.
        temperatures: Features whose name contains ``temperature``.
        dhw: Domestic hot water features.
        circuits: Heating circuit features.
        operating_modes: Modes, programs and sessions.
        other: Everything else.
        raw_features: Flat vendor feature list.
        last_update: When the document was fetched.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    installation_id: str = Field(default="", alias="installationId")
    gateway_id: str = Field(default="", alias="gatewayId")
    device_id: str = Field(default="", alias="deviceId")
    temperatures: dict[str, Feature] = Field(default_factory=dict)
    dhw: dict[str, Feature] = Field(default_factory=dict)
    circuits: dict[str, Feature] = Field(default_factory=dict)
    operating_modes: dict[str, Feature] = Field(default_factory=dict, alias="operatingModes")
    other: dict[str, Feature] = Field(default_factory=dict)
    raw_features: list[RawFeature] = Field(default_factory=list, alias="rawFeatures")
    last_update: datetime | None = Field(default=None, alias="lastUpdate")

    def category(self, name: FeatureCategory | str) -> dict[str, Feature]:
        """Return the mapping of one category."""
        return {
            FeatureCategory.TEMPERATURES: self.temperatures,
            FeatureCategory.DHW: self.dhw,
            FeatureCategory.CIRCUITS: self.circuits,
            FeatureCategory.OPERATING_MODES: self.operating_modes,
            FeatureCategory.OTHER: self.other,
        }[FeatureCategory(name)]

    def iter_categories(
        self, order: tuple[FeatureCategory, ...] = CATEGORY_SEARCH_ORDER
    ) -> Iterator[dict[str, Feature]]:
        """Yield the category mappings in the given order."""
        for name in order:
            yield self.category(name)

    @property
    def feature_count(self) -> int:
        return sum(len(category) for category in self.iter_categories())

    @classmethod
    def from_api_dict(cls, data: Mapping[str, Any] | None) -> TelemetryDocument:
        """Create a document from the categorized JSON representation.

        Categories that are missing or not mappings are treated as empty.
        Raw features without a name are skipped.
        """
        data = data or {}

        def _category(key: str) -> dict[str, Feature]:
            entries = data.get(key)
            if not isinstance(entries, Mapping):
                return {}
            return {str(name): parse_feature(raw) for name, raw in entries.items()}

        raw_features = [
            RawFeature.model_validate(entry)
            for entry in data.get("rawFeatures") or []
            if isinstance(entry, Mapping) and entry.get("feature")
        ]

        return cls(
            installation_id=str(data.get("installationId") or ""),
            gateway_id=str(data.get("gatewayId") or ""),
            device_id=str(data.get("deviceId") or ""),
            temperatures=_category("temperatures"),
            dhw=_category("dhw"),
            circuits=_category("circuits"),
            operating_modes=_category("operatingModes"),
            other=_category("other"),
            raw_features=raw_features,
            last_update=parse_timestamp(data.get("lastUpdate")),
        )

    @classmethod
    def from_feature_list(
        cls,
        features: list[Mapping[str, Any]],
        *,
        installation_id: str,
        gateway_id: str,
        device_id: str,
        fetched_at: datetime | None = None,
    ) -> TelemetryDocument:
        """Build the categorized document from the vendor's flat ``data`` list.

        Each feature's properties are reduced with envelope_to_feature and
        the feature is filed under the category its name selects.
        """
        categories: dict[FeatureCategory, dict[str, Feature]] = {name: {} for name in FeatureCategory}
        raw_features: list[RawFeature] = []

        for entry in features:
            if not isinstance(entry, Mapping) or not entry.get("feature"):
                continue
            raw = RawFeature.model_validate(entry)
            raw_features.append(raw)
            categories[categorize_feature_name(raw.feature)][raw.feature] = envelope_to_feature(raw.properties)

        return cls(
            installation_id=installation_id,
            gateway_id=gateway_id,
            device_id=device_id,
            temperatures=categories[FeatureCategory.TEMPERATURES],
            dhw=categories[FeatureCategory.DHW],
            circuits=categories[FeatureCategory.CIRCUITS],
            operating_modes=categories[FeatureCategory.OPERATING_MODES],
            other=categories[FeatureCategory.OTHER],
            raw_features=raw_features,
            last_update=fetched_at,
        )


class DeviceInfo(ViCareModel):
    """Identity of the heating device a config entry points at."""

    model_config = {"frozen": True}

    installation_id: str = Field(..., min_length=1)
    gateway_serial: str = Field(..., min_length=1)
    device_id: str = Field(default="0", min_length=1)
    device_type: str = ""
    model_id: str = ""
    account_id: str = ""
    name: str = ""

    @property
    def cache_key(self) -> tuple[str, str, str]:
        return (self.installation_id, self.gateway_serial, self.device_id)

    @property
    def display_name(self) -> str:
        return self.name or self.model_id or f"ViCare {self.device_id}"


def _tri_state(value: Any) -> bool | None:
    """Map an option value to True/False/None (None meaning automatic)."""
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("yes", "true", "on", "1"):
        return True
    if text in ("no", "false", "off", "0"):
        return False
    return None


class DeviceSettings(ViCareModel):
    """Per-device overrides feeding the calculators.

    Attributes:
        compressor_rpm_min: RPM mapped to 0 % compressor load.
        compressor_rpm_max: RPM mapped to 100 % compressor load.
        has_hot_water_buffer: Buffer present; None means the default (True).
        use_air_intake_temperature_label: Label override for the primary
            supply sensor; None means auto-detect from compressor sensors.
        power_correction_factor: Multiplier for measured electrical power.

    Example:
        >>> DeviceSettings.from_options({"has_hot_water_buffer": "no"}).buffer_present
        False
    """

    model_config = {"frozen": True}

    compressor_rpm_min: int = Field(default=0, ge=0)
    compressor_rpm_max: int = Field(default=0, ge=0)
    has_hot_water_buffer: bool | None = None
    use_air_intake_temperature_label: bool | None = None
    power_correction_factor: float = Field(default=1.0, gt=0, le=10)

    @property
    def buffer_present(self) -> bool:
        return True if self.has_hot_water_buffer is None else self.has_hot_water_buffer

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None) -> DeviceSettings:
        """Create settings from config entry options, ignoring unrelated keys."""
        options = options or {}
        return cls(
            compressor_rpm_min=int(options.get(CONF_COMPRESSOR_RPM_MIN) or 0),
            compressor_rpm_max=int(options.get(CONF_COMPRESSOR_RPM_MAX) or 0),
            has_hot_water_buffer=_tri_state(options.get(CONF_HAS_HOT_WATER_BUFFER)),
            use_air_intake_temperature_label=_tri_state(options.get(CONF_USE_AIR_INTAKE_LABEL)),
            power_correction_factor=float(options.get(CONF_POWER_CORRECTION_FACTOR) or 1.0),
        )


class SpreizungResult(ViCareModel):
    """Supply/return pair chosen for the ΔT display.

    ``spreizung`` is None unless ``is_valid``.
    """

    model_config = {"frozen": True}

    spreizung: float | None = None
    supply_temp: float | None = None
    return_temp: float | None = None
    label: str
    is_valid: bool = False


class HeatingCurveData(ViCareModel):
    """Everything needed to evaluate the heating curve of one circuit."""

    model_config = {"frozen": True}

    circuit: int = Field(..., ge=0)
    slope: float | None = None
    shift: float | None = None
    current_outside: float | None = None
    current_supply: float | None = None
    min_supply: float | None = None
    max_supply: float | None = None
    room_setpoint: float = 20.0

    @property
    def is_complete(self) -> bool:
        """Return True when slope and shift are known."""
        return self.slope is not None and self.shift is not None


class CompressorRuntime(ViCareModel):
    """Run-hour statistics of one compressor."""

    model_config = {"frozen": True}

    hours: float = 0.0
    starts: int = 0
    load_class_hours: dict[str, float] = Field(default_factory=dict)

    @property
    def average_runtime_hours(self) -> float | None:
        if self.hours > 0 and self.starts > 0:
            return self.hours / self.starts
        return None


class EnergySnapshot(ViCareModel):
    """Instantaneous energy figures derived from one document."""

    model_config = {"frozen": True}

    spreizung: SpreizungResult
    spreizung_visible: bool = False
    volumetric_flow: float | None = None
    thermal_power_w: float | None = None
    electrical_power_w: float | None = None
    cop: float | None = None
