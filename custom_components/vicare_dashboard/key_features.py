"""Extraction of the flat key feature record from a telemetry document.

The record is the contract between the telemetry document and every
consumer: each catalog name is always present and maps to None when the
device does not offer the capability.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import Field

from .constants import (
    AIR_INTAKE_LABEL,
    CATEGORY_SEARCH_ORDER,
    PRIMARY_SUPPLY_LABEL,
    STALE_DAY_THRESHOLD,
)
from .entities.key_feature_definitions import (
    KEY_FEATURE_DEFINITIONS,
    FeatureSource,
    KeyFeatureDefinition,
)
from .feature_locator import feature_exists, find, find_nested, find_raw
from .models import DeviceSettings, Feature, RawFeature, TelemetryDocument, ViCareModel, parse_timestamp
from .normalizer import is_number, numeric_value

_LOGGER = logging.getLogger(__name__)

CONSUMPTION_PERIODS = ("day", "week", "month", "year")

# Sensors whose presence identifies a compressor-based device
_COMPRESSOR_SENSOR_KEYS = (
    "compressorActive",
    "compressorSpeed",
    "compressorInletTemp",
    "compressorOutletTemp",
    "compressorOilTemp",
    "compressorMotorTemp",
    "compressorPressure",
)


class ConsumptionSeries(ViCareModel):
    """Array-valued history feature (day/week/month/year).

    Index 0 of each array is the current period, index 1 the previous one.

    Attributes:
        raw: The raw feature carrying the arrays.

    Example:
        >>> series.value_at("week", 1)
        42.7
    """

    model_config = {"frozen": True}

    raw: RawFeature = Field(..., description="Raw history feature")

    @property
    def name(self) -> str:
        return self.raw.feature

    def values(self, period: str) -> list[Any]:
        """Return the history array of a period, empty when missing."""
        values = self.raw.property_value(period)
        return list(values) if isinstance(values, list) else []

    def value_at(self, period: str, index: int = 0) -> Any:
        """Return one history entry, None when out of range."""
        values = self.values(period)
        if index < 0 or index >= len(values):
            return None
        return values[index]

    def summary(self, period: str) -> Any:
        """Return ``properties[period].value`` for summary features."""
        return self.raw.property_value(period)

    def unit(self, period: str = "day") -> str | None:
        prop = self.raw.properties.get(period)
        if isinstance(prop, Mapping) and isinstance(prop.get("unit"), str):
            return prop["unit"]
        return None

    def read_at(self, period: str = "day") -> datetime | None:
        """Return when the current value of a period was read by the device."""
        return parse_timestamp(self.raw.property_value(f"{period}ValueReadAt"))

    def first_visible_day(
        self, now: datetime | None = None, max_age: timedelta = STALE_DAY_THRESHOLD
    ) -> int:
        """Return the first day index that should be displayed.

        Today's entry (index 0) is hidden when its read timestamp is older
        than ``max_age``.
        """
        read_at = self.read_at("day")
        if read_at is None:
            return 0
        if read_at.tzinfo is None:
            read_at = read_at.replace(tzinfo=UTC)
        now = now or datetime.now(UTC)
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return 1 if now - read_at > max_age else 0

    def current(
        self, period: str, now: datetime | None = None, max_age: timedelta = STALE_DAY_THRESHOLD
    ) -> float | None:
        """Return the running total of the current period.

        For ``day`` this is None while today's entry is hidden, so a stale
        reading never reports yesterday's total as today's.
        """
        index = self.first_visible_day(now, max_age) if period == "day" else 0
        if index > 0:
            return None
        value = self.value_at(period, index)
        return value if is_number(value) else None


KeyFeatureValue = Feature | ConsumptionSeries | bool | None


class KeyFeatures(Mapping[str, KeyFeatureValue]):
    """Read-only key feature record.

    Every catalog name is present. Looking up a name outside the catalog
    raises KeyError so that a typo cannot read as a missing sensor.
    """

    def __init__(self, values: Mapping[str, KeyFeatureValue]) -> None:
        self._values = dict(values)

    def __getitem__(self, key: str) -> KeyFeatureValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        present = sum(1 for value in self._values.values() if value not in (None, False))
        return f"KeyFeatures({present}/{len(self._values)} present)"

    def feature(self, key: str) -> Feature | None:
        """Return a located feature, None when absent or not a feature."""
        value = self[key]
        if value is None or isinstance(value, (bool, ConsumptionSeries)):
            return None
        return value

    def number(self, key: str) -> float | None:
        """Return the unwrapped numeric value of a feature, else None."""
        return numeric_value(self.feature(key))

    def series(self, key: str) -> ConsumptionSeries | None:
        value = self[key]
        return value if isinstance(value, ConsumptionSeries) else None

    def flag(self, key: str) -> bool:
        """Return the truthiness of a boolean-ish feature."""
        value = self[key]
        if isinstance(value, bool):
            return value
        feature = self.feature(key)
        return bool(feature is not None and feature.value)

    @property
    def present(self) -> list[str]:
        return [key for key, value in self._values.items() if value not in (None, False)]


def resolve_definition(document: TelemetryDocument, definition: KeyFeatureDefinition) -> KeyFeatureValue:
    """Resolve one catalog row against a document."""
    name = definition.candidates[0]

    if definition.source is FeatureSource.NESTED:
        return find_nested(document, name, definition.nested_property or "")

    if definition.source is FeatureSource.RAW:
        raw = find_raw(document, name)
        return ConsumptionSeries(raw=raw) if raw is not None else None

    if definition.source is FeatureSource.EXISTS:
        return feature_exists(document, name, definition.categories or CATEGORY_SEARCH_ORDER)

    return find(document, definition.candidates, definition.patterns)


def extract_key_features(
    document: TelemetryDocument,
    definitions: tuple[KeyFeatureDefinition, ...] = KEY_FEATURE_DEFINITIONS,
) -> KeyFeatures:
    """Run the catalog against a document and build the key feature record."""
    values = {definition.key: resolve_definition(document, definition) for definition in definitions}
    record = KeyFeatures(values)

    missing = [key for key, value in values.items() if value is None]
    if missing:
        _LOGGER.debug(f"{len(missing)} key features not offered by device {document.device_id}: {missing}")
    return record


def has_compressor_sensors(key_features: KeyFeatures) -> bool:
    """Return True when the device reports any compressor sensor."""
    return any(key_features[key] is not None for key in _COMPRESSOR_SENSOR_KEYS)


def primary_supply_label(key_features: KeyFeatures, settings: DeviceSettings) -> str:
    """Return the display label of the primary circuit supply sensor.

    On air-source heat pumps the primary supply sensor measures the air
    intake. An explicit setting wins; otherwise the presence of
    compressor sensors decides.
    """
    if settings.use_air_intake_temperature_label is not None:
        return AIR_INTAKE_LABEL if settings.use_air_intake_temperature_label else PRIMARY_SUPPLY_LABEL
    return AIR_INTAKE_LABEL if has_compressor_sensors(key_features) else PRIMARY_SUPPLY_LABEL


def is_hybrid_system(key_features: KeyFeatures) -> bool:
    """Return True when a secondary heat generator reports a textual status."""
    feature = key_features.feature("secondaryHeatGeneratorStatus")
    return feature is not None and isinstance(feature.value, str)


def is_compressor_running(key_features: KeyFeatures) -> bool:
    """Use the active flag when reported, else a positive compressor speed."""
    active = key_features.feature("compressorActive")
    if active is not None:
        return bool(active.value)
    speed = key_features.number("compressorSpeed")
    return is_number(speed) and speed > 0
