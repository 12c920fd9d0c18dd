"""Tests for sensor definitions in entities/sensor_definitions.py"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError
from homeassistant.components.sensor import SensorDeviceClass, SensorStateClass

from custom_components.vicare_dashboard.entities.base import EnergySensorDefinition, SensorDefinition
from custom_components.vicare_dashboard.entities.key_feature_definitions import (
    KEY_FEATURES_BY_NAME,
    FeatureSource,
)
from custom_components.vicare_dashboard.entities.sensor_definitions import (
    CIRCUIT_SENSORS,
    DERIVED_SENSORS,
    ENERGY_SENSORS,
    KEY_FEATURE_SENSORS,
)
from custom_components.vicare_dashboard.sensor import DERIVED_VALUES

COMPONENT_DIR = Path(__file__).parent.parent / "custom_components" / "vicare_dashboard"
ALL_SENSORS = KEY_FEATURE_SENSORS + DERIVED_SENSORS + CIRCUIT_SENSORS + ENERGY_SENSORS


@pytest.fixture(scope="module")
def strings():
    """Load strings.json."""
    return json.loads((COMPONENT_DIR / "strings.json").read_text(encoding="utf-8"))


class TestSensorDefinitions:
    """Test sensor definitions for correctness."""

    @pytest.mark.parametrize("sensor_def", ALL_SENSORS, ids=lambda d: d["key"])
    def test_definition_validates(self, sensor_def):
        """Test that every definition is a valid SensorDefinition with HA enums."""
        definition = SensorDefinition.model_validate(sensor_def)

        if definition.device_class:
            SensorDeviceClass(definition.device_class)
        if definition.state_class:
            SensorStateClass(definition.state_class)

    def test_temperature_sensors_use_celsius(self):
        """Test that temperature sensors report °C."""
        for sensor_def in ALL_SENSORS:
            if sensor_def.get("device_class") == "temperature":
                assert sensor_def["unit"] == "°C", f"Temperature sensor '{sensor_def['key']}' must use °C"

    def test_unique_translation_keys(self):
        """Test that no two sensors share a translation key."""
        keys = [sensor_def["translation_key"] for sensor_def in ALL_SENSORS]
        assert len(keys) == len(set(keys))

    def test_translation_keys_in_strings(self, strings):
        """Test that every translation key has a name in strings.json."""
        sensor_strings = strings["entity"]["sensor"]
        for sensor_def in ALL_SENSORS:
            assert sensor_def["translation_key"] in sensor_strings, sensor_def["translation_key"]

    def test_english_translation_matches_strings(self, strings):
        """Test that translations/en.json covers the same sensors."""
        english = json.loads((COMPONENT_DIR / "translations" / "en.json").read_text(encoding="utf-8"))
        assert set(english["entity"]["sensor"]) == set(strings["entity"]["sensor"])

    def test_circuit_name_has_placeholder(self, strings):
        """Test that circuit sensor names include the circuit number."""
        for sensor_def in CIRCUIT_SENSORS:
            assert "{circuit}" in strings["entity"]["sensor"][sensor_def["translation_key"]]["name"]

    def test_every_derived_sensor_has_a_value_function(self):
        """Test that derived sensors are wired to a calculator."""
        assert {sensor_def["key"] for sensor_def in DERIVED_SENSORS} == set(DERIVED_VALUES)

    @pytest.mark.parametrize("sensor_def", ENERGY_SENSORS, ids=lambda d: d["translation_key"])
    def test_energy_sensor_reads_history_series(self, sensor_def):
        """Test that energy sensors read a history series in kWh."""
        definition = EnergySensorDefinition.model_validate(sensor_def)

        assert KEY_FEATURES_BY_NAME[definition.key].source is FeatureSource.RAW
        assert definition.unit == "kWh"
        assert SensorDeviceClass(definition.device_class) is SensorDeviceClass.ENERGY

    def test_definition_requires_names(self):
        """Test that name and translation key are mandatory definition fields."""
        with pytest.raises(ValidationError):
            SensorDefinition(key="outsideTemp")
        with pytest.raises(ValidationError):
            SensorDefinition(key="outsideTemp", name="Outside Temperature")
