"""Tests for data models in models.py"""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from custom_components.vicare_dashboard.constants import FeatureCategory
from custom_components.vicare_dashboard.models import (
    ArrayFeature,
    BooleanFeature,
    DeviceInfo,
    DeviceSettings,
    HeatingCurveData,
    CompressorRuntime,
    NumberFeature,
    ObjectFeature,
    RawFeature,
    StringFeature,
    TelemetryDocument,
    categorize_feature_name,
    envelope_to_feature,
    parse_feature,
    parse_timestamp,
)


class TestParseFeature:
    """Tests for the tagged feature parser."""

    def test_number_feature(self):
        """Test parsing a tagged number."""
        feature = parse_feature({"type": "number", "value": 21.5, "unit": "celsius"})

        assert isinstance(feature, NumberFeature)
        assert feature.value == 21.5
        assert feature.unit == "celsius"

    def test_string_boolean_and_array(self):
        """Test parsing the remaining scalar tags."""
        assert isinstance(parse_feature({"type": "string", "value": "heating"}), StringFeature)
        assert isinstance(parse_feature({"type": "boolean", "value": False}), BooleanFeature)
        assert parse_feature({"type": "array", "value": [1, 2]}).value == [1, 2]

    def test_numeric_string_is_coerced(self):
        """Test that a number tag with a numeric string becomes a float."""
        feature = parse_feature({"type": "number", "value": "4.5"})

        assert isinstance(feature, NumberFeature)
        assert feature.value == 4.5

    def test_unknown_tag_falls_back_to_inference(self):
        """Test that unknown tags never raise."""
        feature = parse_feature({"type": "mystery", "value": True})

        assert isinstance(feature, BooleanFeature)
        assert feature.value is True

    def test_mismatched_tag_is_inferred(self):
        """Test a number tag carrying text."""
        feature = parse_feature({"type": "number", "value": "not a number"})

        assert isinstance(feature, StringFeature)
        assert feature.value == "not a number"

    def test_missing_tag_is_inferred(self):
        """Test a feature without a type."""
        assert isinstance(parse_feature({"value": 3}), NumberFeature)
        assert isinstance(parse_feature({"value": [1]}), ArrayFeature)

    def test_object_with_children(self):
        """Test recursive object parsing."""
        feature = parse_feature(
            {
                "type": "object",
                "value": {
                    "slope": {"type": "number", "value": 1.4},
                    "shift": {"type": "number", "value": 2},
                },
            }
        )

        assert isinstance(feature, ObjectFeature)
        assert feature.child("slope").value == 1.4
        assert feature.child("missing") is None

    def test_legacy_properties_container(self):
        """Test objects that use the properties container instead of value."""
        feature = parse_feature(
            {"type": "object", "properties": {"active": {"type": "boolean", "value": True}}}
        )

        assert isinstance(feature, ObjectFeature)
        assert feature.child("active").value is True

    def test_bare_scalars(self):
        """Test bare scalars written without an envelope."""
        assert parse_feature(7).value == 7
        assert parse_feature(None).value is None
        assert parse_feature("on").value == "on"

    def test_plain_mapping_of_children(self):
        """Test a mapping without type/value/properties keys."""
        feature = parse_feature({"min": {"type": "number", "value": 20}})

        assert isinstance(feature, ObjectFeature)
        assert feature.child("min").value == 20

    def test_parsed_feature_passes_through(self):
        """Test that an already parsed feature is returned unchanged."""
        feature = NumberFeature(value=1)

        assert parse_feature(feature) is feature

    def test_features_are_frozen(self):
        """Test that features are immutable."""
        feature = NumberFeature(value=1)

        with pytest.raises(ValidationError):
            feature.value = 2

    def test_is_null(self):
        """Test the null helper."""
        assert NumberFeature(value=None).is_null is True
        assert NumberFeature(value=0).is_null is False


class TestEnvelopeToFeature:
    """Tests for reducing vendor property envelopes."""

    def test_value_envelope(self):
        """Test a plain value envelope with metadata properties."""
        feature = envelope_to_feature(
            {
                "status": {"type": "string", "value": "connected"},
                "value": {"type": "number", "value": 5.2, "unit": "celsius"},
            }
        )

        assert isinstance(feature, NumberFeature)
        assert feature.value == 5.2
        assert feature.unit == "celsius"

    def test_extra_properties_promote_to_object(self):
        """Test that additional properties keep the main value under value."""
        feature = envelope_to_feature(
            {
                "value": {"type": "number", "value": 5, "unit": "kelvin"},
                "switchOnValue": {"type": "number", "value": 2.5, "unit": "kelvin"},
            }
        )

        assert isinstance(feature, ObjectFeature)
        assert feature.child("value").value == 5
        assert feature.child("switchOnValue").value == 2.5
        assert feature.unit == "kelvin"

    def test_properties_become_children(self):
        """Test envelopes without a value property."""
        feature = envelope_to_feature(
            {
                "active": {"type": "boolean", "value": True},
                "phase": {"type": "string", "value": "ready"},
            }
        )

        assert isinstance(feature, ObjectFeature)
        assert feature.child("active").value is True
        assert feature.child("phase").value == "ready"

    def test_empty_properties(self):
        """Test that no properties produce a null feature."""
        assert envelope_to_feature({}).is_null is True
        assert envelope_to_feature(None).is_null is True


class TestCategorizeFeatureName:
    """Tests for the category assignment of feature names."""

    @pytest.mark.parametrize(
        ("name", "category"),
        [
            ("heating.dhw.sensors.temperature.hotWaterStorage", FeatureCategory.TEMPERATURES),
            ("heating.dhw.operating.modes.active", FeatureCategory.DHW),
            ("heating.dhw.hotwaterstorage.charging", FeatureCategory.DHW),
            ("heating.circuits.0.operating.programs.active", FeatureCategory.OPERATING_MODES),
            ("heating.circuits.0.heating.curve", FeatureCategory.CIRCUITS),
            ("heating.compressors.0.statistics", FeatureCategory.OTHER),
        ],
    )
    def test_categories(self, name, category):
        """Test the precedence of the category rules."""
        assert categorize_feature_name(name) == category


class TestTelemetryDocument:
    """Tests for TelemetryDocument."""

    def test_from_api_dict(self, sample_document_dict):
        """Test parsing the categorized JSON document."""
        document = TelemetryDocument.from_api_dict(sample_document_dict)

        assert document.installation_id == "123456"
        assert document.gateway_id == "7633107012345678"
        assert document.temperatures["heating.sensors.temperature.outside"].value == 5.2
        assert len(document.raw_features) == 2
        assert document.last_update == datetime(2026, 10, 19, 8, 0, tzinfo=UTC)

    def test_missing_categories_are_empty(self):
        """Test that absent categories become empty mappings."""
        document = TelemetryDocument.from_api_dict({"temperatures": None, "dhw": "broken"})

        assert document.temperatures == {}
        assert document.dhw == {}
        assert document.other == {}
        assert document.feature_count == 0

    def test_from_api_dict_none(self):
        """Test that None is treated as an empty document."""
        document = TelemetryDocument.from_api_dict(None)

        assert document.feature_count == 0
        assert document.raw_features == []

    def test_from_feature_list(self, vendor_features):
        """Test building the categorized document from the flat vendor list."""
        fetched_at = datetime(2026, 10, 19, 8, 0, tzinfo=UTC)
        document = TelemetryDocument.from_feature_list(
            vendor_features,
            installation_id="123456",
            gateway_id="7633107012345678",
            device_id="0",
            fetched_at=fetched_at,
        )

        assert document.temperatures["heating.sensors.temperature.outside"].value == 5.2
        assert "heating.dhw.temperature.hysteresis" in document.temperatures
        assert document.dhw["heating.dhw.operating.modes.active"].value == "balanced"
        assert "heating.circuits.0.operating.programs.active" in document.operating_modes
        assert "heating.circuits.0.heating.curve" in document.circuits
        assert "heating.compressors.0" in document.other
        assert document.other["heating.boiler.serial"].value == "7723181102527121"
        # The nameless entry is skipped
        assert len(document.raw_features) == 7
        assert document.last_update == fetched_at

    def test_category_accessor(self, sample_document):
        """Test access to categories by name."""
        assert sample_document.category("operatingModes") is sample_document.operating_modes
        assert sample_document.category(FeatureCategory.OTHER) is sample_document.other

    def test_document_is_frozen(self, sample_document):
        """Test that documents are immutable."""
        with pytest.raises(ValidationError):
            sample_document.device_id = "1"


class TestRawFeature:
    """Tests for RawFeature."""

    def test_aliases_and_defaults(self):
        """Test the isEnabled alias and null normalization."""
        raw = RawFeature.model_validate({"feature": "heating.gas.consumption.dhw", "properties": None})

        assert raw.is_enabled is True
        assert raw.properties == {}

        raw = RawFeature.model_validate({"feature": "x", "isEnabled": False})
        assert raw.is_enabled is False

    def test_property_value(self):
        """Test reading a property envelope value."""
        raw = RawFeature(feature="x", properties={"day": {"type": "array", "value": [1, 2]}})

        assert raw.property_value("day") == [1, 2]
        assert raw.property_value("week") is None


class TestDeviceSettings:
    """Tests for DeviceSettings."""

    def test_defaults(self):
        """Test that unset tri-states mean default and auto-detect."""
        settings = DeviceSettings()

        assert settings.has_hot_water_buffer is None
        assert settings.buffer_present is True
        assert settings.use_air_intake_temperature_label is None
        assert settings.power_correction_factor == 1.0

    def test_from_options(self):
        """Test building settings from config entry options."""
        settings = DeviceSettings.from_options(
            {
                "compressor_rpm_min": 1200,
                "compressor_rpm_max": "4800",
                "has_hot_water_buffer": "no",
                "use_air_intake_temperature_label": "auto",
                "power_correction_factor": 0.9,
                "polling_interval": 60,
            }
        )

        assert settings.compressor_rpm_min == 1200
        assert settings.compressor_rpm_max == 4800
        assert settings.buffer_present is False
        assert settings.use_air_intake_temperature_label is None
        assert settings.power_correction_factor == 0.9

    def test_invalid_correction_factor(self):
        """Test that a non-positive correction factor is rejected."""
        with pytest.raises(ValidationError):
            DeviceSettings(power_correction_factor=0)


class TestResultModels:
    """Tests for small result models."""

    def test_device_info(self):
        """Test DeviceInfo helpers."""
        device = DeviceInfo(installation_id="1", gateway_serial="2")

        assert device.device_id == "0"
        assert device.cache_key == ("1", "2", "0")
        assert device.display_name == "ViCare 0"

    def test_heating_curve_completeness(self):
        """Test that slope and shift are required for evaluation."""
        assert HeatingCurveData(circuit=0, slope=1.4, shift=0).is_complete is True
        assert HeatingCurveData(circuit=0, slope=1.4).is_complete is False

        with pytest.raises(ValidationError):
            HeatingCurveData(circuit=-1)

    def test_average_runtime(self):
        """Test hours per start."""
        assert CompressorRuntime(hours=1200, starts=400).average_runtime_hours == 3.0
        assert CompressorRuntime(hours=10, starts=0).average_runtime_hours is None


def test_parse_timestamp():
    """Test lenient timestamp parsing."""
    assert parse_timestamp("2026-10-19T06:00:00+00:00") == datetime(2026, 10, 19, 6, tzinfo=UTC)
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp(None) is None
