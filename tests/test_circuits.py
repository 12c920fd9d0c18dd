"""Tests for circuit detection and heating curve data."""

import pytest

from custom_components.vicare_dashboard.circuits import (
    current_target_supply,
    detect_circuits,
    heating_curve_for_circuit,
    heating_curve_points,
    heating_curves,
    room_setpoint_for_circuit,
)
from custom_components.vicare_dashboard.models import HeatingCurveData, TelemetryDocument
from custom_components.vicare_dashboard.physics import target_supply_temperature


def _circuits_document(enabled):
    return TelemetryDocument.from_api_dict(
        {"circuits": {"heating.circuits": {"type": "object", "value": {"enabled": enabled}}}}
    )


class TestDetectCircuits:
    """Tests for detect_circuits."""

    def test_enabled_list(self):
        """Test the advertised enabled list."""
        document = _circuits_document({"type": "array", "value": ["0", "1"]})

        assert detect_circuits(document) == [0, 1]

    def test_enabled_list_with_numbers(self):
        """Test numeric entries and garbage entries."""
        document = _circuits_document({"type": "array", "value": [2, "x", -1, True]})

        assert detect_circuits(document) == [2]

    def test_inferred_from_key_prefixes(self):
        """Test inference when there is no enabled list."""
        document = TelemetryDocument.from_api_dict(
            {
                "temperatures": {
                    "heating.circuits.1.sensors.temperature.supply": {"type": "number", "value": 30},
                },
                "operatingModes": {
                    "heating.circuits.0.operating.modes.active": {"type": "string", "value": "heating"},
                    "heating.circuits.1.operating.modes.active": {"type": "string", "value": "heating"},
                },
            }
        )

        assert detect_circuits(document) == [0, 1]

    def test_empty_enabled_list_falls_back_to_inference(self):
        """Test that an empty enabled list does not hide real circuits."""
        document = TelemetryDocument.from_api_dict(
            {
                "circuits": {
                    "heating.circuits": {"type": "object", "value": {"enabled": {"type": "array", "value": []}}},
                    "heating.circuits.2.heating.curve": {"type": "object", "value": {}},
                }
            }
        )

        assert detect_circuits(document) == [2]

    def test_default_circuit(self):
        """Test that a document without circuits yields circuit 0."""
        assert detect_circuits(TelemetryDocument()) == [0]

    def test_sample_document(self, sample_document):
        """Test the sample document."""
        assert detect_circuits(sample_document) == [0]


class TestHeatingCurveData:
    """Tests for per-circuit heating curve data."""

    def test_room_setpoint_from_active_program(self, sample_document):
        """Test that the active program temperature is used."""
        assert room_setpoint_for_circuit(sample_document, 0) == 21.0

    def test_room_setpoint_default(self):
        """Test the default setpoint when nothing is reported."""
        assert room_setpoint_for_circuit(TelemetryDocument(), 0) == 20.0

    def test_heating_curve_for_circuit(self, sample_document):
        """Test assembling the curve inputs."""
        curve = heating_curve_for_circuit(sample_document, 0, 5.2)

        assert curve.circuit == 0
        assert curve.slope == 1.4
        assert curve.shift == 0
        assert curve.current_outside == 5.2
        assert curve.current_supply == 35.0
        assert curve.min_supply == 20
        assert curve.max_supply == 55
        assert curve.room_setpoint == 21.0

    def test_missing_circuit(self, sample_document):
        """Test a circuit that reports nothing."""
        curve = heating_curve_for_circuit(sample_document, 3, 5.2)

        assert curve.is_complete is False
        assert current_target_supply(curve) is None

    def test_heating_curves_keyed_by_int(self, sample_document):
        """Test that curves are keyed by integer circuit ids."""
        curves = heating_curves(sample_document, [0, 1], None)

        assert list(curves) == [0, 1]
        assert all(isinstance(key, int) for key in curves)

    def test_current_target_supply(self, sample_document):
        """Test evaluating the curve at the current outside temperature."""
        curve = heating_curve_for_circuit(sample_document, 0, 5.2)

        expected = target_supply_temperature(5.2, 1.4, 0, room_setpoint=21.0, min_supply=20, max_supply=55)

        assert current_target_supply(curve) == pytest.approx(expected)

    def test_current_target_supply_without_outside(self, sample_document):
        """Test that no outside temperature means no target."""
        curve = heating_curve_for_circuit(sample_document, 0, None)

        assert current_target_supply(curve) is None


class TestHeatingCurvePoints:
    """Tests for heating_curve_points."""

    def test_default_range(self):
        """Test sampling from -30 to 20 in 1 K steps."""
        curve = HeatingCurveData(circuit=0, slope=1.4, shift=0)

        points = heating_curve_points(curve)

        assert len(points) == 51
        assert points[0][0] == -30.0
        assert points[-1] == (20.0, pytest.approx(20.0))

    def test_points_respect_limits(self):
        """Test that every point is clamped."""
        curve = HeatingCurveData(circuit=0, slope=2.0, shift=5, min_supply=25, max_supply=50)

        points = heating_curve_points(curve, step=5.0)

        assert all(25 <= target <= 50 for _, target in points)
        assert points[0][1] == 50

    def test_incomplete_curve(self):
        """Test that an incomplete curve yields no points."""
        assert heating_curve_points(HeatingCurveData(circuit=0, slope=1.0)) == []

    def test_invalid_step(self):
        """Test that a non-positive step is rejected."""
        with pytest.raises(ValueError):
            heating_curve_points(HeatingCurveData(circuit=0, slope=1.0, shift=0), step=0)
