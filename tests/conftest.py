"""Common fixtures for ViCare dashboard tests."""
import pytest
from unittest.mock import AsyncMock, MagicMock
from homeassistant.core import HomeAssistant
from homeassistant.config_entries import ConfigEntry

from custom_components.vicare_dashboard.coordinator import build_dashboard_state
from custom_components.vicare_dashboard.models import DeviceInfo, DeviceSettings, TelemetryDocument


def number(value, unit=None):
    feature = {"type": "number", "value": value}
    if unit:
        feature["unit"] = unit
    return feature


def string(value):
    return {"type": "string", "value": value}


def boolean(value):
    return {"type": "boolean", "value": value}


def obj(**children):
    return {"type": "object", "value": children}


SAMPLE_DOCUMENT = {
    "installationId": "123456",
    "gatewayId": "7633107012345678",
    "deviceId": "0",
    "lastUpdate": "2026-10-19T08:00:00+00:00",
    "temperatures": {
        "heating.sensors.temperature.outside": number(5.2, "celsius"),
        "heating.circuits.0.sensors.temperature.supply": number(35.0, "celsius"),
        "heating.sensors.temperature.return": number(30.0, "celsius"),
        "heating.primaryCircuit.sensors.temperature.supply": number(8.5, "celsius"),
        "heating.primaryCircuit.sensors.temperature.return": number(4.0, "celsius"),
        "heating.secondaryCircuit.sensors.temperature.supply": number(36.0, "celsius"),
        "heating.dhw.sensors.temperature.hotWaterStorage": number(48.5, "celsius"),
        "heating.dhw.temperature.hysteresis": obj(
            value=number(5, "kelvin"),
            switchOnValue=number(5, "kelvin"),
            switchOffValue=number(0, "kelvin"),
        ),
        "heating.circuits.0.temperature.levels": obj(
            min=number(20, "celsius"),
            max=number(55, "celsius"),
        ),
        "heating.compressors.0.sensors.temperature.inlet": number(12.3, "celsius"),
    },
    "dhw": {
        "heating.dhw.operating.modes.active": string("balanced"),
    },
    "circuits": {
        "heating.circuits": obj(enabled={"type": "array", "value": ["0"]}),
        "heating.circuits.0.heating.curve": obj(
            slope=number(1.4),
            shift=number(0, "kelvin"),
        ),
    },
    "operatingModes": {
        "heating.circuits.0.operating.modes.active": string("heating"),
        "heating.circuits.0.operating.programs.active": string("normal"),
        "heating.circuits.0.operating.programs.normal": obj(
            active=boolean(True),
            temperature=number(21, "celsius"),
        ),
    },
    "other": {
        "heating.compressors.0": obj(active=boolean(True), phase=string("heating")),
        "heating.compressors.0.speed.current": number(42, "revolutionsPerSecond"),
        "heating.inverters.0.sensors.power.output": number(1200, "watt"),
        "heating.sensors.volumetricFlow.allengra": number(1000, "litersPerHour"),
        "heating.compressors.0.statistics": obj(
            hours=number(1200, "hour"),
            starts=number(400),
            hoursLoadClassOne=number(100, "hour"),
            hoursLoadClassTwo=number(200, "hour"),
        ),
        "heating.cop.total": number(3.9),
        "device.serial": string("7633107012345678"),
    },
    "rawFeatures": [
        {
            "feature": "heating.power.consumption.dhw",
            "isEnabled": True,
            "properties": {
                "day": {"type": "array", "value": [1.2, 2.3, 3.4], "unit": "kilowattHour"},
                "week": {"type": "array", "value": [10.5, 12.0], "unit": "kilowattHour"},
                "dayValueReadAt": {"type": "string", "value": "2026-10-19T06:00:00+00:00"},
            },
        },
        {
            "feature": "heating.noise.reduction.operating.programs.active",
            "isEnabled": False,
            "properties": {"value": {"type": "string", "value": "notReduced"}},
        },
    ],
}


VENDOR_FEATURES = [
    {
        "feature": "heating.sensors.temperature.outside",
        "isEnabled": True,
        "properties": {
            "status": {"type": "string", "value": "connected"},
            "value": {"type": "number", "value": 5.2, "unit": "celsius"},
        },
    },
    {
        "feature": "heating.dhw.temperature.hysteresis",
        "isEnabled": True,
        "properties": {
            "value": {"type": "number", "value": 5, "unit": "kelvin"},
            "switchOnValue": {"type": "number", "value": 5, "unit": "kelvin"},
            "switchOffValue": {"type": "number", "value": 0, "unit": "kelvin"},
        },
    },
    {
        "feature": "heating.circuits.0.heating.curve",
        "isEnabled": True,
        "properties": {
            "slope": {"type": "number", "value": 1.4},
            "shift": {"type": "number", "value": 0, "unit": ""},
        },
    },
    {
        "feature": "heating.dhw.operating.modes.active",
        "isEnabled": True,
        "properties": {"value": {"type": "string", "value": "balanced"}},
    },
    {
        "feature": "heating.circuits.0.operating.programs.active",
        "isEnabled": True,
        "properties": {"value": {"type": "string", "value": "normal"}},
    },
    {
        "feature": "heating.compressors.0",
        "isEnabled": True,
        "properties": {
            "active": {"type": "boolean", "value": True},
            "phase": {"type": "string", "value": "heating"},
        },
    },
    {
        "feature": "heating.boiler.serial",
        "isEnabled": True,
        "properties": {"value": {"type": "string", "value": "7723181102527121"}},
    },
    {"isEnabled": True, "properties": {}},
]


@pytest.fixture
def sample_document_dict():
    """Return the categorized sample document as JSON-like data."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def sample_document():
    """Return the parsed sample telemetry document."""
    return TelemetryDocument.from_api_dict(SAMPLE_DOCUMENT)


@pytest.fixture
def vendor_features():
    """Return a flat vendor feature list as delivered by the API."""
    return VENDOR_FEATURES


@pytest.fixture
def device_info():
    """Return the device the tests talk to."""
    return DeviceInfo(installation_id="123456", gateway_serial="7633107012345678", device_id="0")


@pytest.fixture
def device_settings():
    """Return settings with a configured compressor RPM range."""
    return DeviceSettings(compressor_rpm_min=1200, compressor_rpm_max=4800)


@pytest.fixture
def dashboard_state(sample_document, device_settings):
    """Return the derived state of the sample document."""
    return build_dashboard_state(sample_document, device_settings, sequence=1)


@pytest.fixture
def mock_hass():
    """Create a mock Home Assistant instance."""
    hass = MagicMock(spec=HomeAssistant)
    hass.data = {}
    hass.loop = None
    hass.async_create_task = MagicMock()
    hass.add_job = MagicMock()
    return hass


@pytest.fixture
def mock_config_entry():
    """Create a mock config entry."""
    entry = MagicMock(spec=ConfigEntry)
    entry.entry_id = "test_entry_id"
    entry.title = "ViCare 7633107012345678/0"
    entry.data = {
        "installation_id": "123456",
        "gateway_serial": "7633107012345678",
        "device_id": "0",
        "access_token": "test-token",
    }
    entry.options = {}
    return entry


@pytest.fixture
def mock_api(sample_document):
    """Create a mock ViCareAPI instance."""
    api = MagicMock()
    api.async_get_features = AsyncMock(return_value=sample_document)
    api.close = AsyncMock()
    api.cache_ttl = 300.0
    return api


@pytest.fixture
def mock_coordinator(dashboard_state):
    """Create a mock coordinator holding the sample state."""
    coordinator = MagicMock()
    coordinator.data = dashboard_state
    coordinator.async_request_refresh = AsyncMock()
    coordinator.async_add_listener = MagicMock(return_value=lambda: None)
    coordinator.last_update_success = True
    return coordinator
