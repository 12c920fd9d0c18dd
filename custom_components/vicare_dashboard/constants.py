"""Constants and Enums for the ViCare dashboard integration."""

from __future__ import annotations

from datetime import timedelta
from enum import StrEnum

from pydantic import BaseModel, Field

# Integration Domain
DOMAIN = "vicare_dashboard"

# Supported Platforms
PLATFORMS = ["sensor"]

# Config entry data keys
CONF_INSTALLATION_ID = "installation_id"
CONF_GATEWAY_SERIAL = "gateway_serial"
CONF_DEVICE_ID = "device_id"
CONF_ACCESS_TOKEN = "access_token"

# Options keys (device settings)
CONF_COMPRESSOR_RPM_MIN = "compressor_rpm_min"
CONF_COMPRESSOR_RPM_MAX = "compressor_rpm_max"
CONF_HAS_HOT_WATER_BUFFER = "has_hot_water_buffer"
CONF_USE_AIR_INTAKE_LABEL = "use_air_intake_temperature_label"
CONF_POWER_CORRECTION_FACTOR = "power_correction_factor"
CONF_POLLING_INTERVAL = "polling_interval"


class FeatureCategory(StrEnum):
    """Feature categories of a telemetry document, as named in the JSON payload."""

    TEMPERATURES = "temperatures"
    DHW = "dhw"
    CIRCUITS = "circuits"
    OPERATING_MODES = "operatingModes"
    OTHER = "other"


# Fixed search order for the feature locator. The same key may appear in
# more than one category; the first match wins.
CATEGORY_SEARCH_ORDER: tuple[FeatureCategory, ...] = (
    FeatureCategory.TEMPERATURES,
    FeatureCategory.DHW,
    FeatureCategory.CIRCUITS,
    FeatureCategory.OPERATING_MODES,
    FeatureCategory.OTHER,
)

# Scan order used when inferring circuit numbers from key prefixes
CIRCUIT_SCAN_ORDER: tuple[FeatureCategory, ...] = (
    FeatureCategory.CIRCUITS,
    FeatureCategory.OPERATING_MODES,
    FeatureCategory.TEMPERATURES,
    FeatureCategory.DHW,
    FeatureCategory.OTHER,
)

# Search order for circuit-scoped program lookups (room setpoints, curves)
CIRCUIT_FEATURE_ORDER: tuple[FeatureCategory, ...] = (
    FeatureCategory.CIRCUITS,
    FeatureCategory.OPERATING_MODES,
    FeatureCategory.TEMPERATURES,
    FeatureCategory.OTHER,
)

# Envelope property names that never promote a feature to an object
ENVELOPE_METADATA_PROPERTIES = frozenset({"value", "status", "active", "enabled"})

# Nesting cap for value unwrapping on malformed input
MAX_UNWRAP_DEPTH = 10

# --- Physical constants ---

# Specific heat capacity of heating water in J/(kg*K)
C_WATER_J_KG_K = 4180.0
# Linear density approximation rho(T) = 1000 - 0.3 * T, valid for 0..90 °C
WATER_DENSITY_BASE_KG_M3 = 1000.0
WATER_DENSITY_SLOPE_KG_M3_K = 0.3
# l/h -> m³/s
LITERS_PER_HOUR_PER_M3_S = 3_600_000.0

# Viessmann heating curve polynomial coefficients
CURVE_COEFF_LINEAR = 1.4347
CURVE_COEFF_QUADRATIC = 0.021
CURVE_COEFF_CUBIC = 247.9e-6

# Room setpoint used when the active program carries no temperature
DEFAULT_ROOM_SETPOINT_C = 20.0

# --- Heuristics (kept configurable, pending product confirmation) ---

# Below this volumetric flow ΔT is sensor noise
MIN_SPREIZUNG_FLOW_L_H = 50.0
# Day-0 consumption values older than this are hidden as stale
STALE_DAY_THRESHOLD = timedelta(hours=4)
# Default circuit set when nothing can be detected
DEFAULT_CIRCUITS: tuple[int, ...] = (0,)

SPREIZUNG_LABEL_SECONDARY = "Spreizung Sekundärkreis"
SPREIZUNG_LABEL_CIRCUIT = "Spreizung Heizkreis"

PRIMARY_SUPPLY_LABEL = "Primärkreis-Vorlauf"
AIR_INTAKE_LABEL = "Lufteintritts-temperatur"

# Vendor unit -> display label
UNIT_LABELS: dict[str, str] = {
    "celsius": "°C",
    "ampere": "A",
    "watt": "W",
    "kilowatt": "kW",
    "hour": "Std.",
    "hours": "Std.",
    "kilowattHour": "kWh",
    "percent": "%",
    "bar": "bar",
    "revolutionsPerSecond": "U/s",
    "revolutionsPerMinute": "U/min",
    "cubicMeter": "m³",
    "cubicMeterPerHour": "m³/h",
    "litersPerHour": "l/h",
    "kelvin": "K",
}


class APIDefaults(BaseModel):
    """Default values for API configuration.

    Immutable configuration values for API timeouts, caching and retries.
    These values can be overridden when instantiating ViCareAPI.
    """

    model_config = {"frozen": True}

    BASE_URL: str = Field(default="https://api.viessmann.com", description="Vendor API base URL")
    READ_TIMEOUT: int = Field(default=15, description="Timeout for read operations (GET) in seconds")
    CACHE_TTL: float = Field(
        default=300.0,
        description="Time-to-live in seconds for cached telemetry documents",
    )
    MAX_RETRIES: int = Field(default=3, description="Number of retries for transient failures")
    RETRY_BACKOFF: float = Field(default=1.0, description="Base delay between retries in seconds")
    POLLING_INTERVAL: int = Field(
        default=300,
        description="Default polling interval for the coordinator in seconds, not below CACHE_TTL",
    )


# Create a default instance for easy access
API_DEFAULTS = APIDefaults()
