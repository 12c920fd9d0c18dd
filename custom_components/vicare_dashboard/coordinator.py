import itertools
import logging
from datetime import timedelta

from homeassistant.exceptions import ConfigEntryAuthFailed
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed
from pydantic import Field

from .circuits import current_target_supply, detect_circuits, heating_curves
from .constants import API_DEFAULTS
from .infrastructure.errors import (
    ViCareDashboardAuthError,
    ViCareDashboardError,
    ViCareDashboardValidationError,
)
from .key_features import (
    KeyFeatures,
    extract_key_features,
    is_compressor_running,
    is_hybrid_system,
    primary_supply_label,
)
from .models import (
    CompressorRuntime,
    DeviceInfo,
    DeviceSettings,
    EnergySnapshot,
    HeatingCurveData,
    TelemetryDocument,
    ViCareModel,
)
from .physics import compressor_rpm, compressor_runtime, energy_snapshot, rpm_percentage

_LOGGER = logging.getLogger(__name__)


class DashboardState(ViCareModel):
    """Everything derived from one telemetry document.

    Published as a whole by the coordinator so that consumers never see a
    mix of two refreshes.
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    sequence: int = Field(..., ge=0)
    document: TelemetryDocument
    key_features: KeyFeatures
    settings: DeviceSettings
    circuits: list[int]
    heating_curves: dict[int, HeatingCurveData]
    target_supply: dict[int, float | None]
    energy: EnergySnapshot
    primary_supply_label: str
    hybrid: bool = False
    compressor_running: bool = False
    compressor_rpm: float | None = None
    compressor_load_percent: int | None = None
    compressor_runtime: dict[int, CompressorRuntime] = Field(default_factory=dict)


def _safe_target_supply(curve: HeatingCurveData) -> float | None:
    try:
        return current_target_supply(curve)
    except ViCareDashboardValidationError as e:
        _LOGGER.warning(f"Heating curve of circuit {curve.circuit} not evaluated: {e}")
        return None


def build_dashboard_state(document: TelemetryDocument, settings: DeviceSettings, sequence: int = 0) -> DashboardState:
    """Run one derivation cycle over a freshly fetched document."""
    key_features = extract_key_features(document)
    circuits = detect_circuits(document)
    curves = heating_curves(document, circuits, key_features.number("outsideTemp"))

    rpm = compressor_rpm(key_features.feature("compressorSpeed"))
    runtimes = {}
    for index, key in enumerate(("compressorStats0", "compressorStats1")):
        runtime = compressor_runtime(key_features.feature(key))
        if runtime is not None:
            runtimes[index] = runtime

    return DashboardState(
        sequence=sequence,
        document=document,
        key_features=key_features,
        settings=settings,
        circuits=circuits,
        heating_curves=curves,
        target_supply={circuit: _safe_target_supply(curve) for circuit, curve in curves.items()},
        energy=energy_snapshot(key_features, settings),
        primary_supply_label=primary_supply_label(key_features, settings),
        hybrid=is_hybrid_system(key_features),
        compressor_running=is_compressor_running(key_features),
        compressor_rpm=rpm,
        compressor_load_percent=rpm_percentage(rpm, settings.compressor_rpm_min, settings.compressor_rpm_max),
        compressor_runtime=runtimes,
    )


class ViCareDashboardCoordinator(DataUpdateCoordinator[DashboardState]):
    """Polls the feature API and publishes a DashboardState per refresh."""

    def __init__(self, hass, api, device: DeviceInfo, settings: DeviceSettings | None = None,
                 polling_interval: int = API_DEFAULTS.POLLING_INTERVAL, config_entry=None):
        super().__init__(
            hass,
            _LOGGER,
            config_entry=config_entry,
            name=f"ViCare Dashboard {device.display_name}",
            update_interval=timedelta(seconds=polling_interval),
        )
        self.api = api
        self.device = device
        self.settings = settings or DeviceSettings()
        # Polls faster than the client cache expires must skip the cache
        self.force_refresh = polling_interval < api.cache_ttl
        self._sequence = itertools.count(1)
        self._applied_sequence = 0

    @property
    def applied_sequence(self) -> int:
        return self._applied_sequence

    def apply(self, state: DashboardState) -> DashboardState:
        """Accept a state unless a newer one has already been applied."""
        if state.sequence <= self._applied_sequence and self.data is not None:
            _LOGGER.debug(
                f"Discarding refresh #{state.sequence}, refresh #{self._applied_sequence} is already applied"
            )
            return self.data
        self._applied_sequence = state.sequence
        return state

    async def _async_update_data(self) -> DashboardState:
        sequence = next(self._sequence)
        try:
            document = await self.api.async_get_features(self.device, force_refresh=self.force_refresh)
        except ViCareDashboardAuthError as e:
            raise ConfigEntryAuthFailed(f"Zugriffstoken abgelehnt: {e}") from e
        except ViCareDashboardError as e:
            _LOGGER.warning(f"Fehler beim Abrufen der Telemetriedaten: {e}")
            raise UpdateFailed(f"Fehler beim Abrufen der Telemetriedaten: {e}") from e

        return self.apply(build_dashboard_state(document, self.settings, sequence))
