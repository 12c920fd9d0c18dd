import logging
from collections.abc import Callable
from typing import Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity
from homeassistant.util import dt as dt_util

from .circuits import heating_curve_points
from .constants import DOMAIN
from .coordinator import DashboardState, ViCareDashboardCoordinator
from .entities.base import EnergySensorDefinition, SensorDefinition
from .entities.sensor_definitions import (
    CIRCUIT_SENSORS,
    DERIVED_SENSORS,
    ENERGY_SENSORS,
    KEY_FEATURE_SENSORS,
)
from .infrastructure.errors import ViCareDashboardValidationError
from .models import DeviceInfo as ViCareDeviceInfo
from .models import HeatingCurveData
from .normalizer import format_value, is_number, is_valid_numeric_value, numeric_value

_LOGGER = logging.getLogger(__name__)

# Outside temperature spacing of the sampled heating curve attribute
CURVE_ATTRIBUTE_STEP = 5.0


def _runtime(attribute: str) -> Callable[[DashboardState], Any]:
    return lambda state: getattr(state.compressor_runtime.get(0), attribute, None)


def _spreizung(state: DashboardState) -> float | None:
    # ΔT is only meaningful while water is actually flowing
    if not state.energy.spreizung_visible:
        return None
    return state.energy.spreizung.spreizung


def _sampled_curve(curve: HeatingCurveData) -> list[list[float]]:
    # Contradictory supply limits are already reported by the coordinator
    try:
        points = heating_curve_points(curve, step=CURVE_ATTRIBUTE_STEP)
    except ViCareDashboardValidationError:
        return []
    return [list(point) for point in points]


DERIVED_VALUES: dict[str, Callable[[DashboardState], Any]] = {
    "spreizung": _spreizung,
    "thermalPower": lambda state: state.energy.thermal_power_w,
    "electricalPower": lambda state: state.energy.electrical_power_w,
    "cop": lambda state: state.energy.cop,
    "compressorRpm": lambda state: state.compressor_rpm,
    "compressorLoad": lambda state: state.compressor_load_percent,
    "compressorHours": _runtime("hours"),
    "compressorStarts": _runtime("starts"),
}


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
):
    data = hass.data[DOMAIN][entry.entry_id]
    coordinator: ViCareDashboardCoordinator = data["coordinator"]
    device: ViCareDeviceInfo = data["device"]

    sensors: list[SensorEntity] = []
    for sensor_def in KEY_FEATURE_SENSORS:
        definition = SensorDefinition.model_validate(sensor_def)
        sensors.append(ViCareKeyFeatureSensor(coordinator, definition, device, entry))

    for sensor_def in DERIVED_SENSORS:
        definition = SensorDefinition.model_validate(sensor_def)
        sensors.append(ViCareDerivedSensor(coordinator, definition, device, entry))

    circuits = coordinator.data.circuits if coordinator.data else [0]
    for circuit in circuits:
        for sensor_def in CIRCUIT_SENSORS:
            definition = SensorDefinition.model_validate(sensor_def)
            sensors.append(ViCareCircuitSensor(coordinator, definition, device, entry, circuit))

    for sensor_def in ENERGY_SENSORS:
        definition = EnergySensorDefinition.model_validate(sensor_def)
        sensors.append(ViCareEnergySensor(coordinator, definition, device, entry))

    _LOGGER.debug(f"Adding {len(sensors)} sensors for {device.cache_key}")
    async_add_entities(sensors)


class ViCareSensorBase(CoordinatorEntity[ViCareDashboardCoordinator], SensorEntity):
    """Coordinator-backed sensor built from a SensorDefinition."""

    def __init__(
        self,
        coordinator: ViCareDashboardCoordinator,
        definition: SensorDefinition,
        device: ViCareDeviceInfo,
        entry: ConfigEntry,
        unique_suffix: str | None = None,
    ):
        super().__init__(coordinator)
        self._definition = definition
        self._device = device
        self._entry = entry
        self._attr_native_unit_of_measurement = definition.unit
        self._attr_device_class = SensorDeviceClass(definition.device_class) if definition.device_class else None
        self._attr_state_class = SensorStateClass(definition.state_class) if definition.state_class else None
        self._attr_entity_category = EntityCategory.DIAGNOSTIC if definition.diagnostic else None
        self._attr_suggested_display_precision = definition.precision
        self._attr_unique_id = f"{entry.entry_id}_{unique_suffix or definition.key}"
        if not definition.translation_key:
            self._attr_name = definition.name
        else:
            self._attr_translation_key = definition.translation_key
        self._attr_has_entity_name = True
        self._attr_native_value = None
        if coordinator.data is not None:
            self._update_from_state(coordinator.data)

    @property
    def device_info(self) -> DeviceInfo:
        return DeviceInfo(
            identifiers={(DOMAIN, "_".join(self._device.cache_key))},
            name=self._device.display_name,
            manufacturer="Viessmann",
            model=self._device.model_id or None,
        )

    def _compute_value(self, state: DashboardState) -> Any:
        raise NotImplementedError

    def _update_from_state(self, state: DashboardState) -> None:
        value = self._compute_value(state)
        self._attr_native_value = value if is_number(value) else None

    @callback
    def _handle_coordinator_update(self) -> None:
        if self.coordinator.data is not None:
            self._update_from_state(self.coordinator.data)
        self.async_write_ha_state()


class ViCareKeyFeatureSensor(ViCareSensorBase):
    """Numeric key feature as a sensor; compounds and text never become a state."""

    def _compute_value(self, state: DashboardState) -> Any:
        feature = state.key_features.feature(self._definition.key)
        if not is_valid_numeric_value(feature):
            return None
        return numeric_value(feature)

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        state = self.coordinator.data
        if state is None:
            return None
        feature = state.key_features.feature(self._definition.key)
        attributes: dict[str, Any] = {
            "vendor_unit": feature.unit if feature is not None else None,
            "display_value": format_value(feature),
        }
        if self._definition.key == "primarySupplyTemp":
            attributes["label"] = state.primary_supply_label
        return attributes


class ViCareDerivedSensor(ViCareSensorBase):
    """Sensor fed by the calculators (ΔT, power, COP, compressor)."""

    def _compute_value(self, state: DashboardState) -> Any:
        return DERIVED_VALUES[self._definition.key](state)

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        state = self.coordinator.data
        if state is None or self._definition.key != "spreizung":
            return None
        spreizung = state.energy.spreizung
        return {
            "label": spreizung.label,
            "supply_temperature": spreizung.supply_temp,
            "return_temperature": spreizung.return_temp,
            "volumetric_flow": state.energy.volumetric_flow,
        }


class ViCareCircuitSensor(ViCareSensorBase):
    """Per-circuit sensor, currently the heating curve target supply."""

    def __init__(
        self,
        coordinator: ViCareDashboardCoordinator,
        definition: SensorDefinition,
        device: ViCareDeviceInfo,
        entry: ConfigEntry,
        circuit: int,
    ):
        self._circuit = circuit
        super().__init__(coordinator, definition, device, entry, unique_suffix=f"{definition.key}_{circuit}")
        self._attr_translation_placeholders = {"circuit": str(circuit)}

    def _compute_value(self, state: DashboardState) -> Any:
        return state.target_supply.get(self._circuit)

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        state = self.coordinator.data
        if state is None or self._circuit not in state.heating_curves:
            return None
        curve = state.heating_curves[self._circuit]
        return {
            "slope": curve.slope,
            "shift": curve.shift,
            "room_setpoint": curve.room_setpoint,
            "min_supply": curve.min_supply,
            "max_supply": curve.max_supply,
            "current_supply": curve.current_supply,
            "curve": _sampled_curve(curve),
        }


class ViCareEnergySensor(ViCareSensorBase):
    """Today's or this week's total of a consumption/production series."""

    _definition: EnergySensorDefinition

    def __init__(
        self,
        coordinator: ViCareDashboardCoordinator,
        definition: EnergySensorDefinition,
        device: ViCareDeviceInfo,
        entry: ConfigEntry,
    ):
        super().__init__(coordinator, definition, device, entry, unique_suffix=f"{definition.key}_{definition.period}")

    def _compute_value(self, state: DashboardState) -> Any:
        series = state.key_features.series(self._definition.key)
        if series is None:
            return None
        return series.current(self._definition.period, now=dt_util.utcnow())

    @property
    def extra_state_attributes(self) -> dict[str, Any] | None:
        state = self.coordinator.data
        if state is None:
            return None
        series = state.key_features.series(self._definition.key)
        if series is None:
            return None
        read_at = series.read_at(self._definition.period)
        return {
            "vendor_unit": series.unit(self._definition.period),
            "read_at": read_at.isoformat() if read_at is not None else None,
        }
