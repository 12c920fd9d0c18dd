"""Catalog of logical key features and where to find them.

Each entry maps a logical name to the dotted feature keys (most preferred
first) it is resolved from. Adding or removing a tracked feature is a data
change in this table; lookups by an unknown name fail loudly instead of
yielding a silent None.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

from ..constants import FeatureCategory


class FeatureSource(StrEnum):
    """How a key feature is resolved from the document."""

    FIND = "find"
    NESTED = "nested"
    RAW = "raw"
    EXISTS = "exists"


class KeyFeatureDefinition(BaseModel):
    """One row of the key feature catalog.

    Attributes:
        key: Logical name in the key feature record.
        source: Resolution strategy.
        candidates: Dotted feature names, most preferred first.
        patterns: Substring fallbacks, only for FIND.
        nested_property: Sub-property name, only for NESTED.
        categories: Categories checked by EXISTS.
    """

    model_config = {"frozen": True}

    key: str = Field(..., min_length=1)
    source: FeatureSource = FeatureSource.FIND
    candidates: tuple[str, ...] = Field(..., min_length=1)
    patterns: tuple[str, ...] = ()
    nested_property: str | None = None
    categories: tuple[FeatureCategory, ...] = ()

    @model_validator(mode="after")
    def _check_source_fields(self) -> KeyFeatureDefinition:
        if self.source is FeatureSource.NESTED and not self.nested_property:
            raise ValueError(f"{self.key}: nested lookups need a property name")
        if self.source is not FeatureSource.NESTED and self.nested_property:
            raise ValueError(f"{self.key}: nested_property is only valid for nested lookups")
        if self.patterns and self.source is not FeatureSource.FIND:
            raise ValueError(f"{self.key}: fallback patterns are only valid for find lookups")
        return self


def _find(key: str, *candidates: str, patterns: tuple[str, ...] = ()) -> KeyFeatureDefinition:
    return KeyFeatureDefinition(key=key, candidates=candidates, patterns=patterns)


def _nested(key: str, name: str, prop: str) -> KeyFeatureDefinition:
    return KeyFeatureDefinition(
        key=key, source=FeatureSource.NESTED, candidates=(name,), nested_property=prop
    )


def _raw(key: str, name: str) -> KeyFeatureDefinition:
    return KeyFeatureDefinition(key=key, source=FeatureSource.RAW, candidates=(name,))


KEY_FEATURE_DEFINITIONS: tuple[KeyFeatureDefinition, ...] = (
    # Temperatures
    _find("outsideTemp", "heating.sensors.temperature.outside", patterns=("outside",)),
    _find("calculatedOutsideTemp", "heating.calculated.temperature.outside"),
    _find("supplyTemp", "heating.circuits.0.sensors.temperature.supply"),
    _find("returnTemp", "heating.sensors.temperature.return"),
    _find("primarySupplyTemp", "heating.primaryCircuit.sensors.temperature.supply"),
    _find("primaryReturnTemp", "heating.primaryCircuit.sensors.temperature.return"),
    _find("secondarySupplyTemp", "heating.secondaryCircuit.sensors.temperature.supply"),
    _find(
        "secondaryReturnTemp",
        "heating.secondaryCircuit.sensors.temperature.return",
        "heating.sensors.temperature.return",
    ),
    _find(
        "bufferTemp",
        "heating.buffer.sensors.temperature.main",
        "heating.bufferCylinder.sensors.temperature.main",
    ),
    _find(
        "bufferTempTop",
        "heating.buffer.sensors.temperature.top",
        "heating.bufferCylinder.sensors.temperature.top",
    ),
    _find(
        "boilerTemp",
        "heating.boiler.sensors.temperature.commonSupply",
        "heating.boiler.temperature.current",
        "heating.boiler.temperature",
    ),
    _find("roomTemp", "heating.circuits.0.sensors.temperature.room"),
    _find("circuitTemp", "heating.circuits.0.temperature"),
    # Domestic hot water
    _find(
        "dhwTemp",
        "heating.dhw.sensors.temperature.hotWaterStorage",
        "heating.dhw.sensors.temperature.dhwCylinder",
    ),
    _find(
        "dhwCylinderMiddleTemp",
        "heating.dhw.sensors.temperature.hotWaterStorage.middle",
        "heating.dhw.sensors.temperature.dhwCylinder.middle",
    ),
    _find("dhwTarget", "heating.dhw.temperature.main"),
    _find("dhwTarget2", "heating.dhw.temperature.temp2"),
    _find("dhwStatus", "heating.dhw.operating.modes.active"),
    _find("dhwHysteresis", "heating.dhw.temperature.hysteresis"),
    _nested("dhwHysteresisSwitchOn", "heating.dhw.temperature.hysteresis", "switchOnValue"),
    _nested("dhwHysteresisSwitchOff", "heating.dhw.temperature.hysteresis", "switchOffValue"),
    # Heating curve
    _nested("heatingCurveSlope", "heating.circuits.0.heating.curve", "slope"),
    _nested("heatingCurveShift", "heating.circuits.0.heating.curve", "shift"),
    _nested("supplyTempMax", "heating.circuits.0.temperature.levels", "max"),
    _nested("supplyTempMin", "heating.circuits.0.temperature.levels", "min"),
    # Operating mode
    _find("operatingMode", "heating.circuits.0.operating.modes.active"),
    _find("operatingProgram", "heating.circuits.0.operating.programs.active"),
    # Compressor
    _nested("compressorActive", "heating.compressors.0", "active"),
    _find("compressorSpeed", "heating.compressors.0.speed.current"),
    _find("compressorPower", "heating.inverters.0.sensors.power.output"),
    _find("compressorCurrent", "heating.inverters.0.sensors.power.current"),
    _find("compressorInletTemp", "heating.compressors.0.sensors.temperature.inlet"),
    _find("compressorOutletTemp", "heating.compressors.0.sensors.temperature.outlet"),
    _find("compressorOilTemp", "heating.compressors.0.sensors.temperature.oil"),
    _find("compressorMotorTemp", "heating.compressors.0.sensors.temperature.motorChamber"),
    _find("compressorPressure", "heating.compressors.0.sensors.pressure.inlet"),
    _find("compressorPowerConsumptionCurrent", "heating.compressors.0.power.consumption.current"),
    _find("compressorHeatProductionCurrent", "heating.compressors.0.heat.production.current"),
    # Noise reduction
    _find("noiseReductionMode", "heating.noise.reduction.operating.programs.active"),
    KeyFeatureDefinition(
        key="noiseReductionExists",
        source=FeatureSource.EXISTS,
        candidates=("heating.noise.reduction.operating.programs.active",),
        categories=(FeatureCategory.OPERATING_MODES, FeatureCategory.OTHER),
    ),
    # Burner
    _find("burnerModulation", "heating.burners.0.modulation"),
    # Auxiliary sensors
    _find("volumetricFlow", "heating.sensors.volumetricFlow.allengra"),
    _find("pressure", "heating.sensors.pressure.supply"),
    _find("pumpInternal", "heating.boiler.pumps.internal.current"),
    _find("fan0", "heating.primaryCircuit.fans.0.current"),
    _find("fan1", "heating.primaryCircuit.fans.1.current"),
    # Efficiency
    _find("copTotal", "heating.cop.total"),
    _find("copHeating", "heating.cop.heating"),
    _find("copDhw", "heating.cop.dhw"),
    _find("copCooling", "heating.cop.cooling"),
    _find("scop", "heating.scop.total", "heating.spf.total"),
    _find("scopHeating", "heating.scop.heating", "heating.spf.heating"),
    _find("scopDhw", "heating.scop.dhw", "heating.spf.dhw"),
    _find("seerCooling", "heating.seer.cooling"),
    # Efficiency per use case: live COP, else the seasonal figure
    _find("efficiencyTotal", "heating.cop.total", "heating.scop.total", "heating.spf.total"),
    _find("efficiencyHeating", "heating.cop.heating", "heating.scop.heating", "heating.spf.heating"),
    _find("efficiencyDhw", "heating.cop.dhw", "heating.scop.dhw", "heating.spf.dhw"),
    _find("efficiencyCooling", "heating.cop.cooling", "heating.seer.cooling"),
    # Valves and secondary heat generator
    _find("fourWayValve", "heating.valves.fourThreeWay.position"),
    _find(
        "secondaryHeater",
        "heating.secondaryHeatGenerator.state",
        "heating.secondaryHeatGenerator.status",
    ),
    _find("secondaryHeatGeneratorStatus", "heating.secondaryHeatGenerator.status"),
    _nested("fanRing", "heating.heater.fanRing", "active"),
    _nested("condensatePan", "heating.heater.condensatePan", "active"),
    # Hybrid control
    _find("hybridElectricityPriceLow", "heating.secondaryHeatGenerator.electricity.price.low"),
    _find("hybridElectricityPriceNormal", "heating.secondaryHeatGenerator.electricity.price.normal"),
    _find("hybridHeatPumpEnergyFactor", "heating.secondaryHeatGenerator.electricity.energyFactor"),
    _find("hybridFossilEnergyFactor", "heating.secondaryHeatGenerator.fossil.energyFactor"),
    _find("hybridFossilPriceLow", "heating.secondaryHeatGenerator.fossil.price.low"),
    _find("hybridFossilPriceNormal", "heating.secondaryHeatGenerator.fossil.price.normal"),
    _find("hybridControlStrategy", "heating.secondaryHeatGenerator.control.strategy"),
    # Refrigerant circuit
    _find("evaporatorTemp", "heating.evaporators.0.sensors.temperature.liquid"),
    _find("evaporatorOverheat", "heating.evaporators.0.sensors.temperature.overheat"),
    _find("condensorTemp", "heating.condensors.0.sensors.temperature.liquid"),
    _find("economizerTemp", "heating.economizers.0.sensors.temperature.liquid"),
    _find("inverterTemp", "heating.inverters.0.sensors.temperature.powerModule"),
    # Device identity
    _find("deviceSerial", "device.serial"),
    _find("deviceType", "device.type"),
    _find("deviceVariant", "device.variant", "heating.device.variant"),
    _find("deviceWiFi", "tcu.wifi"),
    _find("deviceName", "device.name"),
    # Compressor statistics
    _find("compressorStats0", "heating.compressors.0.statistics"),
    _find("compressorStats1", "heating.compressors.1.statistics"),
    # Consumption and production history arrays
    _raw("powerConsumptionDhw", "heating.power.consumption.dhw"),
    _raw("powerConsumptionHeating", "heating.power.consumption.heating"),
    _raw("powerConsumptionTotal", "heating.power.consumption.total"),
    _raw("heatProductionDhw", "heating.heat.production.dhw"),
    _raw("heatProductionHeating", "heating.heat.production.heating"),
    _raw("powerConsumptionSummaryDhw", "heating.power.consumption.summary.dhw"),
    _raw("powerConsumptionSummaryHeating", "heating.power.consumption.summary.heating"),
    _raw("heatProductionSummaryDhw", "heating.heat.production.summary.dhw"),
    _raw("heatProductionSummaryHeating", "heating.heat.production.summary.heating"),
    _raw("compressorPowerConsumptionDhw", "heating.compressors.0.power.consumption.dhw.week"),
    _raw("compressorPowerConsumptionHeating", "heating.compressors.0.power.consumption.heating.week"),
    _raw("compressorHeatProductionDhw", "heating.compressors.0.heat.production.dhw.week"),
    _raw("compressorHeatProductionHeating", "heating.compressors.0.heat.production.heating.week"),
    _raw("compressorHeatProductionCooling", "heating.compressors.0.heat.production.cooling.week"),
    _raw("gasConsumptionDhw", "heating.gas.consumption.dhw"),
    _raw("gasConsumptionHeating", "heating.gas.consumption.heating"),
)


def _index(definitions: tuple[KeyFeatureDefinition, ...]) -> dict[str, KeyFeatureDefinition]:
    index: dict[str, KeyFeatureDefinition] = {}
    for definition in definitions:
        if definition.key in index:
            raise ValueError(f"Duplicate key feature definition: {definition.key}")
        index[definition.key] = definition
    return index


KEY_FEATURES_BY_NAME: dict[str, KeyFeatureDefinition] = _index(KEY_FEATURE_DEFINITIONS)
KEY_FEATURE_NAMES: frozenset[str] = frozenset(KEY_FEATURES_BY_NAME)
