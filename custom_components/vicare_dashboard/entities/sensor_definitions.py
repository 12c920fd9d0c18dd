KEY_FEATURE_SENSORS = [
    # Temperatures
    {
        "key": "outsideTemp",
        "name": "Outside Temperature",
        "translation_key": "outside_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "calculatedOutsideTemp",
        "name": "Calculated Outside Temperature",
        "translation_key": "calculated_outside_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "supplyTemp",
        "name": "Supply Temperature",
        "translation_key": "supply_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "returnTemp",
        "name": "Return Temperature",
        "translation_key": "return_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "primarySupplyTemp",
        "name": "Primary Supply Temperature",
        "translation_key": "primary_supply_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "primaryReturnTemp",
        "name": "Primary Return Temperature",
        "translation_key": "primary_return_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "secondarySupplyTemp",
        "name": "Secondary Supply Temperature",
        "translation_key": "secondary_supply_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "secondaryReturnTemp",
        "name": "Secondary Return Temperature",
        "translation_key": "secondary_return_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "bufferTemp",
        "name": "Buffer Temperature",
        "translation_key": "buffer_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "bufferTempTop",
        "name": "Buffer Top Temperature",
        "translation_key": "buffer_top_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "boilerTemp",
        "name": "Boiler Temperature",
        "translation_key": "boiler_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "roomTemp",
        "name": "Room Temperature",
        "translation_key": "room_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    # Domestic hot water
    {
        "key": "dhwTemp",
        "name": "Hot Water Temperature",
        "translation_key": "dhw_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "dhwCylinderMiddleTemp",
        "name": "Hot Water Cylinder Middle Temperature",
        "translation_key": "dhw_cylinder_middle_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "dhwTarget",
        "name": "Hot Water Target",
        "translation_key": "dhw_target",
        "unit": "°C",
        "device_class": "temperature",
    },
    {
        "key": "dhwTarget2",
        "name": "Hot Water Target 2",
        "translation_key": "dhw_target_2",
        "unit": "°C",
        "device_class": "temperature",
    },
    {
        "key": "dhwHysteresisSwitchOn",
        "name": "Hot Water Hysteresis On",
        "translation_key": "dhw_hysteresis_switch_on",
        "unit": "K",
        "diagnostic": True,
    },
    {
        "key": "dhwHysteresisSwitchOff",
        "name": "Hot Water Hysteresis Off",
        "translation_key": "dhw_hysteresis_switch_off",
        "unit": "K",
        "diagnostic": True,
    },
    # Heating curve
    {
        "key": "heatingCurveSlope",
        "name": "Heating Curve Slope",
        "translation_key": "heating_curve_slope",
        "precision": 1,
        "diagnostic": True,
    },
    {
        "key": "heatingCurveShift",
        "name": "Heating Curve Shift",
        "translation_key": "heating_curve_shift",
        "unit": "K",
        "diagnostic": True,
    },
    {
        "key": "supplyTempMax",
        "name": "Maximum Supply Temperature",
        "translation_key": "supply_temperature_max",
        "unit": "°C",
        "device_class": "temperature",
        "diagnostic": True,
    },
    {
        "key": "supplyTempMin",
        "name": "Minimum Supply Temperature",
        "translation_key": "supply_temperature_min",
        "unit": "°C",
        "device_class": "temperature",
        "diagnostic": True,
    },
    # Compressor
    {
        "key": "compressorPower",
        "name": "Inverter Output Power",
        "translation_key": "inverter_output_power",
        "unit": "W",
        "device_class": "power",
        "state_class": "measurement",
        "precision": 0,
    },
    {
        "key": "compressorCurrent",
        "name": "Inverter Current",
        "translation_key": "inverter_current",
        "unit": "A",
        "device_class": "current",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "compressorInletTemp",
        "name": "Compressor Inlet Temperature",
        "translation_key": "compressor_inlet_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "compressorOutletTemp",
        "name": "Compressor Outlet Temperature",
        "translation_key": "compressor_outlet_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "compressorOilTemp",
        "name": "Compressor Oil Temperature",
        "translation_key": "compressor_oil_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "compressorMotorTemp",
        "name": "Compressor Motor Temperature",
        "translation_key": "compressor_motor_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "compressorPressure",
        "name": "Compressor Inlet Pressure",
        "translation_key": "compressor_inlet_pressure",
        "unit": "bar",
        "device_class": "pressure",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "compressorPowerConsumptionCurrent",
        "name": "Compressor Power Consumption",
        "translation_key": "compressor_power_consumption",
        "unit": "kW",
        "device_class": "power",
        "state_class": "measurement",
        "precision": 2,
    },
    # Burner and auxiliary sensors
    {
        "key": "burnerModulation",
        "name": "Burner Modulation",
        "translation_key": "burner_modulation",
        "unit": "%",
        "state_class": "measurement",
    },
    {
        "key": "volumetricFlow",
        "name": "Volumetric Flow",
        "translation_key": "volumetric_flow",
        "unit": "L/h",
        "device_class": "volume_flow_rate",
        "state_class": "measurement",
        "precision": 0,
    },
    {
        "key": "pressure",
        "name": "System Pressure",
        "translation_key": "system_pressure",
        "unit": "bar",
        "device_class": "pressure",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "pumpInternal",
        "name": "Internal Pump",
        "translation_key": "internal_pump",
        "unit": "%",
        "state_class": "measurement",
    },
    {
        "key": "fan0",
        "name": "Fan 1",
        "translation_key": "fan_1",
        "unit": "%",
        "state_class": "measurement",
    },
    {
        "key": "fan1",
        "name": "Fan 2",
        "translation_key": "fan_2",
        "unit": "%",
        "state_class": "measurement",
    },
    # Efficiency
    {
        "key": "efficiencyTotal",
        "name": "Efficiency Total",
        "translation_key": "efficiency_total",
        "state_class": "measurement",
        "precision": 2,
    },
    {
        "key": "efficiencyHeating",
        "name": "Efficiency Heating",
        "translation_key": "efficiency_heating",
        "state_class": "measurement",
        "precision": 2,
    },
    {
        "key": "efficiencyDhw",
        "name": "Efficiency Hot Water",
        "translation_key": "efficiency_dhw",
        "state_class": "measurement",
        "precision": 2,
    },
    {
        "key": "efficiencyCooling",
        "name": "Efficiency Cooling",
        "translation_key": "efficiency_cooling",
        "state_class": "measurement",
        "precision": 2,
    },
    # Refrigerant circuit
    {
        "key": "evaporatorTemp",
        "name": "Evaporator Temperature",
        "translation_key": "evaporator_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
        "diagnostic": True,
    },
    {
        "key": "evaporatorOverheat",
        "name": "Evaporator Overheat",
        "translation_key": "evaporator_overheat",
        "unit": "K",
        "state_class": "measurement",
        "precision": 1,
        "diagnostic": True,
    },
    {
        "key": "condensorTemp",
        "name": "Condenser Temperature",
        "translation_key": "condenser_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
        "diagnostic": True,
    },
    {
        "key": "economizerTemp",
        "name": "Economizer Temperature",
        "translation_key": "economizer_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
        "diagnostic": True,
    },
    {
        "key": "inverterTemp",
        "name": "Inverter Temperature",
        "translation_key": "inverter_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
        "diagnostic": True,
    },
]

DERIVED_SENSORS = [
    {
        "key": "spreizung",
        "name": "Spreizung",
        "translation_key": "spreizung",
        "unit": "K",
        "state_class": "measurement",
        "precision": 1,
    },
    {
        "key": "thermalPower",
        "name": "Thermal Power",
        "translation_key": "thermal_power",
        "unit": "W",
        "device_class": "power",
        "state_class": "measurement",
        "precision": 0,
    },
    {
        "key": "electricalPower",
        "name": "Electrical Power",
        "translation_key": "electrical_power",
        "unit": "W",
        "device_class": "power",
        "state_class": "measurement",
        "precision": 0,
    },
    {
        "key": "cop",
        "name": "Current COP",
        "translation_key": "current_cop",
        "state_class": "measurement",
        "precision": 2,
    },
    {
        "key": "compressorRpm",
        "name": "Compressor Speed",
        "translation_key": "compressor_speed",
        "unit": "rpm",
        "state_class": "measurement",
        "precision": 0,
    },
    {
        "key": "compressorLoad",
        "name": "Compressor Load",
        "translation_key": "compressor_load",
        "unit": "%",
        "state_class": "measurement",
    },
    {
        "key": "compressorHours",
        "name": "Compressor Hours",
        "translation_key": "compressor_hours",
        "unit": "h",
        "device_class": "duration",
        "state_class": "total_increasing",
        "diagnostic": True,
    },
    {
        "key": "compressorStarts",
        "name": "Compressor Starts",
        "translation_key": "compressor_starts",
        "state_class": "total_increasing",
        "diagnostic": True,
    },
]

CIRCUIT_SENSORS = [
    {
        "key": "targetSupplyTemp",
        "name": "Target Supply Temperature",
        "translation_key": "target_supply_temperature",
        "unit": "°C",
        "device_class": "temperature",
        "state_class": "measurement",
        "precision": 1,
    },
]

# Running totals of the consumption and production history, day is today
ENERGY_SENSORS = [
    {
        "key": "powerConsumptionTotal",
        "name": "Power Consumption Today",
        "translation_key": "power_consumption_today",
        "period": "day",
        "unit": "kWh",
        "device_class": "energy",
        "state_class": "total_increasing",
        "precision": 1,
    },
    {
        "key": "powerConsumptionTotal",
        "name": "Power Consumption This Week",
        "translation_key": "power_consumption_this_week",
        "period": "week",
        "unit": "kWh",
        "device_class": "energy",
        "state_class": "total_increasing",
        "precision": 1,
    },
    {
        "key": "powerConsumptionHeating",
        "name": "Power Consumption Heating Today",
        "translation_key": "power_consumption_heating_today",
        "period": "day",
        "unit": "kWh",
        "device_class": "energy",
        "state_class": "total_increasing",
        "precision": 1,
    },
    {
        "key": "powerConsumptionHeating",
        "name": "Power Consumption Heating This Week",
        "translation_key": "power_consumption_heating_this_week",
        "period": "week",
        "unit": "kWh",
        "device_class": "energy",
        "state_class": "total_increasing",
        "precision": 1,
    },
    {
        "key": "powerConsumptionDhw",
        "name": "Power Consumption Hot Water Today",
        "translation_key": "power_consumption_dhw_today",
        "period": "day",
        "unit": "kWh",
        "device_class": "energy",
        "state_class": "total_increasing",
        "precision": 1,
    },
    {
        "key": "powerConsumptionDhw",
        "name": "Power Consumption Hot Water This Week",
        "translation_key": "power_consumption_dhw_this_week",
        "period": "week",
        "unit": "kWh",
        "device_class": "energy",
        "state_class": "total_increasing",
        "precision": 1,
    },
    {
        "key": "heatProductionHeating",
        "name": "Heat Production Heating Today",
        "translation_key": "heat_production_heating_today",
        "period": "day",
        "unit": "kWh",
        "device_class": "energy",
        "state_class": "total_increasing",
        "precision": 1,
    },
    {
        "key": "heatProductionHeating",
        "name": "Heat Production Heating This Week",
        "translation_key": "heat_production_heating_this_week",
        "period": "week",
        "unit": "kWh",
        "device_class": "energy",
        "state_class": "total_increasing",
        "precision": 1,
    },
    {
        "key": "heatProductionDhw",
        "name": "Heat Production Hot Water Today",
        "translation_key": "heat_production_dhw_today",
        "period": "day",
        "unit": "kWh",
        "device_class": "energy",
        "state_class": "total_increasing",
        "precision": 1,
    },
    {
        "key": "heatProductionDhw",
        "name": "Heat Production Hot Water This Week",
        "translation_key": "heat_production_dhw_this_week",
        "period": "week",
        "unit": "kWh",
        "device_class": "energy",
        "state_class": "total_increasing",
        "precision": 1,
    },
]
