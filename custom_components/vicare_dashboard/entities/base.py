"""Sensor definition models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class SensorDefinition(BaseModel):
    """Definition of a sensor backed by the dashboard state.

    Attributes:
        key: Logical key feature (or calculator) name the sensor reads.
        name: Fallback name when the translation is missing.
        translation_key: Key into ``entity.sensor`` of strings.json.
        unit: Home Assistant unit of measurement.
        device_class: Home Assistant sensor device class.
        state_class: Home Assistant state class.
        precision: Suggested display precision.
        diagnostic: Whether the sensor belongs to the diagnostic category.
    """

    model_config = {"frozen": True}

    key: str = Field(..., min_length=1, description="Logical key feature name")
    name: str = Field(..., description="Fallback display name")
    translation_key: str = Field(..., description="Translation key")
    unit: str | None = Field(default=None, description="Unit of measurement")
    device_class: str | None = Field(default=None, description="Sensor device class")
    state_class: str | None = Field(default=None, description="Sensor state class")
    precision: int | None = Field(default=None, ge=0, description="Suggested display precision")
    diagnostic: bool = Field(default=False, description="Diagnostic entity category")


class EnergySensorDefinition(SensorDefinition):
    """Sensor reading the current period of a history series."""

    period: Literal["day", "week"] = Field(..., description="History period, day is today")
