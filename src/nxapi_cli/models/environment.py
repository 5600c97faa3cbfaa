"""Environment (fans, power, temperature) models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Fan(BaseModel):
    name: str
    model: str = ""
    hardware_version: str = ""
    direction: str = ""
    status: str = ""


class PowerSupply(BaseModel):
    """A power supply unit; power values are in watts."""

    number: int = 0
    model: str = ""
    output_watts: float = 0.0
    input_watts: float = 0.0
    capacity_watts: float = 0.0
    status: str = ""


class Sensor(BaseModel):
    """A temperature sensor; thresholds and readings are in Celsius."""

    module: int = 0
    name: str = ""
    major_threshold: float = 0.0
    minor_threshold: float = 0.0
    current: float = 0.0
    status: str = ""


class Environment(BaseModel):
    """Output of ``show environment``."""

    fans: list[Fan] = Field(default_factory=list)
    power_supplies: list[PowerSupply] = Field(default_factory=list)
    sensors: list[Sensor] = Field(default_factory=list)
