"""Pydantic domain models for NX-API command output."""

from nxapi_cli.models.environment import Environment, Fan, PowerSupply, Sensor
from nxapi_cli.models.interface import Interface
from nxapi_cli.models.system import (
    CPU,
    KickstartImage,
    LoadAverage,
    Memory,
    Processes,
    SystemInfo,
    SystemResources,
)
from nxapi_cli.models.text import BgpSummary, RunningConfig
from nxapi_cli.models.transceiver import Transceiver, TransceiverLane
from nxapi_cli.models.vlan import Vlan

__all__ = [
    "CPU",
    "BgpSummary",
    "Environment",
    "Fan",
    "Interface",
    "KickstartImage",
    "LoadAverage",
    "Memory",
    "PowerSupply",
    "Processes",
    "RunningConfig",
    "Sensor",
    "SystemInfo",
    "SystemResources",
    "Transceiver",
    "TransceiverLane",
    "Vlan",
]
