"""Transceiver models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TransceiverLane(BaseModel):
    """Digital optical monitoring readings for one lane."""

    lane: int = 0
    temperature: float = 0.0
    voltage: float = 0.0
    current: float = 0.0
    tx_power: float = 0.0
    rx_power: float = 0.0


class Transceiver(BaseModel):
    """One interface of ``show interface transceiver details``."""

    interface: str
    present: bool = False
    type: str = ""
    vendor: str = ""
    part_number: str = ""
    revision: str = ""
    serial_number: str = ""
    bitrate: int = 0
    lanes: list[TransceiverLane] = Field(default_factory=list)
