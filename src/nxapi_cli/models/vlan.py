"""VLAN model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Vlan(BaseModel):
    """One row of ``show vlan``."""

    id: int
    name: str = ""
    state: str = ""
    shutdown: bool = False
    interfaces: list[str] = Field(default_factory=list)
