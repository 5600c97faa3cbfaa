"""System information and resource models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class KickstartImage(BaseModel):
    """Boot image details."""

    version: str = ""
    file: str = ""
    compile_time: str = ""


class SystemInfo(BaseModel):
    """Output of ``show version``."""

    hostname: str = ""
    processor_board_id: str = ""
    chassis: str = ""
    cpu: str = ""
    memory_kb: int = 0
    memory_type: str = ""
    manufacturer: str = ""
    bios_version: str = ""
    system_version: str = ""
    kickstart_image: KickstartImage = Field(default_factory=KickstartImage)
    bootflash_kb: int = 0
    uptime: int = Field(default=0, ge=0, description="Kernel uptime in seconds")
    last_reset_reason: str = ""


class CPU(BaseModel):
    """Per-core utilization, in percent."""

    id: int = 0
    user: float = 0.0
    kernel: float = 0.0
    idle: float = 0.0


class Processes(BaseModel):
    total: int = 0
    running: int = 0


class Memory(BaseModel):
    """Memory usage in kilobytes."""

    total: int = 0
    used: int = 0
    free: int = 0
    status: str = ""


class LoadAverage(BaseModel):
    one_minute: float = 0.0
    five_minutes: float = 0.0
    fifteen_minutes: float = 0.0


class SystemResources(BaseModel):
    """Output of ``show system resources``."""

    load: LoadAverage = Field(default_factory=LoadAverage)
    processes: Processes = Field(default_factory=Processes)
    cpus: list[CPU] = Field(default_factory=list)
    cpu_total: CPU = Field(default_factory=CPU)
    memory: Memory = Field(default_factory=Memory)
