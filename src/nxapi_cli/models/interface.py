"""Interface model."""

from __future__ import annotations

from pydantic import BaseModel


class Interface(BaseModel):
    """One row of ``show interface``.

    Physical ports, SVIs, loopbacks and the management port report different
    field sets; counters a given interface type does not report stay at 0.
    """

    name: str
    state: str = ""
    state_reason: str = ""
    admin_state: str = ""
    description: str = ""
    hardware: str = ""
    mac_address: str = ""
    ip_address: str = ""
    ip_mask: int = 0
    mtu: int = 0
    bandwidth: int = 0
    duplex: str = ""
    speed: str = ""
    mode: str = ""
    link_flaps: int = 0
    in_packets: int = 0
    in_bytes: int = 0
    out_packets: int = 0
    out_bytes: int = 0
    in_errors: int = 0
    out_errors: int = 0
    crc_errors: int = 0
