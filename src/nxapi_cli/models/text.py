"""Free-text command outputs."""

from __future__ import annotations

from pydantic import BaseModel


class RunningConfig(BaseModel):
    """Output of ``show running-config``, verbatim."""

    text: str = ""


class BgpSummary(BaseModel):
    """Output of ``show ip bgp summary vrf all``, verbatim."""

    text: str = ""
