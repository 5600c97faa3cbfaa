"""Known output layouts per command.

Each tuple is a candidate list for :func:`nxapi_cli.decoding.shapes.select`.
Supporting a newly observed firmware layout means adding a Shape here.
"""

from __future__ import annotations

from typing import Any

from nxapi_cli.decoding.coerce import (
    SELF,
    Coercer,
    to_bool,
    to_float,
    to_int,
    to_str_list,
)
from nxapi_cli.decoding.shapes import Shape, each, field, record, table


def _uptime(days: int, hours: int, minutes: int, seconds: int) -> int:
    return max(0, ((days * 24 + hours) * 60 + minutes) * 60 + seconds)


_SHUT_WORDS = {"shutdown": True, "act/lshut": True, "sus/lshut": True, "noshutdown": False}
_SFP_WORDS = {"present": True, "not present": False, "absent": False}


def _flag(words: dict[str, bool]) -> Coercer:
    """Coercer reading device status words, then plain booleans."""

    def coerce(value: Any, path: str) -> bool:
        if isinstance(value, str) and value.strip().lower() in words:
            return words[value.strip().lower()]
        return to_bool(value, path)

    return coerce


_is_shutdown = _flag(_SHUT_WORDS)
_is_present = _flag(_SFP_WORDS)


# show version

KICKSTART = Shape("kickstart", (), (
    field("version", "kickstart_ver_str", "nxos_ver_str", "sys_ver_str"),
    field("file", "kick_file_name", "kickstart_image_file", "nxos_file_name"),
    field("compile_time", "kick_cmpl_time", "nxos_cmpl_time"),
))

_VERSION_COMMON = (
    field("hostname", "host_name"),
    field("processor_board_id", "proc_board_id"),
    field("chassis", "chassis_id"),
    field("cpu", "cpu_name"),
    field("memory_kb", "memory", coerce=to_int),
    field("memory_type", "mem_type"),
    field("manufacturer"),
    field("bios_version", "bios_ver_str"),
    field("kickstart_image", SELF, coerce=record("kickstart image", KICKSTART)),
    field("bootflash_kb", "bootflash_size", coerce=to_int),
    field(
        "uptime",
        "kern_uptm_days", "kern_uptm_hrs", "kern_uptm_mins", "kern_uptm_secs",
        coerce=to_int, combine=_uptime,
    ),
    field("last_reset_reason", "rr_reason"),
)

# Split kickstart/system images (NX-OS 5.x-7.x)
VERSION_1 = Shape("version.1", ("host_name", "kickstart_ver_str"), _VERSION_COMMON + (
    field("system_version", "sys_ver_str", "kickstart_ver_str"),
))

# Single nxos image (NX-OS 9.x and later)
VERSION_2 = Shape("version.2", ("host_name", "nxos_ver_str"), _VERSION_COMMON + (
    field("system_version", "nxos_ver_str"),
))

SYSTEM_INFO_SHAPES = (VERSION_1, VERSION_2)


# show interface

_IFACE_COMMON = (
    field("name", "interface"),
    field("state"),
    field("state_reason", "state_rsn_desc", "state_rsn"),
    field("admin_state"),
    field("description", "desc"),
)

ETHERNET_ROW = Shape("interface.ethernet", ("interface", "eth_hw_desc"), _IFACE_COMMON + (
    field("hardware", "eth_hw_desc"),
    field("mac_address", "eth_hw_addr"),
    field("ip_address", "eth_ip_addr"),
    field("ip_mask", "eth_ip_mask", coerce=to_int),
    field("mtu", "eth_mtu", coerce=to_int),
    field("bandwidth", "eth_bw", coerce=to_int),
    field("duplex", "eth_duplex"),
    field("speed", "eth_speed"),
    field("mode", "eth_mode"),
    field("link_flaps", "eth_reset_cntr", coerce=to_int),
    field("in_packets", "eth_inpkts", coerce=to_int),
    field("in_bytes", "eth_inbytes", coerce=to_int),
    field("out_packets", "eth_outpkts", coerce=to_int),
    field("out_bytes", "eth_outbytes", coerce=to_int),
    field("in_errors", "eth_inerr", coerce=to_int),
    field("out_errors", "eth_outerr", coerce=to_int),
    field("crc_errors", "eth_crc", coerce=to_int),
))

MGMT_ROW = Shape("interface.mgmt", ("interface", "vdc_lvl_in_pkts"), _IFACE_COMMON + (
    field("hardware", "eth_hw_desc"),
    field("mac_address", "eth_hw_addr"),
    field("ip_address", "eth_ip_addr"),
    field("ip_mask", "eth_ip_mask", coerce=to_int),
    field("mtu", "eth_mtu", coerce=to_int),
    field("bandwidth", "eth_bw", coerce=to_int),
    field("duplex", "eth_duplex"),
    field("speed", "eth_speed"),
    field("in_packets", "vdc_lvl_in_pkts", coerce=to_int),
    field("in_bytes", "vdc_lvl_in_bytes", coerce=to_int),
    field("out_packets", "vdc_lvl_out_pkts", coerce=to_int),
    field("out_bytes", "vdc_lvl_out_bytes", coerce=to_int),
))

SVI_ROW = Shape("interface.svi", ("interface", "svi_admin_state"), (
    field("name", "interface"),
    field("state", "svi_line_proto", "state"),
    field("state_reason", "svi_rsn_desc"),
    field("admin_state", "svi_admin_state"),
    field("description", "svi_desc", "desc"),
    field("hardware", "svi_hw_desc"),
    field("mac_address", "svi_mac"),
    field("ip_address", "svi_ip_addr"),
    field("ip_mask", "svi_ip_mask", coerce=to_int),
    field("mtu", "svi_mtu", coerce=to_int),
    field("bandwidth", "svi_bw", coerce=to_int),
    field("in_packets", "svi_ucast_pkts_in", coerce=to_int),
    field("in_bytes", "svi_ucast_bytes_in", coerce=to_int),
    field("out_packets", "svi_ucast_pkts_out", coerce=to_int),
    field("out_bytes", "svi_ucast_bytes_out", coerce=to_int),
))

LOOPBACK_ROW = Shape("interface.loopback", ("interface", "loop_in_pkts"), _IFACE_COMMON + (
    field("hardware", "eth_hw_desc"),
    field("ip_address", "eth_ip_addr"),
    field("ip_mask", "eth_ip_mask", coerce=to_int),
    field("mtu", "eth_mtu", coerce=to_int),
    field("bandwidth", "eth_bw", coerce=to_int),
    field("in_packets", "loop_in_pkts", coerce=to_int),
    field("in_bytes", "loop_in_bytes", coerce=to_int),
    field("out_packets", "loop_out_pkts", coerce=to_int),
    field("out_bytes", "loop_out_bytes", coerce=to_int),
    field("in_errors", "loop_in_errors", coerce=to_int),
    field("out_errors", "loop_out_errors", coerce=to_int),
))

GENERIC_ROW = Shape("interface.generic", ("interface",), _IFACE_COMMON)

_INTERFACE_ROWS = (ETHERNET_ROW, MGMT_ROW, SVI_ROW, LOOPBACK_ROW, GENERIC_ROW)

INTERFACES_1 = Shape("interfaces.1", ("TABLE_interface",), (
    field("items", "TABLE_interface", coerce=table("interface", "interface", *_INTERFACE_ROWS)),
))

# Row list without the TABLE_ wrapper
INTERFACES_2 = Shape("interfaces.2", ("ROW_interface",), (
    field("items", SELF, coerce=table("interface", "interface", *_INTERFACE_ROWS)),
))

INTERFACES_SHAPES = (INTERFACES_1, INTERFACES_2)


# show vlan

_VLAN_FIELDS = (
    field("id", "vlanshowbr-vlanid", "vlanshowbr-vlanid-utf", coerce=to_int),
    field("name", "vlanshowbr-vlanname"),
    field("state", "vlanshowbr-vlanstate"),
    field("shutdown", "vlanshowbr-shutstate", coerce=_is_shutdown),
    field("interfaces", "vlanshowplist-ifidx", coerce=to_str_list),
)

VLAN_ROW = Shape("vlan.1", ("vlanshowbr-vlanid",), _VLAN_FIELDS)
VLAN_ROW_UTF = Shape("vlan.2", ("vlanshowbr-vlanid-utf",), _VLAN_FIELDS)

VLANS_1 = Shape("vlans.1", ("TABLE_vlanbrief",), (
    field("items", "TABLE_vlanbrief", coerce=table("vlanbrief", "vlan", VLAN_ROW, VLAN_ROW_UTF)),
))

# "show vlan brief" layout of NX-OS 9.x
VLANS_2 = Shape("vlans.2", ("TABLE_vlanbriefxbrief",), (
    field(
        "items", "TABLE_vlanbriefxbrief",
        coerce=table("vlanbriefxbrief", "vlan", VLAN_ROW, VLAN_ROW_UTF),
    ),
))

VLANS_SHAPES = (VLANS_1, VLANS_2)


# show system resources

LOAD = Shape("load", (), (
    field("one_minute", "load_avg_1min", coerce=to_float),
    field("five_minutes", "load_avg_5min", coerce=to_float),
    field("fifteen_minutes", "load_avg_15min", coerce=to_float),
))

PROCESSES_1 = Shape("processes.1", ("processes_total",), (
    field("total", "processes_total", coerce=to_int),
    field("running", "processes_running", coerce=to_int),
))

PROCESSES_2 = Shape("processes.2", ("procs_total",), (
    field("total", "procs_total", coerce=to_int),
    field("running", "procs_running", coerce=to_int),
))

CPU_TOTAL = Shape("cpu_state", (), (
    field("user", "cpu_state_user", coerce=to_float),
    field("kernel", "cpu_state_kernel", coerce=to_float),
    field("idle", "cpu_state_idle", coerce=to_float),
))

CPU_ROW = Shape("cpu_usage", ("cpuid",), (
    field("id", "cpuid", coerce=to_int),
    field("user", coerce=to_float),
    field("kernel", coerce=to_float),
    field("idle", coerce=to_float),
))

MEMORY = Shape("memory", (), (
    field("total", "memory_usage_total", coerce=to_int),
    field("used", "memory_usage_used", coerce=to_int),
    field("free", "memory_usage_free", coerce=to_int),
    field("status", "current_memory_status"),
))

_RESOURCES_COMMON = (
    field("load", SELF, coerce=record("load average", LOAD)),
    field("processes", SELF, coerce=record("processes", PROCESSES_1, PROCESSES_2)),
    field("cpu_total", SELF, coerce=record("cpu state", CPU_TOTAL)),
    field("memory", SELF, coerce=record("memory", MEMORY)),
)

RESOURCES_1 = Shape("resources.1", ("processes_total",), _RESOURCES_COMMON + (
    field("cpus", "TABLE_cpu_usage", coerce=table("cpu_usage", "cpu", CPU_ROW)),
))

# Older firmware: abbreviated process counters, per-CPU table named TABLE_cpu
RESOURCES_2 = Shape("resources.2", ("procs_total",), _RESOURCES_COMMON + (
    field("cpus", "TABLE_cpu", coerce=table("cpu", "cpu", CPU_ROW)),
))

SYSTEM_RESOURCES_SHAPES = (RESOURCES_1, RESOURCES_2)


# show environment

FAN_ROW = Shape("fan", ("fanname",), (
    field("name", "fanname"),
    field("model", "fanmodel"),
    field("hardware_version", "fanhwver"),
    field("direction", "fandir"),
    field("status", "fanstatus"),
))

PSU_ROW = Shape("power_supply", ("psnum",), (
    field("number", "psnum", coerce=to_int),
    field("model", "psmodel"),
    field("output_watts", "actual_out", "watts", coerce=to_float),
    field("input_watts", "actual_input", "actual_in", coerce=to_float),
    field("capacity_watts", "tot_capa", "total_capacity", coerce=to_float),
    field("status", "ps_status", "status"),
))

SENSOR_ROW = Shape("sensor", ("sensor",), (
    field("module", "tempmod", coerce=to_int),
    field("name", "sensor"),
    field("major_threshold", "majthres", coerce=to_float),
    field("minor_threshold", "minthres", coerce=to_float),
    field("current", "curtemp", coerce=to_float),
    field("status", "alarmstatus"),
))

# Fan and power tables grouped under fandetails/powersup
ENVIRONMENT_1 = Shape("environment.1", ("fandetails",), (
    field("fans", "fandetails.TABLE_faninfo", coerce=table("faninfo", "fan", FAN_ROW)),
    field(
        "power_supplies", "powersup.TABLE_psinfo",
        coerce=table("psinfo", "power supply", PSU_ROW),
    ),
    field("sensors", "TABLE_tempinfo", coerce=table("tempinfo", "sensor", SENSOR_ROW)),
))

# Flat layout: every table at the top level
ENVIRONMENT_2 = Shape("environment.2", ("TABLE_faninfo",), (
    field("fans", "TABLE_faninfo", coerce=table("faninfo", "fan", FAN_ROW)),
    field("power_supplies", "TABLE_psinfo", coerce=table("psinfo", "power supply", PSU_ROW)),
    field("sensors", "TABLE_tempinfo", coerce=table("tempinfo", "sensor", SENSOR_ROW)),
))

ENVIRONMENT_SHAPES = (ENVIRONMENT_1, ENVIRONMENT_2)


# show interface transceiver details

LANE = Shape("lane", (), (
    field("lane", "lane_number", coerce=to_int),
    field("temperature", coerce=to_float),
    field("voltage", coerce=to_float),
    field("current", coerce=to_float),
    field("tx_power", "tx_pwr", coerce=to_float),
    field("rx_power", "rx_pwr", coerce=to_float),
))

_XCVR_COMMON = (
    field("interface"),
    field("present", "sfp", coerce=_is_present),
    field("type"),
    field("vendor", "name"),
    field("part_number", "partnum"),
    field("revision", "rev"),
    field("serial_number", "serialnum"),
    field("bitrate", "nom_bitrate", coerce=to_int),
)

# Optical readings per lane under TABLE_lane
XCVR_LANES_ROW = Shape("transceiver.lanes", ("interface", "TABLE_lane"), _XCVR_COMMON + (
    field("lanes", "TABLE_lane", coerce=table("lane", "lane", LANE)),
))

# Single-lane optics reporting readings on the row itself
XCVR_FLAT_ROW = Shape("transceiver.flat", ("interface", "temperature"), _XCVR_COMMON + (
    field("lanes", SELF, coerce=each("lane", LANE)),
))

XCVR_ROW = Shape("transceiver.basic", ("interface",), _XCVR_COMMON)

TRANSCEIVERS_1 = Shape("transceivers.1", ("TABLE_interface",), (
    field(
        "items", "TABLE_interface",
        coerce=table("interface", "transceiver", XCVR_LANES_ROW, XCVR_FLAT_ROW, XCVR_ROW),
    ),
))

TRANSCEIVERS_SHAPES = (TRANSCEIVERS_1,)
