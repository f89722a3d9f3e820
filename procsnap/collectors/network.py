"""
procsnap.collectors.network
AUTHOR: carter-vin

Network collectors
- per-interface byte/packet counters from /proc/net/dev
- interface enumeration (addresses, MAC) via psutil
"""

from __future__ import annotations

import ipaddress
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import psutil

from procsnap.errors import MalformedInput, SourceUnavailable
from procsnap.procfs import NETWORK_STAT_FILE, read_source
from procsnap.tokenize import Content, parse_int, split_fields, split_key_value, split_lines

SOURCE = "net/dev"
INTERFACES_SOURCE = "interfaces"

HEADER_LINES = 2

# column index (after the colon) -> NetworkStat attribute
RX_BYTES_COLUMN = 0
RX_PACKETS_COLUMN = 1
TX_BYTES_COLUMN = 8
TX_PACKETS_COLUMN = 9
MIN_COLUMNS = TX_PACKETS_COLUMN + 1


@dataclass(frozen=True)
class NetworkStat:
    interface: str
    received_bytes: int
    received_packets: int
    transmitted_bytes: int
    transmitted_packets: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "interface": self.interface,
            "receivedBytes": self.received_bytes,
            "receivedPackets": self.received_packets,
            "transmittedBytes": self.transmitted_bytes,
            "transmittedPackets": self.transmitted_packets,
        }


@dataclass(frozen=True)
class NetworkInterface:
    name: str
    addresses: list[str] = field(default_factory=list)
    hardware_address: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "addresses": list(self.addresses),
            "mac": self.hardware_address,
        }


def parse_network_stats(data: Content) -> list[NetworkStat]:
    """
    Parse /proc/net/dev into one NetworkStat per interface

    Layout: two header lines, then `iface: rx_bytes rx_packets ... tx_bytes tx_packets ...`
    """
    stats: list[NetworkStat] = []
    for i, line in enumerate(split_lines(data)):
        if i < HEADER_LINES or not line.strip():
            continue

        name, rest = split_key_value(line, SOURCE)
        columns = split_fields(rest)
        if len(columns) < MIN_COLUMNS:
            raise MalformedInput(SOURCE, f"{name} expects at least {MIN_COLUMNS} columns, got {len(columns)}")

        stats.append(
            NetworkStat(
                interface=name,
                received_bytes=parse_int(columns[RX_BYTES_COLUMN], SOURCE, f"{name} rx bytes"),
                received_packets=parse_int(columns[RX_PACKETS_COLUMN], SOURCE, f"{name} rx packets"),
                transmitted_bytes=parse_int(columns[TX_BYTES_COLUMN], SOURCE, f"{name} tx bytes"),
                transmitted_packets=parse_int(columns[TX_PACKETS_COLUMN], SOURCE, f"{name} tx packets"),
            )
        )
    return stats


def get_network_stats(*, proc_root: Path | str | None = None) -> list[NetworkStat]:
    """Read and parse /proc/net/dev."""
    return parse_network_stats(read_source(SOURCE, NETWORK_STAT_FILE, proc_root))


def format_address(address: str, netmask: str | None) -> str:
    """
    Render an IP address in CIDR form (`10.0.0.5/24`)

    IPv6 zone suffixes (`fe80::1%eth0`) are dropped; without a netmask the bare address is returned
    """
    address = address.split("%", 1)[0]
    if not netmask:
        return address
    prefix = bin(int(ipaddress.ip_address(netmask))).count("1")
    return f"{address}/{prefix}"


def get_network_interfaces() -> list[NetworkInterface]:
    """
    Enumerate interfaces with their IPv4/IPv6 addresses and MAC

    Interfaces that are up but carry no address are still listed
    """
    try:
        addrs = psutil.net_if_addrs()
        stats = psutil.net_if_stats()
    except OSError as e:
        raise SourceUnavailable(INTERFACES_SOURCE, None, str(e)) from e

    interfaces: list[NetworkInterface] = []
    names = list(addrs) + [name for name in stats if name not in addrs]
    for name in names:
        addresses: list[str] = []
        mac = ""
        for addr in addrs.get(name, []):
            if addr.family == psutil.AF_LINK:
                mac = addr.address
            elif addr.family in (socket.AF_INET, socket.AF_INET6):
                addresses.append(format_address(addr.address, addr.netmask))
        interfaces.append(NetworkInterface(name=name, addresses=addresses, hardware_address=mac))
    return interfaces
