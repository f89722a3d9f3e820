"""
Contract tests for network collectors
"""

import socket
from collections import namedtuple

import psutil
import pytest

from conftest import read_fixture
from procsnap.collectors import network
from procsnap.collectors.network import (
    NetworkStat,
    format_address,
    get_network_interfaces,
    get_network_stats,
    parse_network_stats,
)
from procsnap.errors import MalformedInput, SourceUnavailable

Addr = namedtuple("Addr", ["family", "address", "netmask", "broadcast", "ptp"])

HEADER = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast|bytes    packets errs drop fifo colls carrier compressed\n"
)


def test_parse_network_stats_positional_columns() -> None:
    """
    Columns 0, 1, 8, 9 are rx bytes, rx packets, tx bytes, tx packets
    """
    stats = parse_network_stats(HEADER + "eth0: 1000 10 0 0 0 0 0 0 2000 20 0 0 0 0 0 0\n")

    assert stats == [
        NetworkStat(
            interface="eth0",
            received_bytes=1000,
            received_packets=10,
            transmitted_bytes=2000,
            transmitted_packets=20,
        )
    ]


def test_parse_network_stats_fixture_order() -> None:
    stats = parse_network_stats(read_fixture("net/dev"))

    assert [s.interface for s in stats] == ["lo", "eth0"]
    assert stats[0].to_dict() == {
        "interface": "lo",
        "receivedBytes": 52840,
        "receivedPackets": 640,
        "transmittedBytes": 52840,
        "transmittedPackets": 640,
    }


@pytest.mark.parametrize(
    "row",
    [
        "eth0 1000 10 0 0 0 0 0 0 2000 20\n",
        "eth0: 1: 2\n",
        "eth0: 1000 10 0 0 0 0 0 0 2000\n",
        "eth0: 1000 ten 0 0 0 0 0 0 2000 20\n",
    ],
)
def test_malformed_network_row(row: str) -> None:
    with pytest.raises(MalformedInput) as excinfo:
        parse_network_stats(HEADER + row)
    assert excinfo.value.source == "net/dev"


def test_get_network_stats_from_proc_root(proc_root) -> None:
    assert get_network_stats(proc_root=proc_root)[1].transmitted_packets == 20


def test_format_address_cidr() -> None:
    assert format_address("192.168.1.5", "255.255.255.0") == "192.168.1.5/24"
    assert format_address("fe80::1%eth0", "ffff:ffff:ffff:ffff::") == "fe80::1/64"
    assert format_address("10.0.0.1", None) == "10.0.0.1"


def test_get_network_interfaces_maps_psutil(monkeypatch) -> None:
    """
    AF_LINK becomes the MAC, IP families become CIDR strings, address-less interfaces still listed
    """
    addrs = {
        "eth0": [
            Addr(socket.AF_INET, "10.1.2.3", "255.255.0.0", None, None),
            Addr(psutil.AF_LINK, "aa:bb:cc:dd:ee:ff", None, None, None),
        ],
    }
    monkeypatch.setattr(network.psutil, "net_if_addrs", lambda: addrs)
    monkeypatch.setattr(network.psutil, "net_if_stats", lambda: {"eth0": object(), "wg0": object()})

    interfaces = get_network_interfaces()

    assert [i.to_dict() for i in interfaces] == [
        {"name": "eth0", "addresses": ["10.1.2.3/16"], "mac": "aa:bb:cc:dd:ee:ff"},
        {"name": "wg0", "addresses": [], "mac": ""},
    ]


def test_get_network_interfaces_os_error(monkeypatch) -> None:
    def _boom():
        raise PermissionError("denied")

    monkeypatch.setattr(network.psutil, "net_if_addrs", _boom)

    with pytest.raises(SourceUnavailable):
        get_network_interfaces()
