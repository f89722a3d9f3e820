"""
procsnap.collectors.kernel
AUTHOR: carter-vin

Kernel accessors that need no text parsing
- sysinfo(2): uptime, RAM/swap totals, process count, load averages
- uname(2): kernel identity, including the NIS domain name os.uname() omits

Both are value-to-struct mappings; Linux only.
"""

from __future__ import annotations

import ctypes
import os
from dataclasses import dataclass
from typing import Any

from procsnap.collectors.load import Load
from procsnap.errors import SourceUnavailable

SYSINFO_SOURCE = "sysinfo"
UNAME_SOURCE = "uname"

# sysinfo(2) loads are fixed point with 16 fractional bits
LOAD_SCALE = float(1 << 16)

# glibc _UTSNAME_LENGTH on Linux
UTSNAME_LENGTH = 65


class _Sysinfo(ctypes.Structure):
    _fields_ = [
        ("uptime", ctypes.c_long),
        ("loads", ctypes.c_ulong * 3),
        ("totalram", ctypes.c_ulong),
        ("freeram", ctypes.c_ulong),
        ("sharedram", ctypes.c_ulong),
        ("bufferram", ctypes.c_ulong),
        ("totalswap", ctypes.c_ulong),
        ("freeswap", ctypes.c_ulong),
        ("procs", ctypes.c_ushort),
        ("pad", ctypes.c_ushort),
        ("totalhigh", ctypes.c_ulong),
        ("freehigh", ctypes.c_ulong),
        ("mem_unit", ctypes.c_uint),
        ("_f", ctypes.c_char * (20 - 2 * ctypes.sizeof(ctypes.c_long) - ctypes.sizeof(ctypes.c_int))),
    ]


_Buffer = ctypes.c_ubyte * UTSNAME_LENGTH


class _Utsname(ctypes.Structure):
    _fields_ = [
        ("sysname", _Buffer),
        ("nodename", _Buffer),
        ("release", _Buffer),
        ("version", _Buffer),
        ("machine", _Buffer),
        ("domainname", _Buffer),
    ]


@dataclass(frozen=True)
class SystemInformation:
    """
    sysinfo(2) snapshot

    - uptime: whole seconds since boot
    - memory fields in bytes (already multiplied by mem_unit)
    """

    uptime: int
    total_ram: int
    available_ram: int
    total_swap: int
    available_swap: int
    processes: int
    loads: Load

    @classmethod
    def from_raw(
        cls,
        *,
        uptime: int,
        loads: tuple[int, int, int],
        totalram: int,
        freeram: int,
        totalswap: int,
        freeswap: int,
        procs: int,
        mem_unit: int = 1,
    ) -> "SystemInformation":
        unit = mem_unit or 1
        return cls(
            uptime=uptime,
            total_ram=totalram * unit,
            available_ram=freeram * unit,
            total_swap=totalswap * unit,
            available_swap=freeswap * unit,
            processes=procs,
            loads=Load(
                load1=loads[0] / LOAD_SCALE,
                load5=loads[1] / LOAD_SCALE,
                load15=loads[2] / LOAD_SCALE,
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "uptime": self.uptime,
            "totalRam": self.total_ram,
            "availableRam": self.available_ram,
            "totalSwap": self.total_swap,
            "availableSwap": self.available_swap,
            "processes": self.processes,
            "loads": self.loads.to_dict(),
        }


@dataclass(frozen=True)
class KernelIdentity:
    sys_name: str
    node_name: str
    release: str
    version: str
    machine: str
    domain_name: str

    @classmethod
    def from_buffers(
        cls,
        *,
        sysname: bytes,
        nodename: bytes,
        release: bytes,
        version: bytes,
        machine: bytes,
        domainname: bytes,
    ) -> "KernelIdentity":
        return cls(
            sys_name=decode_fixed_buffer(sysname),
            node_name=decode_fixed_buffer(nodename),
            release=decode_fixed_buffer(release),
            version=decode_fixed_buffer(version),
            machine=decode_fixed_buffer(machine),
            domain_name=decode_fixed_buffer(domainname),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "sysName": self.sys_name,
            "nodeName": self.node_name,
            "release": self.release,
            "version": self.version,
            "machine": self.machine,
            "domainName": self.domain_name,
        }


def decode_fixed_buffer(buf: bytes) -> str:
    """
    Text in a fixed-capacity, null-padded buffer

    Takes bytes up to the first NUL (or the whole buffer when there is none)
    """
    end = buf.find(b"\x00")
    if end != -1:
        buf = buf[:end]
    return buf.decode("utf-8", errors="replace")


def _call(source: str, name: str, struct: ctypes.Structure) -> None:
    """
    Call a libc function that fills struct and returns 0 on success
    """
    # None -> symbols already loaded into the interpreter, libc included
    libc = ctypes.CDLL(None, use_errno=True)
    try:
        fn = getattr(libc, name)
    except AttributeError as e:
        raise SourceUnavailable(source, None, f"{name}() not available on this platform") from e

    if fn(ctypes.byref(struct)) != 0:
        errno = ctypes.get_errno()
        raise SourceUnavailable(source, None, os.strerror(errno)) from OSError(errno, os.strerror(errno))


def get_system_information() -> SystemInformation:
    """Call sysinfo(2)."""
    info = _Sysinfo()
    _call(SYSINFO_SOURCE, "sysinfo", info)

    return SystemInformation.from_raw(
        uptime=info.uptime,
        loads=(info.loads[0], info.loads[1], info.loads[2]),
        totalram=info.totalram,
        freeram=info.freeram,
        totalswap=info.totalswap,
        freeswap=info.freeswap,
        procs=info.procs,
        mem_unit=info.mem_unit,
    )


def get_kernel_identity() -> KernelIdentity:
    """Call uname(2)."""
    uts = _Utsname()
    _call(UNAME_SOURCE, "uname", uts)

    return KernelIdentity.from_buffers(
        sysname=bytes(uts.sysname),
        nodename=bytes(uts.nodename),
        release=bytes(uts.release),
        version=bytes(uts.version),
        machine=bytes(uts.machine),
        domainname=bytes(uts.domainname),
    )
