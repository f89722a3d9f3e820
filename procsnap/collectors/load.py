"""
procsnap.collectors.load
AUTHOR: carter-vin

Load average (/proc/loadavg) and uptime (/proc/uptime) collectors
- single-line files, tokenized as a whole
- extra trailing tokens (run queue, last pid) are ignored
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from procsnap.errors import MalformedInput
from procsnap.procfs import LOADAVG_FILE, UPTIME_FILE, read_source
from procsnap.tokenize import Content, decode, parse_float, split_fields

LOADAVG_SOURCE = "loadavg"
UPTIME_SOURCE = "uptime"


@dataclass(frozen=True)
class Load:
    load1: float
    load5: float
    load15: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "load1": self.load1,
            "load5": self.load5,
            "load15": self.load15,
        }


@dataclass(frozen=True)
class Uptime:
    """
    - total: seconds since boot
    - idle: cumulative idle seconds summed over all cpus
    """

    total: float
    idle: float

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "idle": self.idle}


def _leading_floats(data: Content, count: int, source: str, names: tuple[str, ...]) -> list[float]:
    tokens = split_fields(decode(data))
    if len(tokens) < count:
        raise MalformedInput(source, f"expected {count} values, got {len(tokens)}")
    return [parse_float(token, source, name) for token, name in zip(tokens[:count], names)]


def parse_loadavg(data: Content) -> Load:
    load1, load5, load15 = _leading_floats(data, 3, LOADAVG_SOURCE, ("load1", "load5", "load15"))
    return Load(load1=load1, load5=load5, load15=load15)


def parse_uptime(data: Content) -> Uptime:
    total, idle = _leading_floats(data, 2, UPTIME_SOURCE, ("total", "idle"))
    return Uptime(total=total, idle=idle)


def get_load_avg(*, proc_root: Path | str | None = None) -> Load:
    """Read and parse /proc/loadavg."""
    return parse_loadavg(read_source(LOADAVG_SOURCE, LOADAVG_FILE, proc_root))


def get_uptime(*, proc_root: Path | str | None = None) -> Uptime:
    """Read and parse /proc/uptime."""
    return parse_uptime(read_source(UPTIME_SOURCE, UPTIME_FILE, proc_root))
