"""
procsnap.collectors.stat
AUTHOR: carter-vin

Kernel/system statistics collector (/proc/stat)

- `cpu` (aggregate) and `cpuN` (per core) rows -> CPUStat, in file order
- btime / processes / procs_running / procs_blocked -> SystemStat scalars
- everything else (intr, ctxt, softirq, ...) is ignored
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from procsnap.errors import MalformedInput
from procsnap.procfs import STAT_FILE, read_source
from procsnap.tokenize import Content, parse_int, split_fields, split_lines

SOURCE = "stat"

CPU_PREFIX = "cpu"

# user nice system idle iowait irq softirq are mandatory; steal guest guest_nice are not
CPU_REQUIRED_FIELDS = ("user", "nice", "system", "idle", "iowait", "irq", "softirq")
CPU_OPTIONAL_FIELDS = ("steal", "guest", "guest_nice")
CPU_MIN_TOKENS = 1 + len(CPU_REQUIRED_FIELDS)
CPU_MAX_TOKENS = CPU_MIN_TOKENS + len(CPU_OPTIONAL_FIELDS)

# stat key -> SystemStat attribute
SCALAR_KEYS = {
    "btime": "boot_time",
    "processes": "processes",
    "procs_running": "processes_running",
    "procs_blocked": "processes_blocked",
}


@dataclass(frozen=True)
class CPUStat:
    """
    Cumulative time buckets for one cpu row, in USER_HZ ticks

    usage is NaN when total is 0; treat a non-finite usage as unknown
    """

    cpu_id: str
    user: int
    nice: int
    system: int
    idle: int
    iowait: int
    irq: int
    softirq: int
    steal: int = 0
    guest: int = 0
    guest_nice: int = 0
    total: int = 0
    usage: float = math.nan

    @property
    def is_aggregate(self) -> bool:
        return self.cpu_id == CPU_PREFIX

    def to_dict(self) -> dict[str, Any]:
        return {
            "cpuId": self.cpu_id,
            "user": self.user,
            "nice": self.nice,
            "system": self.system,
            "idle": self.idle,
            "ioWait": self.iowait,
            "irq": self.irq,
            "softIrq": self.softirq,
            "steal": self.steal,
            "guest": self.guest,
            "guestNice": self.guest_nice,
            "total": self.total,
            # JSON has no NaN
            "usage": self.usage if math.isfinite(self.usage) else None,
        }


@dataclass(frozen=True)
class SystemStat:
    cpu_stats: list[CPUStat] = field(default_factory=list)
    boot_time: Optional[int] = None
    processes: Optional[int] = None
    processes_running: Optional[int] = None
    processes_blocked: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "cpuStats": [c.to_dict() for c in self.cpu_stats],
            "bootTime": self.boot_time,
            "processes": self.processes,
            "processesRunning": self.processes_running,
            "processesBlocked": self.processes_blocked,
        }


def compute_usage(total: int, idle: int) -> float:
    """Busy share of total in percent; NaN when nothing was accounted."""
    if total == 0:
        return math.nan
    return (total - idle) * 100 / total


def parse_cpu_line(tokens: list[str]) -> CPUStat:
    """
    Parse one tokenized cpu row

    Expects 8-11 tokens: id, 7 mandatory buckets, up to 3 optional buckets
    """
    if not CPU_MIN_TOKENS <= len(tokens) <= CPU_MAX_TOKENS:
        raise MalformedInput(
            SOURCE,
            f"{tokens[0]} expects {CPU_MIN_TOKENS}-{CPU_MAX_TOKENS} fields, got {len(tokens)}",
        )

    names = CPU_REQUIRED_FIELDS + CPU_OPTIONAL_FIELDS
    buckets = {
        name: parse_int(token, SOURCE, f"{tokens[0]} {name}")
        for name, token in zip(names, tokens[1:])
    }
    total = sum(buckets.values())

    return CPUStat(
        cpu_id=tokens[0],
        total=total,
        usage=compute_usage(total, buckets["idle"]),
        **buckets,
    )


def parse_stat(data: Content) -> SystemStat:
    """
    Parse /proc/stat into SystemStat

    Raises MalformedInput on a bad cpu row or a scalar key without exactly one value
    """
    cpu_stats: list[CPUStat] = []
    scalars: dict[str, int] = {}

    for line in split_lines(data):
        tokens = split_fields(line)
        if not tokens:
            continue

        key = tokens[0]
        if key.startswith(CPU_PREFIX):
            cpu_stats.append(parse_cpu_line(tokens))
            continue

        attr = SCALAR_KEYS.get(key)
        if attr is None:
            continue

        if len(tokens) != 2:
            raise MalformedInput(SOURCE, f"{key} expects one value, got {len(tokens) - 1}")
        scalars[attr] = parse_int(tokens[1], SOURCE, key)

    return SystemStat(cpu_stats=cpu_stats, **scalars)


def get_stat(*, proc_root: Path | str | None = None) -> SystemStat:
    """Read and parse /proc/stat."""
    return parse_stat(read_source(SOURCE, STAT_FILE, proc_root))
