"""
procsnap.collectors.memory
AUTHOR: carter-vin

Memory collector
- Linux via /proc/meminfo
- values stay in kB, exactly as the kernel reports them
- unknown keys are skipped so newer kernels never break parsing
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

from procsnap.errors import MalformedInput
from procsnap.procfs import MEMINFO_FILE, read_source
from procsnap.tokenize import Content, parse_int, split_fields, split_key_value, split_lines

SOURCE = "meminfo"

# meminfo key -> MemoryInfo attribute
MEMINFO_KEYS = {
    "MemTotal": "total",
    "MemFree": "free",
    "MemAvailable": "available",
    "Buffers": "buffered",
    "Cached": "cached",
    "SwapCached": "swap_cached",
    "SwapTotal": "swap_total",
    "SwapFree": "swap_free",
}


@dataclass(frozen=True)
class MemoryInfo:
    """
    Memory counters in kB

    None means the key was not present in the file
    """

    total: Optional[int] = None
    free: Optional[int] = None
    available: Optional[int] = None
    buffered: Optional[int] = None
    cached: Optional[int] = None
    swap_cached: Optional[int] = None
    swap_total: Optional[int] = None
    swap_free: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "free": self.free,
            "available": self.available,
            "buffered": self.buffered,
            "cached": self.cached,
            "swapCached": self.swap_cached,
            "swapTotal": self.swap_total,
            "swapFree": self.swap_free,
        }


def parse_meminfo(data: Content) -> MemoryInfo:
    """
    Parse /proc/meminfo into MemoryInfo

    Rules:
    - every non-empty line is `Key: value unit`, exactly one colon
    - recognized keys need exactly two value tokens, the first an integer
    """
    values: dict[str, int] = {}
    for line in split_lines(data):
        if not line.strip():
            continue

        key, value = split_key_value(line, SOURCE)
        attr = MEMINFO_KEYS.get(key)
        if attr is None:
            continue

        tokens = split_fields(value)
        if len(tokens) != 2:
            raise MalformedInput(SOURCE, f"{key} expects `value unit`, got {value!r}")
        values[attr] = parse_int(tokens[0], SOURCE, key)

    return MemoryInfo(**values)


def format_meminfo(mem: MemoryInfo) -> str:
    """
    Render MemoryInfo back to meminfo text

    Keys that were never observed are left out
    """
    names = {attr: key for key, attr in MEMINFO_KEYS.items()}
    lines = []
    for field in fields(mem):
        value = getattr(mem, field.name)
        if value is None:
            continue
        lines.append(f"{names[field.name]}: {value} kB")
    return "\n".join(lines) + "\n" if lines else ""


def get_mem_info(*, proc_root: Path | str | None = None) -> MemoryInfo:
    """Read and parse /proc/meminfo."""
    return parse_meminfo(read_source(SOURCE, MEMINFO_FILE, proc_root))
