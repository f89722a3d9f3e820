"""
procsnap.collectors.cpuinfo
AUTHOR: carter-vin

CPU identity collector (/proc/cpuinfo)

- one block per logical processor, blocks separated by blank lines
- ids are integers; every other field is copied verbatim (no unit conversion)
- emitted order == file order; consumers line this up with the cpuN rows of /proc/stat
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from procsnap.procfs import CPUINFO_FILE, read_source
from procsnap.tokenize import Content, parse_int, split_key_value, split_lines

SOURCE = "cpuinfo"

KEY_PROCESSOR = "processor"
KEY_CORE_ID = "core id"
KEY_PHYSICAL_ID = "physical id"

# free-text keys -> ProcessorInfo attribute
TEXT_KEYS = {
    "vendor_id": "vendor_id",
    "cpu family": "cpu_family",
    "model": "model_id",
    "model name": "model_name",
    "cpu cores": "cpu_cores",
    "cpu MHz": "cpu_frequency",
    "cache size": "cache_size",
    "cache_alignment": "cache_alignment",
}


@dataclass(frozen=True)
class ProcessorInfo:
    id: int
    core_id: Optional[int] = None
    physical_id: Optional[int] = None
    vendor_id: str = ""
    cpu_family: str = ""
    model_id: str = ""
    model_name: str = ""
    cpu_cores: str = ""
    cpu_frequency: str = ""
    cache_size: str = ""
    cache_alignment: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "coreId": self.core_id,
            "physicalId": self.physical_id,
            "vendorId": self.vendor_id,
            "cpuFamily": self.cpu_family,
            "modelId": self.model_id,
            "modelName": self.model_name,
            "cpuCores": self.cpu_cores,
            "cpuFrequency": self.cpu_frequency,
            "cacheSize": self.cache_size,
            "cacheAlignment": self.cache_alignment,
        }


@dataclass(frozen=True)
class CPUInformation:
    processors: list[ProcessorInfo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"processors": [p.to_dict() for p in self.processors]}


def _flush(pending: dict[str, Any], out: list[ProcessorInfo]) -> None:
    # A block without a `processor` line is not a processor (e.g. trailing arch summary)
    if pending.get("id") is not None:
        out.append(ProcessorInfo(**pending))
    pending.clear()


def parse_cpuinfo(data: Content) -> CPUInformation:
    """
    Parse /proc/cpuinfo into CPUInformation

    Raises MalformedInput on a line without exactly one colon or a non-integer id
    """
    processors: list[ProcessorInfo] = []
    pending: dict[str, Any] = {}

    for line in split_lines(data):
        if not line.strip():
            _flush(pending, processors)
            continue

        key, value = split_key_value(line, SOURCE)

        if key == KEY_PROCESSOR:
            pending["id"] = parse_int(value, SOURCE, key)
        elif key == KEY_CORE_ID:
            pending["core_id"] = parse_int(value, SOURCE, key)
        elif key == KEY_PHYSICAL_ID:
            pending["physical_id"] = parse_int(value, SOURCE, key)
        elif key in TEXT_KEYS:
            pending[TEXT_KEYS[key]] = value

    # last block may not be followed by a blank line
    _flush(pending, processors)

    return CPUInformation(processors=processors)


def get_cpu_info(*, proc_root: Path | str | None = None) -> CPUInformation:
    """Read and parse /proc/cpuinfo."""
    return parse_cpuinfo(read_source(SOURCE, CPUINFO_FILE, proc_root))
