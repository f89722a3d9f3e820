"""
procsnap.collectors.vmstat
AUTHOR: carter-vin

Virtual-memory statistics (/proc/vmstat)

The record carries no fields yet: which vmstat counters to expose has not been
decided, so the file is read (availability is still checked) but not interpreted.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from procsnap.procfs import VMSTAT_FILE, read_source
from procsnap.tokenize import Content

SOURCE = "vmstat"


@dataclass(frozen=True)
class VMStat:
    def to_dict(self) -> dict[str, Any]:
        return {}


def parse_vmstat(data: Content) -> VMStat:
    return VMStat()


def get_vm_stat(*, proc_root: Path | str | None = None) -> VMStat:
    """Read /proc/vmstat."""
    return parse_vmstat(read_source(SOURCE, VMSTAT_FILE, proc_root))
