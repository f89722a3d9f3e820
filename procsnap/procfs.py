"""
procsnap.procfs
AUTHOR: carter-vin

Raw reader for the /proc pseudo-filesystem

- one blocking read of the whole file, as bytes
- OS failures surface as SourceUnavailable (original OSError chained)
- root is configurable so tests and containers can point at a copied tree
"""

from __future__ import annotations

import os
from pathlib import Path

from procsnap.errors import SourceUnavailable

DEFAULT_PROC_ROOT = Path("/proc")

# Env var override is useful for:
# - reading a host /proc mounted elsewhere inside a container
# - pointing collectors at captured fixture trees
PROC_ROOT_ENV = "PROCSNAP_PROC_ROOT"

# Logical source name -> path relative to the proc root
UPTIME_FILE = "uptime"
MEMINFO_FILE = "meminfo"
VMSTAT_FILE = "vmstat"
STAT_FILE = "stat"
LOADAVG_FILE = "loadavg"
CPUINFO_FILE = "cpuinfo"
NETWORK_STAT_FILE = "net/dev"
DISKSTATS_FILE = "diskstats"


def resolve_proc_root(proc_root: Path | str | None = None) -> Path:
    """
    Pick the pseudo-filesystem root

    Precedence:
    1) explicit proc_root argument
    2) PROCSNAP_PROC_ROOT env var
    3) /proc
    """
    if proc_root is not None:
        return Path(proc_root)

    override = os.getenv(PROC_ROOT_ENV)
    if override:
        return Path(override)

    return DEFAULT_PROC_ROOT


def read_source(source: str, relative: str, proc_root: Path | str | None = None) -> bytes:
    """
    Read a whole pseudo-file

    source is the logical name carried by errors; relative is the file path under the root
    """
    path = resolve_proc_root(proc_root) / relative
    try:
        return path.read_bytes()
    except OSError as e:
        raise SourceUnavailable(source, path, e.strerror or str(e)) from e
