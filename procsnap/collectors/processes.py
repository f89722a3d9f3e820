"""
procsnap.collectors.processes
AUTHOR: carter-vin

Process id enumeration
- every numeric entry directly under /proc is a pid
- order is whatever the directory listing returns (not sorted)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from procsnap.errors import SourceUnavailable
from procsnap.procfs import resolve_proc_root

SOURCE = "pids"


def filter_process_ids(names: Iterable[str]) -> list[int]:
    """
    Keep entries whose whole name is a non-negative base-10 integer

    `self`, `thread-self`, `sys`, ... are dropped
    """
    return [int(name) for name in names if name.isascii() and name.isdigit()]


def list_process_ids(*, proc_root: Path | str | None = None) -> list[int]:
    root = resolve_proc_root(proc_root)
    try:
        names = os.listdir(root)
    except OSError as e:
        raise SourceUnavailable(SOURCE, root, e.strerror or str(e)) from e
    return filter_process_ids(names)
