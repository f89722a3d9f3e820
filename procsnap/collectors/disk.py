"""
procsnap.collectors.disk
AUTHOR: carter-vin

Disk collectors
- per-device I/O counters from /proc/diskstats
- filesystem capacity for a mount path via statvfs

/proc/diskstats columns (Documentation/admin-guide/iostats.rst):
  major minor name
  reads_completed reads_merged sectors_read time_reading_ms
  writes_completed writes_merged sectors_written time_writing_ms
  ios_in_progress time_doing_ios_ms weighted_time_doing_ios_ms
  discards_completed discards_merged sectors_discarded time_discarding_ms   (4.18+)
  flush_requests_completed time_flushing_ms                                (5.5+)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from procsnap.errors import MalformedInput, SourceUnavailable
from procsnap.procfs import DISKSTATS_FILE, read_source
from procsnap.tokenize import Content, parse_int, split_fields, split_lines

SOURCE = "diskstats"
USAGE_SOURCE = "statvfs"

# positional counters after major/minor/name, in column order
COUNTER_FIELDS = (
    "reads_completed",
    "reads_merged",
    "sectors_read",
    "time_reading_ms",
    "writes_completed",
    "writes_merged",
    "sectors_written",
    "time_writing_ms",
    "ios_in_progress",
    "time_doing_ios_ms",
    "weighted_time_doing_ios_ms",
    "discards_completed",
    "discards_merged",
    "sectors_discarded",
    "time_discarding_ms",
)
FLUSH_FIELDS = ("flush_requests_completed", "time_flushing_ms")

REQUIRED_COLUMNS = 3 + len(COUNTER_FIELDS)
FLUSH_COLUMNS = REQUIRED_COLUMNS + len(FLUSH_FIELDS)


@dataclass(frozen=True)
class DiskStat:
    major: int
    minor: int
    device: str
    reads_completed: int
    reads_merged: int
    sectors_read: int
    time_reading_ms: int
    writes_completed: int
    writes_merged: int
    sectors_written: int
    time_writing_ms: int
    ios_in_progress: int
    time_doing_ios_ms: int
    weighted_time_doing_ios_ms: int
    discards_completed: int
    discards_merged: int
    sectors_discarded: int
    time_discarding_ms: int
    # None on kernels older than 5.5
    flush_requests_completed: Optional[int] = None
    time_flushing_ms: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "major": self.major,
            "minor": self.minor,
            "device": self.device,
            "readsCompleted": self.reads_completed,
            "readsMerged": self.reads_merged,
            "sectorsRead": self.sectors_read,
            "timeReadingMs": self.time_reading_ms,
            "writesCompleted": self.writes_completed,
            "writesMerged": self.writes_merged,
            "sectorsWritten": self.sectors_written,
            "timeWritingMs": self.time_writing_ms,
            "iosInProgress": self.ios_in_progress,
            "timeDoingIosMs": self.time_doing_ios_ms,
            "weightedTimeDoingIosMs": self.weighted_time_doing_ios_ms,
            "discardsCompleted": self.discards_completed,
            "discardsMerged": self.discards_merged,
            "sectorsDiscarded": self.sectors_discarded,
            "timeDiscardingMs": self.time_discarding_ms,
            "flushRequestsCompleted": self.flush_requests_completed,
            "timeFlushingMs": self.time_flushing_ms,
        }


@dataclass(frozen=True)
class DiskUsage:
    """
    Filesystem capacity for one path

    Byte counts are block counts times the fragment size
    """

    path: str
    block_size: int
    total_bytes: int
    free_bytes: int
    available_bytes: int
    inodes: int
    free_inodes: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "blockSize": self.block_size,
            "totalBytes": self.total_bytes,
            "freeBytes": self.free_bytes,
            "availableBytes": self.available_bytes,
            "inodes": self.inodes,
            "freeInodes": self.free_inodes,
        }


def parse_disk_line(columns: list[str]) -> DiskStat:
    """
    Parse one tokenized diskstats row

    Every row is independent: a short row fails instead of borrowing values from a previous one
    """
    if len(columns) < REQUIRED_COLUMNS:
        raise MalformedInput(SOURCE, f"expected at least {REQUIRED_COLUMNS} columns, got {len(columns)}")

    device = columns[2]
    counters = {
        name: parse_int(token, SOURCE, f"{device} {name}")
        for name, token in zip(COUNTER_FIELDS, columns[3:REQUIRED_COLUMNS])
    }
    if len(columns) >= FLUSH_COLUMNS:
        counters.update(
            (name, parse_int(token, SOURCE, f"{device} {name}"))
            for name, token in zip(FLUSH_FIELDS, columns[REQUIRED_COLUMNS:FLUSH_COLUMNS])
        )

    return DiskStat(
        major=parse_int(columns[0], SOURCE, f"{device} major"),
        minor=parse_int(columns[1], SOURCE, f"{device} minor"),
        device=device,
        **counters,
    )


def parse_diskstats(data: Content) -> list[DiskStat]:
    """Parse /proc/diskstats into one DiskStat per device, in file order."""
    disks: list[DiskStat] = []
    for line in split_lines(data):
        columns = split_fields(line)
        if not columns:
            continue
        disks.append(parse_disk_line(columns))
    return disks


def get_disk_stats(*, proc_root: Path | str | None = None) -> list[DiskStat]:
    """Read and parse /proc/diskstats."""
    return parse_diskstats(read_source(SOURCE, DISKSTATS_FILE, proc_root))


def get_disk_usage(path: str = "/") -> DiskUsage:
    """
    Collect filesystem capacity for the filesystem holding path
    """
    try:
        st = os.statvfs(path)
    except OSError as e:
        raise SourceUnavailable(USAGE_SOURCE, path, e.strerror or str(e)) from e

    # f_frsize is the unit of f_blocks; some filesystems leave it 0
    block_size = st.f_frsize or st.f_bsize
    return DiskUsage(
        path=path,
        block_size=block_size,
        total_bytes=st.f_blocks * block_size,
        free_bytes=st.f_bfree * block_size,
        available_bytes=st.f_bavail * block_size,
        inodes=st.f_files,
        free_inodes=st.f_ffree,
    )
