"""
procsnap.errors
AUTHOR: carter-vin

Error taxonomy

- MalformedInput: a pseudo-file did not match its expected grammar
- SourceUnavailable: reading a pseudo-file or calling the kernel failed

Both are fatal to the single call that raised them. Nothing here retries.
"""

from __future__ import annotations

from pathlib import Path


class SysInfoError(Exception):
    """Base class for every error raised by procsnap."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(message)
        self.source = source


class MalformedInput(SysInfoError, ValueError):
    """
    Structural violation of a pseudo-file grammar

    - source: logical name of the file ("meminfo", "stat", ...)
    - detail: what was wrong, without the whole content
    """

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(source, f"incorrectly formatted {source} content: {detail}")
        self.detail = detail


class SourceUnavailable(SysInfoError):
    """
    Reader or kernel accessor failure

    The underlying OSError is kept as __cause__
    """

    def __init__(self, source: str, path: Path | str | None, reason: str) -> None:
        where = f" ({path})" if path is not None else ""
        super().__init__(source, f"{source} unavailable{where}: {reason}")
        self.path = path
