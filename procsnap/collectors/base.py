"""
procsnap.collectors.base
AUTHOR: carter-vin

Light result wrapper -> one failing source does not sink a whole snapshot
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from procsnap.errors import SysInfoError


@dataclass(frozen=True)
class CollectorOutcome:
    """
    Normalized collector result
    - ok: false=failure, error details in error fields
    - value: collector result object if ok=true
    - error_source: pseudo-file / syscall named by the error
    """

    name: str
    ok: bool
    value: Optional[Any] = None
    error_type: Optional[str] = None
    error_source: Optional[str] = None
    error_message: Optional[str] = None


def run_collector(name: str, fn: Callable[..., Any], *args, **kwargs) -> CollectorOutcome:
    """
    Run collector & record MalformedInput / SourceUnavailable as data

    Anything outside the procsnap error taxonomy is a bug and propagates
    """
    try:
        v = fn(*args, **kwargs)
        return CollectorOutcome(name=name, ok=True, value=v)
    except SysInfoError as e:
        return CollectorOutcome(
            name=name,
            ok=False,
            value=None,
            error_type=type(e).__name__,
            error_source=e.source,
            error_message=str(e),
        )
