"""
procsnap.tokenize
AUTHOR: carter-vin

Line/field tokenizer shared by every parser
- accepts raw bytes (as read from /proc) or already-decoded text
- no parser-specific rules live here
"""

from __future__ import annotations

import math

from procsnap.errors import MalformedInput

Content = bytes | str


def decode(data: Content) -> str:
    """
    Decode pseudo-file bytes to text

    /proc text is ASCII in practice; stray bytes are replaced, never fatal
    """
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def split_lines(data: Content) -> list[str]:
    """
    Split content on newlines, keeping empty lines

    Blank lines carry meaning for cpuinfo (record separator).
    A single trailing newline does not produce an extra empty line.
    """
    text = decode(data)
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def split_fields(line: str) -> list[str]:
    return line.split()


def split_key_value(line: str, source: str) -> tuple[str, str]:
    """
    Split `key: value` on its single colon and trim both sides

    Raises MalformedInput unless the line has exactly one colon
    """
    items = line.split(":")
    if len(items) != 2:
        raise MalformedInput(source, f"expected one ':' in line {line!r}")
    return items[0].strip(), items[1].strip()


def parse_int(token: str, source: str, field: str) -> int:
    """Base-10 ASCII integer or MalformedInput."""
    if not token.isascii() or "_" in token:
        raise MalformedInput(source, f"{field} is not an integer: {token!r}")
    try:
        return int(token, 10)
    except ValueError as e:
        raise MalformedInput(source, f"{field} is not an integer: {token!r}") from e


def parse_float(token: str, source: str, field: str) -> float:
    """Finite ASCII decimal or MalformedInput; nan/inf are rejected."""
    if not token.isascii() or "_" in token:
        raise MalformedInput(source, f"{field} is not a number: {token!r}")
    try:
        value = float(token)
    except ValueError as e:
        raise MalformedInput(source, f"{field} is not a number: {token!r}") from e
    if not math.isfinite(value):
        raise MalformedInput(source, f"{field} is not a finite number: {token!r}")
    return value
