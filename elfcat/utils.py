"""
Naming and formatting helpers used by the report front ends.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Optional


_SIZE_PREFIXES: tuple[str, ...] = ("K", "M", "G", "T", "P", "E")


def human_format_bytes(size: int) -> str:
    """Format a byte count with binary prefixes.

    >>> human_format_bytes(512)
    '512 B'
    >>> human_format_bytes(1536)
    '1.5 KiB'
    """
    if size < 1024:
        return f"{size} B"
    exponent = min(int(math.log(size, 1024)), len(_SIZE_PREFIXES))
    # log() can land just below an exact power of 1024
    if 1024 ** (exponent + 1) <= size and exponent < len(_SIZE_PREFIXES):
        exponent += 1
    return f"{size / 1024 ** exponent:.1f} {_SIZE_PREFIXES[exponent - 1]}iB"


def basename(path: str) -> Optional[str]:
    """Final path component, or ``None`` if there is none."""
    name = Path(path).name
    return name or None


def construct_filename(path: str, suffix: str = ".html") -> Optional[str]:
    """Report file name for *path*: its base name plus *suffix*.

    >>> construct_filename("/usr/bin/ls")
    'ls.html'
    """
    name = basename(path)
    if name is None:
        return None
    return name + suffix
