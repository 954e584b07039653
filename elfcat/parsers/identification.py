"""
Identification Summary
=======================

Human-readable descriptions of the ``e_ident`` bytes.

Every ``describe_*`` function is total over 0-255: values outside the known
table map to ``"Unknown: <value>"``.  Anomalies (non-current version,
non-default ABI version) become extra summary entries flagged with ``(!)``
rather than errors, so a malformed file with a valid magic still yields a
summary.

References:
    - System V Application Binary Interface, Edition 4.1, "ELF
      Identification".
"""

from __future__ import annotations

from elfcat.parsers.schemas import (
    EI_ABIVERSION,
    EI_CLASS,
    EI_DATA,
    EI_NIDENT,
    EI_OSABI,
    EI_VERSION,
    ELFCLASS32,
    ELFCLASS64,
    ELFDATA2LSB,
    ELFDATA2MSB,
    EV_CURRENT,
)


ELFOSABI_SYSV: int = 0

_CLASS_NAMES: dict[int, str] = {
    ELFCLASS32: "32-bit objects",
    ELFCLASS64: "64-bit objects",
}

_DATA_NAMES: dict[int, str] = {
    ELFDATA2LSB: "Little endian",
    ELFDATA2MSB: "Big endian",
}

_OSABI_NAMES: dict[int, str] = {
    ELFOSABI_SYSV: "SysV",
    1: "HP-UX",
    2: "NetBSD",
    3: "Linux",
    4: "GNU Hurd",
    6: "Solaris",
    7: "AIX",
    8: "IRIX",
    9: "FreeBSD",
    10: "Tru64",
    11: "Novell Modesto",
    12: "OpenBSD",
    13: "OpenVMS",
    14: "NonStop Kernel",
    15: "AROS",
    16: "FenixOS",
    17: "CloudABI",
    18: "OpenVOS",
    64: "ARM EABI",
    97: "ARM",
    255: "Standalone",
}


def _describe(table: dict[int, str], value: int) -> str:
    return table.get(value, f"Unknown: {value}")


def describe_class(value: int) -> str:
    return _describe(_CLASS_NAMES, value)


def describe_data_encoding(value: int) -> str:
    return _describe(_DATA_NAMES, value)


def describe_osabi(value: int) -> str:
    return _describe(_OSABI_NAMES, value)


def summarize_identification(ident: bytes) -> tuple[tuple[str, str], ...]:
    """Build the ordered identification summary for ``e_ident``.

    Args:
        ident: At least the first 16 bytes of the file.  The magic is not
            checked here.

    Returns:
        ``(label, description)`` pairs: Class, Data encoding, an optional
        version warning, ABI, and an optional ABI-version warning.
    """
    if len(ident) < EI_NIDENT:
        raise ValueError(f"e_ident needs {EI_NIDENT} bytes, got {len(ident)}")

    entries: list[tuple[str, str]] = [
        ("Class", describe_class(ident[EI_CLASS])),
        ("Data encoding", describe_data_encoding(ident[EI_DATA])),
    ]

    version = ident[EI_VERSION]
    if version != EV_CURRENT:
        entries.append(("Uncommon version(!)", str(version)))

    osabi = ident[EI_OSABI]
    entries.append(("ABI", describe_osabi(osabi)))

    abi_version = ident[EI_ABIVERSION]
    if not (osabi == ELFOSABI_SYSV and abi_version == 0):
        entries.append(("Uncommon ABI version(!)", str(abi_version)))

    return tuple(entries)
