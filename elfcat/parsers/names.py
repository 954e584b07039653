"""
Symbolic Names for ELF Header Values
=====================================

Lookup tables turning numeric header values into the names used by
``readelf`` and the ELF specification.  Used by the console and report
renderers only; the decoder stores raw numbers.
"""

from __future__ import annotations


# ELF type
_ET_NAMES: dict[int, str] = {
    0: "NONE",
    1: "REL (Relocatable)",
    2: "EXEC (Executable)",
    3: "DYN (Shared object)",
    4: "CORE (Core dump)",
}

# Machine architectures
_EM_NAMES: dict[int, str] = {
    0: "None",
    2: "SPARC",
    3: "x86",
    4: "Motorola 68000",
    8: "MIPS",
    20: "PowerPC",
    21: "PowerPC64",
    22: "S/390",
    40: "ARM",
    42: "SuperH",
    43: "SPARC V9",
    50: "IA-64",
    62: "x86_64",
    183: "AArch64",
    243: "RISC-V",
    247: "BPF",
    258: "LoongArch",
}

# Program header types
_PT_NAMES: dict[int, str] = {
    0: "NULL",
    1: "LOAD",
    2: "DYNAMIC",
    3: "INTERP",
    4: "NOTE",
    5: "SHLIB",
    6: "PHDR",
    7: "TLS",
    0x6474E550: "GNU_EH_FRAME",
    0x6474E551: "GNU_STACK",
    0x6474E552: "GNU_RELRO",
    0x6474E553: "GNU_PROPERTY",
}

# Section header types
_SHT_NAMES: dict[int, str] = {
    0: "NULL",
    1: "PROGBITS",
    2: "SYMTAB",
    3: "STRTAB",
    4: "RELA",
    5: "HASH",
    6: "DYNAMIC",
    7: "NOTE",
    8: "NOBITS",
    9: "REL",
    10: "SHLIB",
    11: "DYNSYM",
    14: "INIT_ARRAY",
    15: "FINI_ARRAY",
    16: "PREINIT_ARRAY",
    17: "GROUP",
    18: "SYMTAB_SHNDX",
    0x6FFFFFF6: "GNU_HASH",
    0x6FFFFFFD: "GNU_VERDEF",
    0x6FFFFFFE: "GNU_VERNEED",
    0x6FFFFFFF: "GNU_VERSYM",
}

# Section header flags
SHF_WRITE: int = 0x1
SHF_ALLOC: int = 0x2
SHF_EXECINSTR: int = 0x4

# Program header flags
PF_X: int = 0x1
PF_W: int = 0x2
PF_R: int = 0x4


def _hex_fallback(table: dict[int, str], value: int) -> str:
    return table.get(value, f"0x{value:x}")


def file_type_name(e_type: int) -> str:
    return _hex_fallback(_ET_NAMES, e_type)


def machine_name(e_machine: int) -> str:
    return _EM_NAMES.get(e_machine, f"unknown({e_machine})")


def segment_type_name(p_type: int) -> str:
    return _hex_fallback(_PT_NAMES, p_type)


def section_type_name(sh_type: int) -> str:
    return _hex_fallback(_SHT_NAMES, sh_type)


def segment_flags_str(flags: int) -> str:
    """Render ``p_flags`` as ``"RWX"``-style text (``"-"`` when empty)."""
    parts: list[str] = []
    if flags & PF_R:
        parts.append("R")
    if flags & PF_W:
        parts.append("W")
    if flags & PF_X:
        parts.append("X")
    return "".join(parts) if parts else "-"


def section_flags_str(flags: int) -> str:
    """Render ``sh_flags`` as ``"WAX"``-style text (``"-"`` when empty)."""
    parts: list[str] = []
    if flags & SHF_WRITE:
        parts.append("W")
    if flags & SHF_ALLOC:
        parts.append("A")
    if flags & SHF_EXECINSTR:
        parts.append("X")
    return "".join(parts) if parts else "-"
