"""
elfcat -- ELF Structure Visualiser
===================================

Decodes the structural skeleton of ELF object files (identification,
file header, program and section header tables) for both address widths
and both byte orders, and labels every decoded byte with the structure and
field that owns it.  The labelled byte ranges drive an annotated HTML
hex-dump report.

Capabilities:
    - Bounds-checked, class- and endianness-agnostic header decoding
    - Byte-range overlay of headers and their fields
    - Identification summary tolerant of malformed ``e_ident`` bytes
    - Non-fatal handling of truncated header tables
    - HTML hex-dump, JSON and terminal reports

References:
    - TIS Committee. (1995). ELF Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
"""

from elfcat.core.errors import ElfError
from elfcat.core.models import DecodedElf
from elfcat.parsers.elf_parser import decode, validate_identification

__version__ = "1.0.0"
__all__ = [
    "DecodedElf",
    "ElfError",
    "decode",
    "validate_identification",
]
