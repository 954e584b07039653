"""
elfcat Data Models
===================

Pydantic-based, immutable data models for a decoded ELF file and the byte
range overlay that labels its contents.

Every header record is normalised to unsigned 64-bit integers regardless of
the source class: ELF32 fields are zero-extended, ELF64 fields are kept as
read.  Field names follow the ELF specification (``e_phoff``, ``p_vaddr``,
``sh_name`` ...) so that the same names serve as record attributes and as
range-overlay field tags.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - System V Application Binary Interface, Edition 4.1.
"""

from __future__ import annotations

import enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field


U64 = Annotated[int, Field(ge=0, le=0xFFFF_FFFF_FFFF_FFFF)]


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ElfClass(str, enum.Enum):
    """Address width of an ELF file (``EI_CLASS``)."""
    ELF32 = "elf32"
    ELF64 = "elf64"

    @property
    def bits(self) -> int:
        return 32 if self is ElfClass.ELF32 else 64


class Encoding(str, enum.Enum):
    """Byte order of multi-byte fields (``EI_DATA``)."""
    LITTLE = "little"
    BIG = "big"

    @property
    def struct_prefix(self) -> str:
        """Byte-order character for :mod:`struct` format strings."""
        return "<" if self is Encoding.LITTLE else ">"


class RangeKind(str, enum.Enum):
    """Symbolic tag for the structure a byte range belongs to.

    The three ``*_HEADER`` kinds label a whole structure, the ``*_FIELD``
    kinds label one named field inside such a structure.
    """
    FILE_HEADER = "ehdr"
    PROGRAM_HEADER = "phdr"
    SECTION_HEADER = "shdr"
    FILE_HEADER_FIELD = "ehdr_field"
    PROGRAM_HEADER_FIELD = "phdr_field"
    SECTION_HEADER_FIELD = "shdr_field"

    @property
    def is_field(self) -> bool:
        return self.value.endswith("_field")


# ---------------------------------------------------------------------------
# Header records
# ---------------------------------------------------------------------------

class FileHeader(BaseModel):
    """Class-agnostic view of the ELF file header (``ElfN_Ehdr``).

    ``e_ident`` is not repeated here; its decoded form is the
    identification summary of :class:`DecodedElf`.
    """
    model_config = ConfigDict(frozen=True)

    e_type: U64 = 0
    e_machine: U64 = 0
    e_version: U64 = 0
    e_entry: U64 = 0
    e_phoff: U64 = 0
    e_shoff: U64 = 0
    e_flags: U64 = 0
    e_ehsize: U64 = 0
    e_phentsize: U64 = 0
    e_phnum: U64 = 0
    e_shentsize: U64 = 0
    e_shnum: U64 = 0
    e_shstrndx: U64 = 0


class ProgramHeaderEntry(BaseModel):
    """One program header table entry (``ElfN_Phdr``)."""
    model_config = ConfigDict(frozen=True)

    p_type: U64 = 0
    p_flags: U64 = 0
    p_offset: U64 = 0
    p_vaddr: U64 = 0
    p_paddr: U64 = 0
    p_filesz: U64 = 0
    p_memsz: U64 = 0
    p_align: U64 = 0


class SectionHeaderEntry(BaseModel):
    """One section header table entry (``ElfN_Shdr``).

    Attributes:
        sh_name: Offset of the name in the section-name string table.
        name: Name resolved through ``e_shstrndx``, or ``""`` when the
            string table is missing or out of bounds.
    """
    model_config = ConfigDict(frozen=True)

    sh_name: U64 = 0
    sh_type: U64 = 0
    sh_flags: U64 = 0
    sh_addr: U64 = 0
    sh_offset: U64 = 0
    sh_size: U64 = 0
    sh_link: U64 = 0
    sh_info: U64 = 0
    sh_addralign: U64 = 0
    sh_entsize: U64 = 0
    name: str = ""


# ---------------------------------------------------------------------------
# Range overlay
# ---------------------------------------------------------------------------

class RangeLabel(BaseModel):
    """Symbolic label attached to a byte range.

    Attributes:
        kind: Which structure (or field of a structure) owns the range.
        field: ELF field name for ``*_FIELD`` kinds, e.g. ``"e_phoff"``.
        index: Table index for program / section header entries.
    """
    model_config = ConfigDict(frozen=True)

    kind: RangeKind
    field: Optional[str] = None
    index: Optional[int] = None

    @property
    def css_class(self) -> str:
        """CSS class name used by the HTML report."""
        if self.kind.is_field and self.field:
            return self.field
        return self.kind.value

    def __str__(self) -> str:
        base = self.field if self.kind.is_field else self.kind.value
        if self.index is not None:
            return f"{base}[{self.index}]"
        return str(base)


class RangeEntry(BaseModel):
    """A labelled, half-open byte span ``[start, start + length)``."""
    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    length: int = Field(ge=0)
    label: RangeLabel

    @property
    def end(self) -> int:
        return self.start + self.length

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end


class RangeOverlay(BaseModel):
    """Every range recorded while decoding one file, in decode order.

    Ranges may nest: a header's whole-span range coexists with the ranges
    of its fields.  The overlay does not resolve precedence; by convention
    the last-added range covering a byte is the most specific one.
    """
    model_config = ConfigDict(frozen=True)

    buffer_length: int = Field(ge=0)
    entries: tuple[RangeEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def covering(self, offset: int) -> list[RangeEntry]:
        """All ranges that contain byte *offset*, in decode order."""
        return [entry for entry in self.entries if entry.contains(offset)]

    def owner(self, offset: int) -> Optional[RangeEntry]:
        """The most specific (last-added) range containing *offset*."""
        for entry in reversed(self.entries):
            if entry.contains(offset):
                return entry
        return None

    def of_kind(self, kind: RangeKind) -> list[RangeEntry]:
        return [entry for entry in self.entries if entry.label.kind is kind]

    def sorted_by_offset(self) -> list[RangeEntry]:
        """Entries ordered by start offset; ties keep decode order."""
        return sorted(self.entries, key=lambda entry: entry.start)


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

class TableSummary(BaseModel):
    """What happened while walking one header table.

    Attributes:
        offset: Table file offset (``e_phoff`` / ``e_shoff``).
        entry_size: Declared entry size (``e_phentsize`` / ``e_shentsize``).
        declared: Entry count declared by the file header.
        decoded: Entries actually decoded before the table ended.
        truncated_reason: Why decoding stopped early; empty when complete.
    """
    model_config = ConfigDict(frozen=True)

    offset: int = 0
    entry_size: int = 0
    declared: int = 0
    decoded: int = 0
    truncated_reason: str = ""

    @property
    def truncated(self) -> bool:
        return self.decoded < self.declared


class DecodedElf(BaseModel):
    """Complete, immutable result of decoding one ELF file.

    Attributes:
        filename: Label for the input (not reopened).
        identification: Ordered ``(label, description)`` pairs describing
            ``e_ident``.
        contents: The raw input bytes, kept for rendering.
        elf_class: Detected address width.
        encoding: Detected byte order.
        file_header: Decoded file header.
        program_headers: Successfully decoded program header entries.
        section_headers: Successfully decoded section header entries.
        overlay: Byte-range overlay built during decoding.
        program_table: Bookkeeping for the program header table walk.
        section_table: Bookkeeping for the section header table walk.
        notes: Non-fatal anomalies found after identification.
    """
    model_config = ConfigDict(frozen=True)

    filename: str
    identification: tuple[tuple[str, str], ...]
    contents: bytes
    elf_class: ElfClass
    encoding: Encoding
    file_header: FileHeader
    program_headers: tuple[ProgramHeaderEntry, ...] = ()
    section_headers: tuple[SectionHeaderEntry, ...] = ()
    overlay: RangeOverlay
    program_table: TableSummary = Field(default_factory=TableSummary)
    section_table: TableSummary = Field(default_factory=TableSummary)
    notes: tuple[tuple[str, str], ...] = ()

    @property
    def size(self) -> int:
        return len(self.contents)

    @property
    def summary(self) -> tuple[tuple[str, str], ...]:
        """Identification entries followed by decode notes."""
        return self.identification + self.notes
