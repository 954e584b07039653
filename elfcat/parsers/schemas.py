"""
ELF Header Schemas
===================

Byte layouts of the three ELF header records for both address widths.

Each record is described as a table of ``(name, offset, width)`` field
specifications instead of one :mod:`struct` format string, so the decoder
can record a byte range per field from the same table it decodes with.
Offsets are those of the published ELF specification; they are the ABI
and must not change.

Both layouts expose the same logical field names, so everything above this
module is written once against :class:`ElfLayout` and is width-agnostic.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2, Figures 1-3, 1-9,
      2-1.
    - System V Application Binary Interface, Edition 4.1, chapter 4.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from elfcat.core.models import (
    ElfClass,
    Encoding,
    FileHeader,
    ProgramHeaderEntry,
    SectionHeaderEntry,
)
from elfcat.parsers.byteorder import read_uint


# ---------------------------------------------------------------------------
# Identification layout (identical for both classes)
# ---------------------------------------------------------------------------

ELF_MAGIC: bytes = b"\x7fELF"

EI_CLASS: int = 4
EI_DATA: int = 5
EI_VERSION: int = 6
EI_OSABI: int = 7
EI_ABIVERSION: int = 8
EI_NIDENT: int = 16

ELFCLASS32: int = 1
ELFCLASS64: int = 2

ELFDATA2LSB: int = 1
ELFDATA2MSB: int = 2

EV_CURRENT: int = 1


RecordT = TypeVar("RecordT", bound=BaseModel)


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Location of one fixed-width field inside a record."""
    name: str
    offset: int
    width: int

    @property
    def end(self) -> int:
        return self.offset + self.width


@dataclass(frozen=True, slots=True)
class RecordLayout(Generic[RecordT]):
    """Byte layout of one header record type.

    Attributes:
        name: Human-readable record name (``"program header"`` ...).
        model: Model class the decoded values are loaded into.
        fields: Field specifications in file order.
    """
    name: str
    model: type[RecordT]
    fields: tuple[FieldSpec, ...]

    @property
    def size(self) -> int:
        """Minimum number of bytes needed to hold every field."""
        return max(spec.end for spec in self.fields)

    def decode(
        self,
        data: bytes | bytearray | memoryview,
        offset: int,
        encoding: Encoding,
    ) -> RecordT:
        """Decode one record starting at *offset* of *data*.

        Only checks that enough bytes exist; records no ranges.

        Raises:
            TruncatedField: If *data* ends before the last field.
        """
        values = {
            spec.name: read_uint(data, offset + spec.offset, spec.width, encoding)
            for spec in self.fields
        }
        return self.model(**values)


@dataclass(frozen=True, slots=True)
class ElfLayout:
    """The three record layouts of one ELF class."""
    elf_class: ElfClass
    file_header: RecordLayout[FileHeader]
    program_header: RecordLayout[ProgramHeaderEntry]
    section_header: RecordLayout[SectionHeaderEntry]


def _fields(*triples: tuple[str, int, int]) -> tuple[FieldSpec, ...]:
    return tuple(FieldSpec(name, offset, width) for name, offset, width in triples)


# ---------------------------------------------------------------------------
# ELF32
# ---------------------------------------------------------------------------

# Elf32_Ehdr: 52 bytes
_EHDR32 = _fields(
    ("e_type", 16, 2),
    ("e_machine", 18, 2),
    ("e_version", 20, 4),
    ("e_entry", 24, 4),
    ("e_phoff", 28, 4),
    ("e_shoff", 32, 4),
    ("e_flags", 36, 4),
    ("e_ehsize", 40, 2),
    ("e_phentsize", 42, 2),
    ("e_phnum", 44, 2),
    ("e_shentsize", 46, 2),
    ("e_shnum", 48, 2),
    ("e_shstrndx", 50, 2),
)

# Elf32_Phdr: 32 bytes, p_flags after p_memsz
_PHDR32 = _fields(
    ("p_type", 0, 4),
    ("p_offset", 4, 4),
    ("p_vaddr", 8, 4),
    ("p_paddr", 12, 4),
    ("p_filesz", 16, 4),
    ("p_memsz", 20, 4),
    ("p_flags", 24, 4),
    ("p_align", 28, 4),
)

# Elf32_Shdr: 40 bytes
_SHDR32 = _fields(
    ("sh_name", 0, 4),
    ("sh_type", 4, 4),
    ("sh_flags", 8, 4),
    ("sh_addr", 12, 4),
    ("sh_offset", 16, 4),
    ("sh_size", 20, 4),
    ("sh_link", 24, 4),
    ("sh_info", 28, 4),
    ("sh_addralign", 32, 4),
    ("sh_entsize", 36, 4),
)


# ---------------------------------------------------------------------------
# ELF64
# ---------------------------------------------------------------------------

# Elf64_Ehdr: 64 bytes
_EHDR64 = _fields(
    ("e_type", 16, 2),
    ("e_machine", 18, 2),
    ("e_version", 20, 4),
    ("e_entry", 24, 8),
    ("e_phoff", 32, 8),
    ("e_shoff", 40, 8),
    ("e_flags", 48, 4),
    ("e_ehsize", 52, 2),
    ("e_phentsize", 54, 2),
    ("e_phnum", 56, 2),
    ("e_shentsize", 58, 2),
    ("e_shnum", 60, 2),
    ("e_shstrndx", 62, 2),
)

# Elf64_Phdr: 56 bytes, p_flags right after p_type
_PHDR64 = _fields(
    ("p_type", 0, 4),
    ("p_flags", 4, 4),
    ("p_offset", 8, 8),
    ("p_vaddr", 16, 8),
    ("p_paddr", 24, 8),
    ("p_filesz", 32, 8),
    ("p_memsz", 40, 8),
    ("p_align", 48, 8),
)

# Elf64_Shdr: 64 bytes
_SHDR64 = _fields(
    ("sh_name", 0, 4),
    ("sh_type", 4, 4),
    ("sh_flags", 8, 8),
    ("sh_addr", 16, 8),
    ("sh_offset", 24, 8),
    ("sh_size", 32, 8),
    ("sh_link", 40, 4),
    ("sh_info", 44, 4),
    ("sh_addralign", 48, 8),
    ("sh_entsize", 56, 8),
)


ELF32_LAYOUT = ElfLayout(
    elf_class=ElfClass.ELF32,
    file_header=RecordLayout("file header", FileHeader, _EHDR32),
    program_header=RecordLayout("program header", ProgramHeaderEntry, _PHDR32),
    section_header=RecordLayout("section header", SectionHeaderEntry, _SHDR32),
)

ELF64_LAYOUT = ElfLayout(
    elf_class=ElfClass.ELF64,
    file_header=RecordLayout("file header", FileHeader, _EHDR64),
    program_header=RecordLayout("program header", ProgramHeaderEntry, _PHDR64),
    section_header=RecordLayout("section header", SectionHeaderEntry, _SHDR64),
)

_LAYOUTS: dict[ElfClass, ElfLayout] = {
    ElfClass.ELF32: ELF32_LAYOUT,
    ElfClass.ELF64: ELF64_LAYOUT,
}


def layout_for(elf_class: ElfClass) -> ElfLayout:
    """Return the record layouts for *elf_class*."""
    return _LAYOUTS[elf_class]
