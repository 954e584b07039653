"""
ELF Structural Decoder
=======================

Decodes the structural skeleton of an ELF file -- identification bytes,
file header, program header table and section header table -- and records
the byte span of every decoded structure and field in a range overlay.

All four (class, byte order) combinations are handled by one code path
written against :class:`~elfcat.parsers.schemas.ElfLayout`; the layout and
the byte order are picked once from ``e_ident``.

Failure policy:
    - Fatal (raises :class:`~elfcat.core.errors.ElfError`): buffer shorter
      than ``e_ident`` or than the file header, bad magic, unknown class or
      data encoding, ``e_ehsize`` reaching past the buffer.
    - Non-fatal (recorded in :attr:`DecodedElf.notes`): identification
      anomalies, ``e_ehsize`` differing from the architectural size, header
      tables that are truncated or use too small an entry size.  A table
      stops at the first entry that cannot be decoded; entries decoded
      before it are kept.

References:
    - TIS Committee. (1995). Tool Interface Standard (TIS) Executable and
      Linkable Format (ELF) Specification, Version 1.2.
    - Linux man page: elf(5).
"""

from __future__ import annotations

from typing import Optional

from shared.logger import ElfcatLogger

from elfcat.core.errors import (
    BadMagic,
    BufferTooSmall,
    OutOfBoundsRange,
    TruncatedField,
    UnsupportedClass,
    UnsupportedEncoding,
)
from elfcat.core.models import (
    DecodedElf,
    ElfClass,
    Encoding,
    FileHeader,
    RangeKind,
    RangeLabel,
    SectionHeaderEntry,
    TableSummary,
)
from elfcat.parsers.identification import summarize_identification
from elfcat.parsers.ranges import RangeOverlayBuilder
from elfcat.parsers.schemas import (
    EI_CLASS,
    EI_DATA,
    EI_NIDENT,
    ELF_MAGIC,
    ELFCLASS32,
    ELFCLASS64,
    ELFDATA2LSB,
    ELFDATA2MSB,
    ElfLayout,
    RecordLayout,
    layout_for,
)


_CLASSES: dict[int, ElfClass] = {
    ELFCLASS32: ElfClass.ELF32,
    ELFCLASS64: ElfClass.ELF64,
}

_ENCODINGS: dict[int, Encoding] = {
    ELFDATA2LSB: Encoding.LITTLE,
    ELFDATA2MSB: Encoding.BIG,
}


# ---------------------------------------------------------------------------
# Identification
# ---------------------------------------------------------------------------

def validate_identification(data: bytes) -> tuple[tuple[str, str], ...]:
    """Check the identification bytes and summarise them.

    Only two conditions are fatal: fewer than 16 bytes and a magic
    mismatch.  Everything else is reported in the returned summary.

    Raises:
        BufferTooSmall: If *data* is shorter than ``e_ident``.
        BadMagic: If the first four bytes are not ``7F 45 4C 46``.
    """
    if len(data) < EI_NIDENT:
        raise BufferTooSmall(
            f"file smaller than ELF identification ({len(data)} < {EI_NIDENT} bytes)"
        )
    if bytes(data[:4]) != ELF_MAGIC:
        raise BadMagic("mismatched magic: not an ELF file")
    return summarize_identification(bytes(data[:EI_NIDENT]))


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------

class ELFDecoder:
    """Single-use structural decoder for one ELF buffer.

    Usage::

        decoded = ELFDecoder(raw_bytes, "a.out").decode()
        for entry in decoded.overlay.entries:
            print(entry.start, entry.length, entry.label)

    The decoder holds state only for the duration of :meth:`decode`; the
    returned :class:`DecodedElf` shares nothing mutable with it.
    """

    def __init__(
        self,
        data: bytes,
        filename: str,
        logger: ElfcatLogger | None = None,
    ) -> None:
        """Initialise the decoder.

        Args:
            data: Complete file contents.
            filename: Label for the input; never reopened.
            logger: Logger instance.  A new one is created if not provided.
        """
        self._data: bytes = bytes(data)
        self._filename: str = filename
        self._logger: ElfcatLogger = logger or ElfcatLogger("decoder")
        self._notes: list[tuple[str, str]] = []

    # ------------------------------------------------------------------ #
    #  Public interface
    # ------------------------------------------------------------------ #

    def decode(self) -> DecodedElf:
        """Decode the buffer into a :class:`DecodedElf`.

        Raises:
            ElfError: On any fatal check (see module docstring).
        """
        data = self._data
        self._notes = []

        identification = validate_identification(data)

        elf_class = _CLASSES.get(data[EI_CLASS])
        if elf_class is None:
            raise UnsupportedClass(
                f"unsupported ELF class {data[EI_CLASS]}",
                identification=identification,
            )
        encoding = _ENCODINGS.get(data[EI_DATA])
        if encoding is None:
            raise UnsupportedEncoding(
                f"unsupported ELF data encoding {data[EI_DATA]}",
                identification=identification,
            )

        layout = layout_for(elf_class)
        if len(data) < layout.file_header.size:
            raise BufferTooSmall(
                f"file smaller than {elf_class.bits}-bit ELF file header "
                f"({len(data)} < {layout.file_header.size} bytes)",
                identification=identification,
            )

        self._logger.debug(
            "Decoding %s as %d-bit %s-endian ELF (%d bytes)",
            self._filename, elf_class.bits, encoding.value, len(data),
        )

        header = layout.file_header.decode(data, 0, encoding)
        ranges = RangeOverlayBuilder(len(data))

        try:
            self._record_file_header(header, layout, ranges)
        except OutOfBoundsRange as exc:
            raise OutOfBoundsRange(
                f"file header: {exc}", identification=identification
            ) from exc

        program_headers, program_table = self._decode_table(
            RangeKind.PROGRAM_HEADER,
            RangeKind.PROGRAM_HEADER_FIELD,
            layout.program_header,
            header.e_phoff,
            header.e_phnum,
            header.e_phentsize,
            encoding,
            ranges,
        )
        section_headers, section_table = self._decode_table(
            RangeKind.SECTION_HEADER,
            RangeKind.SECTION_HEADER_FIELD,
            layout.section_header,
            header.e_shoff,
            header.e_shnum,
            header.e_shentsize,
            encoding,
            ranges,
        )
        section_headers = self._resolve_section_names(
            section_headers, header.e_shstrndx, header.e_shnum
        )

        return DecodedElf(
            filename=self._filename,
            identification=identification,
            contents=data,
            elf_class=elf_class,
            encoding=encoding,
            file_header=header,
            program_headers=tuple(program_headers),
            section_headers=tuple(section_headers),
            overlay=ranges.finalize(),
            program_table=program_table,
            section_table=section_table,
            notes=tuple(self._notes),
        )

    # ------------------------------------------------------------------ #
    #  File header
    # ------------------------------------------------------------------ #

    def _record_file_header(
        self,
        header: FileHeader,
        layout: ElfLayout,
        ranges: RangeOverlayBuilder,
    ) -> None:
        """Record the file header span, ``e_ident`` and every field."""
        expected = layout.file_header.size
        if header.e_ehsize != expected:
            self._note(
                "Uncommon header size(!)",
                f"{header.e_ehsize} (expected {expected})",
            )

        ranges.add_range(0, header.e_ehsize, RangeLabel(kind=RangeKind.FILE_HEADER))
        ranges.add_range(
            0, EI_NIDENT,
            RangeLabel(kind=RangeKind.FILE_HEADER_FIELD, field="e_ident"),
        )
        for spec in layout.file_header.fields:
            ranges.add_range(
                spec.offset, spec.width,
                RangeLabel(kind=RangeKind.FILE_HEADER_FIELD, field=spec.name),
            )

    # ------------------------------------------------------------------ #
    #  Header tables
    # ------------------------------------------------------------------ #

    def _decode_table(
        self,
        whole_kind: RangeKind,
        field_kind: RangeKind,
        record: RecordLayout,
        table_offset: int,
        count: int,
        entry_size: int,
        encoding: Encoding,
        ranges: RangeOverlayBuilder,
    ) -> tuple[list, TableSummary]:
        """Walk one header table, stopping at the first undecodable entry.

        Every iteration either consumes *entry_size* bytes or ends the
        walk, so a zero entry size cannot loop.
        """
        data = self._data
        view = memoryview(data)
        entries: list = []
        reason = ""

        for index in range(count):
            start = table_offset + index * entry_size
            end = start + entry_size
            if end > len(data):
                reason = (
                    f"entry {index} at 0x{start:x} extends past end of file"
                )
                break
            try:
                entry = record.decode(view[start:end], 0, encoding)
            except TruncatedField:
                reason = (
                    f"entry {index}: declared entry size {entry_size} is "
                    f"smaller than the {record.size}-byte {record.name}"
                )
                break

            ranges.add_range(start, entry_size, RangeLabel(kind=whole_kind, index=index))
            for spec in record.fields:
                ranges.add_range(
                    start + spec.offset, spec.width,
                    RangeLabel(kind=field_kind, field=spec.name, index=index),
                )
            entries.append(entry)

        if reason:
            self._note(
                f"Truncated {record.name} table(!)",
                f"{len(entries)} of {count} entries decoded: {reason}",
            )
            self._logger.warning(
                "%s: %s table truncated after %d of %d entries (%s)",
                self._filename, record.name, len(entries), count, reason,
            )

        summary = TableSummary(
            offset=table_offset,
            entry_size=entry_size,
            declared=count,
            decoded=len(entries),
            truncated_reason=reason,
        )
        return entries, summary

    # ------------------------------------------------------------------ #
    #  Section names
    # ------------------------------------------------------------------ #

    def _resolve_section_names(
        self,
        sections: list[SectionHeaderEntry],
        shstrndx: int,
        shnum: int,
    ) -> list[SectionHeaderEntry]:
        """Fill in :attr:`SectionHeaderEntry.name` from ``e_shstrndx``.

        Left unresolved when the index or the string table is out of
        bounds; this never fails the decode.
        """
        if shstrndx == 0 or shstrndx >= shnum:
            return sections
        if shstrndx >= len(sections):
            self._note(
                "Unresolved section names(!)",
                f"string table section {shstrndx} was not decoded",
            )
            return sections

        strtab_sh = sections[shstrndx]
        strtab_start = strtab_sh.sh_offset
        strtab_end = strtab_start + strtab_sh.sh_size
        if strtab_end > len(self._data):
            self._note(
                "Unresolved section names(!)",
                f"string table section {shstrndx} extends past end of file",
            )
            return sections

        strtab = self._data[strtab_start:strtab_end]
        return [
            sh.model_copy(update={"name": _read_cstring(strtab, sh.sh_name)})
            for sh in sections
        ]

    # ------------------------------------------------------------------ #
    #  Utility methods
    # ------------------------------------------------------------------ #

    def _note(self, label: str, description: str) -> None:
        self._notes.append((label, description))


def _read_cstring(data: bytes, offset: int) -> str:
    """Read a NUL-terminated string; ``""`` when *offset* is out of range."""
    if offset < 0 or offset >= len(data):
        return ""
    end = data.find(b"\x00", offset)
    if end == -1:
        end = len(data)
    return data[offset:end].decode("ascii", errors="replace")


def decode(
    data: bytes,
    filename: str,
    logger: Optional[ElfcatLogger] = None,
) -> DecodedElf:
    """Decode *data* into a :class:`DecodedElf`.

    Convenience wrapper around :class:`ELFDecoder`.

    Raises:
        ElfError: If identification or the file header cannot be decoded.
    """
    return ELFDecoder(data, filename, logger=logger).decode()
