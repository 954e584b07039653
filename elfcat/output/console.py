"""
elfcat Console Output
======================

Rich-formatted terminal summary of a decoded ELF file: identification
panel, file header, program and section header tables, and a count of the
recorded byte ranges per structure kind.
"""

from __future__ import annotations

from collections import Counter

from rich.panel import Panel

from shared.console import ElfcatConsole

from elfcat.core.models import DecodedElf, TableSummary
from elfcat.parsers.names import (
    file_type_name,
    machine_name,
    section_flags_str,
    section_type_name,
    segment_flags_str,
    segment_type_name,
)
from elfcat.utils import human_format_bytes


class ElfConsoleOutput:
    """Prints a :class:`DecodedElf` to the terminal.

    Usage::

        ElfConsoleOutput().display(decoded)
    """

    def __init__(self, console: ElfcatConsole | None = None) -> None:
        self._console: ElfcatConsole = console or ElfcatConsole()

    def display(self, decoded: DecodedElf) -> None:
        """Display every part of the decoded file."""
        self.display_identification(decoded)
        self.display_file_header(decoded)
        self.display_program_headers(decoded)
        self.display_section_headers(decoded)
        self.display_overlay_summary(decoded)
        self._console.divider()

    def display_identification(self, decoded: DecodedElf) -> None:
        lines: list[str] = [
            f"[bold]File:[/bold] {decoded.filename}",
            f"[bold]Size:[/bold] {decoded.size:,} bytes ({human_format_bytes(decoded.size)})",
        ]
        for label, description in decoded.summary:
            style = "bold yellow" if label.endswith("(!)") else "bold"
            lines.append(f"[{style}]{label}:[/{style}] {description}")

        panel = Panel(
            "\n".join(lines),
            title="[bold bright_cyan]Identification[/bold bright_cyan]",
            border_style="bright_cyan",
            padding=(1, 2),
        )
        self._console.rich.print(panel)
        self._console.blank()

    def display_file_header(self, decoded: DecodedElf) -> None:
        header = decoded.file_header
        described = {
            "e_type": file_type_name(header.e_type),
            "e_machine": machine_name(header.e_machine),
        }
        rows = [
            (name, f"0x{value:x}", described.get(name, str(value)))
            for name, value in header.model_dump().items()
        ]
        self._console.section("File Header")
        self._console.table("", ["Field", "Raw", "Value"], rows, right_align=["Raw"])

    def display_program_headers(self, decoded: DecodedElf) -> None:
        self._console.section("Program Headers")
        self._table_status(decoded.program_table)
        if not decoded.program_headers:
            return
        rows = [
            (
                i,
                segment_type_name(ph.p_type),
                segment_flags_str(ph.p_flags),
                f"0x{ph.p_offset:x}",
                f"0x{ph.p_vaddr:x}",
                f"0x{ph.p_filesz:x}",
                f"0x{ph.p_memsz:x}",
                f"0x{ph.p_align:x}",
            )
            for i, ph in enumerate(decoded.program_headers)
        ]
        self._console.table(
            "",
            ["#", "Type", "Flags", "Offset", "VirtAddr", "FileSiz", "MemSiz", "Align"],
            rows,
            right_align=["#", "Offset", "VirtAddr", "FileSiz", "MemSiz", "Align"],
        )

    def display_section_headers(self, decoded: DecodedElf) -> None:
        self._console.section("Section Headers")
        self._table_status(decoded.section_table)
        if not decoded.section_headers:
            return
        rows = [
            (
                i,
                sh.name or "<unnamed>",
                section_type_name(sh.sh_type),
                section_flags_str(sh.sh_flags),
                f"0x{sh.sh_addr:x}",
                f"0x{sh.sh_offset:x}",
                f"0x{sh.sh_size:x}",
            )
            for i, sh in enumerate(decoded.section_headers)
        ]
        self._console.table(
            "",
            ["#", "Name", "Type", "Flags", "Address", "Offset", "Size"],
            rows,
            right_align=["#", "Address", "Offset", "Size"],
        )

    def display_overlay_summary(self, decoded: DecodedElf) -> None:
        counts = Counter(entry.label.kind.value for entry in decoded.overlay.entries)
        self._console.section("Range Overlay")
        self._console.table(
            "",
            ["Kind", "Ranges"],
            sorted(counts.items()),
            right_align=["Ranges"],
        )

    def _table_status(self, table: TableSummary) -> None:
        message = (
            f"{table.decoded} of {table.declared} entries decoded "
            f"(offset 0x{table.offset:x}, entry size {table.entry_size})"
        )
        if table.truncated:
            self._console.warning(f"{message}: {table.truncated_reason}")
        else:
            self._console.info(message)
