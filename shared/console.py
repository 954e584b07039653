"""
elfcat Console Interface
=========================

Rich-powered console wrapper giving every elfcat front end the same
section rules, status-line prefixes and table styling.

References:
    - Rich library: https://github.com/Textualize/rich
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.table import Table
from rich.theme import Theme


_ELFCAT_THEME = Theme(
    {
        "elfcat.section": "bold bright_magenta",
        "elfcat.success": "bold green",
        "elfcat.warning": "bold yellow",
        "elfcat.error": "bold red",
        "elfcat.info": "bold bright_blue",
        "elfcat.dim": "dim white",
        "elfcat.highlight": "bold bright_white",
    }
)


class ElfcatConsole:
    """Unified console output for elfcat.

    Usage::

        con = ElfcatConsole()
        con.section("File Header")
        con.success("Report written")
    """

    def __init__(self, *, quiet: bool = False, record: bool = False, stderr: bool = False) -> None:
        """Initialise the console.

        Args:
            quiet:  Suppress all output.
            record: Enable Rich recording for text / HTML export.
            stderr: Write to standard error instead of standard output.
        """
        self._console = Console(
            theme=_ELFCAT_THEME,
            quiet=quiet,
            record=record,
            stderr=stderr,
            highlight=False,
        )

    @property
    def rich(self) -> Console:
        """The underlying Rich Console instance."""
        return self._console

    # ------------------------------------------------------------------ #
    #  Headings and status lines
    # ------------------------------------------------------------------ #

    def section(self, title: str) -> None:
        """Print a horizontal rule with *title*."""
        self._console.rule(f"  {title}  ", style="elfcat.section", characters="─")
        self._console.print()

    def success(self, message: str) -> None:
        self._console.print(f"[elfcat.success][✔] SUCCESS:[/elfcat.success] {message}")

    def warning(self, message: str) -> None:
        self._console.print(f"[elfcat.warning][⚠] WARNING:[/elfcat.warning] {message}")

    def error(self, message: str) -> None:
        self._console.print(f"[elfcat.error][✘] ERROR:[/elfcat.error] {message}")

    def info(self, message: str) -> None:
        self._console.print(f"[elfcat.info][ℹ] INFO:[/elfcat.info] {message}")

    # ------------------------------------------------------------------ #
    #  Tables
    # ------------------------------------------------------------------ #

    def table(
        self,
        title: str,
        columns: Sequence[str],
        rows: Sequence[Sequence[Any]],
        *,
        right_align: Sequence[str] = (),
    ) -> Table:
        """Build and print a styled table.

        Args:
            title: Table title.
            columns: Column headings.
            rows: Row values; converted with :func:`str`.
            right_align: Column headings whose cells are right-justified.

        Returns:
            The printed :class:`rich.table.Table`.
        """
        tbl = Table(
            title=title,
            title_style="elfcat.highlight",
            border_style="bright_cyan",
            header_style="bold bright_magenta",
            padding=(0, 1),
        )
        for col in columns:
            tbl.add_column(col, justify="right" if col in right_align else "left")
        for row in rows:
            tbl.add_row(*(str(cell) for cell in row))
        self._console.print(tbl)
        return tbl

    # ------------------------------------------------------------------ #
    #  Misc
    # ------------------------------------------------------------------ #

    def blank(self, count: int = 1) -> None:
        for _ in range(count):
            self._console.print()

    def divider(self, style: str = "dim") -> None:
        self._console.rule(style=style)

    def export_text(self) -> str:
        """Return everything printed so far (requires ``record=True``)."""
        return self._console.export_text()
