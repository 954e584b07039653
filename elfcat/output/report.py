"""
elfcat Report Generator
========================

Generates a self-contained HTML report and a JSON report from a
:class:`~elfcat.core.models.DecodedElf`.

The centre of the HTML report is a hex dump of the whole input in which
every byte is wrapped in the CSS classes of the structures that own it,
according to the range overlay.  Whole-structure ranges (file header,
program header, section header) set the background colour; field ranges
add an outline and a tooltip with the field name.  When several ranges of
the same tier cover a byte, the last one recorded wins.

All text that originates from the input file is HTML-escaped.
"""

from __future__ import annotations

import html
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Sequence

from elfcat.core.models import DecodedElf, RangeLabel, RangeOverlay
from elfcat.parsers.names import (
    file_type_name,
    machine_name,
    section_flags_str,
    section_type_name,
    segment_flags_str,
    segment_type_name,
)
from elfcat.utils import human_format_bytes


# ---------------------------------------------------------------------------
# HTML Template Components
# ---------------------------------------------------------------------------

_HTML_HEADER = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{title}</title>
<style>
  :root {{
    --bg-primary: #0d1117;
    --bg-secondary: #161b22;
    --bg-tertiary: #21262d;
    --text-primary: #c9d1d9;
    --text-secondary: #8b949e;
    --accent-cyan: #58a6ff;
    --accent-magenta: #bc8cff;
    --accent-yellow: #d29922;
    --border-color: #30363d;
    --ehdr: #1f4d2e;
    --phdr: #4d3a1f;
    --shdr: #1f3a4d;
  }}
  * {{ margin: 0; padding: 0; box-sizing: border-box; }}
  body {{
    font-family: 'Segoe UI', -apple-system, BlinkMacSystemFont, sans-serif;
    background: var(--bg-primary);
    color: var(--text-primary);
    line-height: 1.6;
    padding: 2rem;
  }}
  h1, h2 {{ color: var(--accent-cyan); margin-bottom: 1rem; }}
  h1 {{ font-size: 1.8rem; border-bottom: 2px solid var(--accent-magenta); padding-bottom: 0.5rem; }}
  h2 {{ font-size: 1.3rem; margin-top: 2rem; border-bottom: 1px solid var(--border-color); }}
  table {{ border-collapse: collapse; margin: 1rem 0; background: var(--bg-secondary); }}
  th {{
    background: var(--bg-tertiary);
    color: var(--accent-magenta);
    padding: 0.4rem 0.8rem;
    text-align: left;
    border: 1px solid var(--border-color);
  }}
  td {{ padding: 0.3rem 0.8rem; border: 1px solid var(--border-color); font-size: 0.85rem; }}
  .mono, .dump {{ font-family: 'Consolas', 'Monaco', monospace; font-size: 0.85rem; }}
  .warn {{ color: var(--accent-yellow); }}
  .dump .row {{ white-space: pre; }}
  .dump .offset {{ color: var(--text-secondary); }}
  .dump .ascii {{ color: var(--text-secondary); }}
  .ehdr {{ background: var(--ehdr); }}
  .phdr {{ background: var(--phdr); }}
  .shdr {{ background: var(--shdr); }}
  .field {{ outline: 1px solid var(--border-color); }}
  .field:hover {{ outline-color: var(--accent-cyan); }}
  .footer {{
    margin-top: 3rem;
    padding-top: 1rem;
    border-top: 1px solid var(--border-color);
    color: var(--text-secondary);
    font-size: 0.85rem;
  }}
</style>
</head>
<body>
"""

_HTML_FOOTER = """\
<div class="footer">
  <p>Generated by elfcat at {timestamp}</p>
</div>
</body>
</html>
"""


def _hex(value: int) -> str:
    return f"0x{value:x}"


# ---------------------------------------------------------------------------
# ElfReportGenerator
# ---------------------------------------------------------------------------

class ElfReportGenerator:
    """Render a :class:`DecodedElf` as HTML or JSON.

    Usage::

        generator = ElfReportGenerator(bytes_per_row=16)
        generator.generate_html(decoded, "ls.html")
        generator.generate_json(decoded, "ls.json")
    """

    def __init__(self, bytes_per_row: int = 16) -> None:
        if bytes_per_row <= 0:
            raise ValueError("bytes_per_row must be positive")
        self._bytes_per_row = bytes_per_row

    # ------------------------------------------------------------------ #
    #  HTML
    # ------------------------------------------------------------------ #

    def render_html(self, decoded: DecodedElf) -> str:
        """Return the complete HTML report as a string."""
        title = f"elfcat - {decoded.filename}"
        parts: list[str] = [_HTML_HEADER.format(title=html.escape(title))]
        parts.append(f"<h1>{html.escape(title)}</h1>")
        parts.append(self._html_summary(decoded))
        parts.append(self._html_file_header(decoded))
        if decoded.program_headers:
            parts.append(self._html_program_headers(decoded))
        if decoded.section_headers:
            parts.append(self._html_section_headers(decoded))
        parts.append("<h2>Hex Dump</h2>")
        parts.append(self._html_hexdump(decoded.contents, decoded.overlay))

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        parts.append(_HTML_FOOTER.format(timestamp=timestamp))
        return "\n".join(parts)

    def generate_html(self, decoded: DecodedElf, output_path: str | Path) -> str:
        """Write the HTML report to *output_path*.

        Returns:
            The absolute path of the generated report.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render_html(decoded), encoding="utf-8")
        return str(path.resolve())

    # ------------------------------------------------------------------ #
    #  JSON
    # ------------------------------------------------------------------ #

    @staticmethod
    def to_json_dict(decoded: DecodedElf) -> dict[str, Any]:
        """Structured report data; the raw contents are omitted."""
        return {
            "report_type": "elfcat_structure",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "size": decoded.size,
            **decoded.model_dump(mode="json", exclude={"contents"}),
        }

    def generate_json(self, decoded: DecodedElf, output_path: str | Path) -> str:
        """Write the JSON report to *output_path*.

        Returns:
            The absolute path of the generated report.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_json_dict(decoded), f, indent=2, ensure_ascii=False)
        return str(path.resolve())

    # ------------------------------------------------------------------ #
    #  HTML section builders
    # ------------------------------------------------------------------ #

    @staticmethod
    def _html_table(headings: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
        """Build a table; cells must already be escaped."""
        head = "".join(f"<th>{h}</th>" for h in headings)
        body = "\n".join(
            "<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>"
            for row in rows
        )
        return f"<table>\n<tr>{head}</tr>\n{body}\n</table>"

    def _html_summary(self, decoded: DecodedElf) -> str:
        rows = [
            ["File", f'<span class="mono">{html.escape(decoded.filename)}</span>'],
            ["Size", f"{decoded.size:,} bytes ({human_format_bytes(decoded.size)})"],
        ]
        for label, description in decoded.summary:
            css = ' class="warn"' if label.endswith("(!)") else ""
            rows.append([
                f"<span{css}>{html.escape(label)}</span>",
                html.escape(description),
            ])
        return "<h2>Identification</h2>\n" + self._html_table(["Property", "Value"], rows)

    def _html_file_header(self, decoded: DecodedElf) -> str:
        header = decoded.file_header
        described = {
            "e_type": file_type_name(header.e_type),
            "e_machine": machine_name(header.e_machine),
        }
        rows = [
            [
                f'<span class="mono">{name}</span>',
                f'<span class="mono">{_hex(value)}</span>',
                html.escape(described.get(name, str(value))),
            ]
            for name, value in header.model_dump().items()
        ]
        return "<h2>File Header</h2>\n" + self._html_table(["Field", "Raw", "Value"], rows)

    def _html_program_headers(self, decoded: DecodedElf) -> str:
        rows = [
            [
                str(i),
                html.escape(segment_type_name(ph.p_type)),
                segment_flags_str(ph.p_flags),
                _hex(ph.p_offset),
                _hex(ph.p_vaddr),
                _hex(ph.p_paddr),
                _hex(ph.p_filesz),
                _hex(ph.p_memsz),
                _hex(ph.p_align),
            ]
            for i, ph in enumerate(decoded.program_headers)
        ]
        headings = ["#", "Type", "Flags", "Offset", "VirtAddr", "PhysAddr",
                    "FileSiz", "MemSiz", "Align"]
        return "<h2>Program Headers</h2>\n" + self._html_table(headings, rows)

    def _html_section_headers(self, decoded: DecodedElf) -> str:
        rows = [
            [
                str(i),
                html.escape(sh.name) or "&lt;unnamed&gt;",
                html.escape(section_type_name(sh.sh_type)),
                section_flags_str(sh.sh_flags),
                _hex(sh.sh_addr),
                _hex(sh.sh_offset),
                _hex(sh.sh_size),
                str(sh.sh_link),
                str(sh.sh_info),
                _hex(sh.sh_addralign),
                _hex(sh.sh_entsize),
            ]
            for i, sh in enumerate(decoded.section_headers)
        ]
        headings = ["#", "Name", "Type", "Flags", "Address", "Offset", "Size",
                    "Link", "Info", "Align", "EntSize"]
        return "<h2>Section Headers</h2>\n" + self._html_table(headings, rows)

    # ------------------------------------------------------------------ #
    #  Hex dump
    # ------------------------------------------------------------------ #

    @staticmethod
    def _byte_owners(
        overlay: RangeOverlay,
        size: int,
    ) -> tuple[list[Optional[RangeLabel]], list[Optional[RangeLabel]]]:
        """Per-byte (structure, field) owners; later ranges override."""
        structures: list[Optional[RangeLabel]] = [None] * size
        fields: list[Optional[RangeLabel]] = [None] * size
        for entry in overlay.entries:
            target = fields if entry.label.kind.is_field else structures
            for offset in range(entry.start, entry.end):
                target[offset] = entry.label
        return structures, fields

    @staticmethod
    def _open_span(structure: Optional[RangeLabel], field: Optional[RangeLabel]) -> str:
        classes: list[str] = []
        if structure is not None:
            classes.append(structure.css_class)
        if field is not None:
            classes.extend(["field", field.css_class])
        if not classes:
            return ""
        title = f' title="{html.escape(str(field))}"' if field is not None else ""
        return f'<span class="{" ".join(classes)}"{title}>'

    def _html_hexdump(self, contents: bytes, overlay: RangeOverlay) -> str:
        structures, fields = self._byte_owners(overlay, len(contents))
        width = self._bytes_per_row
        rows: list[str] = []

        for row_start in range(0, len(contents), width):
            row_end = min(row_start + width, len(contents))
            runs: list[tuple[tuple[Optional[RangeLabel], Optional[RangeLabel]], list[str]]] = []
            for offset in range(row_start, row_end):
                owners = (structures[offset], fields[offset])
                if not runs or runs[-1][0] != owners:
                    runs.append((owners, []))
                runs[-1][1].append(f"{contents[offset]:02x}")

            pieces: list[str] = []
            for owners, cells in runs:
                span = self._open_span(*owners)
                text = " ".join(cells)
                pieces.append(f"{span}{text}</span>" if span else text)
            hex_text = " ".join(pieces)

            padding = "   " * (width - (row_end - row_start))
            ascii_text = html.escape(
                "".join(
                    chr(b) if 0x20 <= b < 0x7F else "."
                    for b in contents[row_start:row_end]
                )
            )
            rows.append(
                f'<div class="row"><span class="offset">{row_start:08x}</span>  '
                f'{hex_text}{padding}  <span class="ascii">{ascii_text}</span></div>'
            )

        return '<div class="dump">\n' + "\n".join(rows) + "\n</div>"
