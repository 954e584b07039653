import json

import pytest

from elfcat.output.console import ElfConsoleOutput
from elfcat.output.report import ElfReportGenerator
from elfcat.parsers.elf_parser import decode
from elfcat.utils import basename, construct_filename, human_format_bytes
from shared.console import ElfcatConsole

from conftest import build_elf


@pytest.fixture
def decoded_sample(sample_elf64):
    return decode(sample_elf64, "sample")


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

def test_hexdump_marks_header_fields(minimal_elf64):
    page = ElfReportGenerator().render_html(decode(minimal_elf64, "a.out"))
    assert '<span class="ehdr field e_ident" title="e_ident">7f 45 4c 46' in page
    assert (
        '<span class="ehdr field e_phoff" title="e_phoff">'
        "00 00 00 00 00 00 00 00</span>"
    ) in page
    assert '<div class="row"><span class="offset">00000030</span>' in page


def test_hexdump_marks_indexed_table_fields(decoded_sample):
    page = ElfReportGenerator().render_html(decoded_sample)
    assert '<span class="phdr field p_vaddr" title="p_vaddr[0]">' in page
    assert '<span class="shdr field sh_name" title="sh_name[1]">' in page


def test_untouched_bytes_are_not_wrapped():
    data = build_elf(64, "<", trailer=b"ABCD")
    page = ElfReportGenerator(bytes_per_row=4).render_html(decode(data, "tail"))
    assert '<span class="offset">00000040</span>  41 42 43 44  <span class="ascii">ABCD</span>' in page


def test_input_text_is_escaped():
    data = build_elf(64, "<", trailer=b"<a&b>")
    page = ElfReportGenerator().render_html(decode(data, "<script>x</script>"))
    assert "<script>x</script>" not in page
    assert "&lt;script&gt;x&lt;/script&gt;" in page
    assert "&lt;a&amp;b&gt;" in page


def test_notes_are_highlighted():
    data = build_elf(64, "<", e_phoff=0x10000, e_phnum=1)
    page = ElfReportGenerator().render_html(decode(data, "broken"))
    assert '<span class="warn">Truncated program header table(!)</span>' in page


def test_section_names_in_report(decoded_sample):
    page = ElfReportGenerator().render_html(decoded_sample)
    assert "<td>.text</td>" in page
    assert "<td>&lt;unnamed&gt;</td>" in page


def test_generate_html_writes_file(decoded_sample, tmp_path):
    target = tmp_path / "nested" / "sample.html"
    written = ElfReportGenerator().generate_html(decoded_sample, target)
    assert written == str(target.resolve())
    assert target.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")


def test_bytes_per_row_must_be_positive():
    with pytest.raises(ValueError):
        ElfReportGenerator(bytes_per_row=0)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def test_json_report_omits_contents(decoded_sample, tmp_path):
    path = ElfReportGenerator().generate_json(decoded_sample, tmp_path / "sample.json")
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)

    assert "contents" not in data
    assert data["report_type"] == "elfcat_structure"
    assert data["size"] == decoded_sample.size
    assert data["elf_class"] == "elf64"
    assert data["encoding"] == "little"
    assert data["file_header"]["e_shstrndx"] == 2
    assert [sh["name"] for sh in data["section_headers"]] == ["", ".text", ".shstrtab"]
    assert data["overlay"]["entries"][0] == {
        "start": 0,
        "length": 64,
        "label": {"kind": "ehdr", "field": None, "index": None},
    }


# ---------------------------------------------------------------------------
# Terminal output
# ---------------------------------------------------------------------------

def test_console_output_lists_structure(decoded_sample):
    console = ElfcatConsole(record=True)
    ElfConsoleOutput(console=console).display(decoded_sample)
    text = console.export_text()

    assert "64-bit objects" in text
    assert "Program Headers" in text
    assert "2 of 2 entries decoded" in text
    assert ".shstrtab" in text
    assert "ehdr_field" in text


def test_console_output_warns_on_truncation():
    data = build_elf(64, "<", e_phoff=0x10000, e_phnum=3)
    console = ElfcatConsole(record=True)
    ElfConsoleOutput(console=console).display(decode(data, "broken"))
    assert "WARNING" in console.export_text()


# ---------------------------------------------------------------------------
# Naming helpers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.0 KiB"),
        (1536, "1.5 KiB"),
        (1024 ** 2, "1.0 MiB"),
        (1024 ** 3, "1.0 GiB"),
        (5 * 1024 ** 4, "5.0 TiB"),
    ],
)
def test_human_format_bytes(size, expected):
    assert human_format_bytes(size) == expected


def test_construct_filename():
    assert construct_filename("/usr/bin/ls") == "ls.html"
    assert construct_filename("build/app.elf", ".json") == "app.elf.json"
    assert construct_filename("") is None
    assert basename("/") is None
    assert basename("dir/file") == "file"
