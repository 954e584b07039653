import pytest

from elfcat.parsers.identification import (
    describe_class,
    describe_data_encoding,
    describe_osabi,
    summarize_identification,
)

from conftest import ident


@pytest.mark.parametrize("describe", [describe_class, describe_data_encoding, describe_osabi])
def test_descriptions_are_total(describe):
    for value in range(256):
        text = describe(value)
        assert isinstance(text, str) and text


def test_known_values():
    assert describe_class(1) == "32-bit objects"
    assert describe_class(2) == "64-bit objects"
    assert describe_data_encoding(1) == "Little endian"
    assert describe_data_encoding(2) == "Big endian"
    assert describe_osabi(0) == "SysV"
    assert describe_osabi(3) == "Linux"
    assert describe_osabi(255) == "Standalone"


def test_unknown_values_fall_back():
    assert describe_class(0) == "Unknown: 0"
    assert describe_class(3) == "Unknown: 3"
    assert describe_data_encoding(7) == "Unknown: 7"
    assert describe_osabi(200) == "Unknown: 200"


def test_common_file_has_no_warnings():
    assert summarize_identification(ident()) == (
        ("Class", "64-bit objects"),
        ("Data encoding", "Little endian"),
        ("ABI", "SysV"),
    )


def test_uncommon_version_is_flagged_in_order():
    summary = summarize_identification(ident(elf_class=1, data=2, version=0))
    assert summary == (
        ("Class", "32-bit objects"),
        ("Data encoding", "Big endian"),
        ("Uncommon version(!)", "0"),
        ("ABI", "SysV"),
    )


def test_non_sysv_abi_flags_abi_version():
    summary = summarize_identification(ident(osabi=3, abi_version=0))
    assert ("ABI", "Linux") in summary
    assert summary[-1] == ("Uncommon ABI version(!)", "0")


def test_sysv_with_nonzero_abi_version_is_flagged():
    summary = summarize_identification(ident(abi_version=2))
    assert summary[-1] == ("Uncommon ABI version(!)", "2")


def test_requires_full_ident():
    with pytest.raises(ValueError):
        summarize_identification(b"\x7fELF\x02")
