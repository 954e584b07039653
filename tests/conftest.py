"""Synthetic ELF images for the test suite."""

from __future__ import annotations

import struct
from typing import Callable, Optional, Sequence

import pytest


EHDR_SIZE = {32: 52, 64: 64}
PHDR_SIZE = {32: 32, 64: 56}
SHDR_SIZE = {32: 40, 64: 64}

# After the 16 e_ident bytes.
_EHDR_FMT = {32: "HHIIIIIHHHHHH", 64: "HHIQQQIHHHHHH"}
_PHDR_FMT = {32: "IIIIIIII", 64: "IIQQQQQQ"}
_SHDR_FMT = {32: "IIIIIIIIII", 64: "IIQQQQIIQQ"}


def ident(
    elf_class: int = 2,
    data: int = 1,
    version: int = 1,
    osabi: int = 0,
    abi_version: int = 0,
    magic: bytes = b"\x7fELF",
) -> bytes:
    return magic + bytes([elf_class, data, version, osabi, abi_version]) + bytes(7)


def pack_phdr(bits: int, prefix: str, phdr: Sequence[int]) -> bytes:
    """*phdr* is (type, flags, offset, vaddr, paddr, filesz, memsz, align)."""
    p_type, p_flags, p_offset, p_vaddr, p_paddr, p_filesz, p_memsz, p_align = phdr
    if bits == 64:
        values = (p_type, p_flags, p_offset, p_vaddr, p_paddr, p_filesz, p_memsz, p_align)
    else:
        values = (p_type, p_offset, p_vaddr, p_paddr, p_filesz, p_memsz, p_flags, p_align)
    return struct.pack(prefix + _PHDR_FMT[bits], *values)


def pack_shdr(bits: int, prefix: str, shdr: Sequence[int]) -> bytes:
    """*shdr* is (name, type, flags, addr, offset, size, link, info, addralign, entsize)."""
    return struct.pack(prefix + _SHDR_FMT[bits], *shdr)


def build_elf(
    bits: int = 64,
    endian: str = "<",
    *,
    phdrs: Sequence[Sequence[int]] = (),
    shdrs: Sequence[Sequence[int]] = (),
    trailer: bytes = b"",
    e_type: int = 2,
    e_machine: int = 62,
    e_version: int = 1,
    e_entry: int = 0x401000,
    e_flags: int = 0,
    e_phoff: Optional[int] = None,
    e_shoff: Optional[int] = None,
    e_ehsize: Optional[int] = None,
    e_phentsize: Optional[int] = None,
    e_phnum: Optional[int] = None,
    e_shentsize: Optional[int] = None,
    e_shnum: Optional[int] = None,
    e_shstrndx: int = 0,
    ident_bytes: Optional[bytes] = None,
) -> bytes:
    """Lay out header, program headers, section headers, then *trailer*."""
    ehsize = EHDR_SIZE[bits]
    phoff = ehsize if phdrs else 0
    shoff = ehsize + len(phdrs) * PHDR_SIZE[bits] if shdrs else 0

    if ident_bytes is None:
        ident_bytes = ident(elf_class=1 if bits == 32 else 2, data=1 if endian == "<" else 2)

    header = ident_bytes + struct.pack(
        endian + _EHDR_FMT[bits],
        e_type,
        e_machine,
        e_version,
        e_entry,
        phoff if e_phoff is None else e_phoff,
        shoff if e_shoff is None else e_shoff,
        e_flags,
        ehsize if e_ehsize is None else e_ehsize,
        PHDR_SIZE[bits] if e_phentsize is None else e_phentsize,
        len(phdrs) if e_phnum is None else e_phnum,
        SHDR_SIZE[bits] if e_shentsize is None else e_shentsize,
        len(shdrs) if e_shnum is None else e_shnum,
        e_shstrndx,
    )
    body = b"".join(pack_phdr(bits, endian, ph) for ph in phdrs)
    body += b"".join(pack_shdr(bits, endian, sh) for sh in shdrs)
    return header + body + trailer


@pytest.fixture
def make_elf() -> Callable[..., bytes]:
    return build_elf


@pytest.fixture
def minimal_elf64() -> bytes:
    """64-byte little-endian ELF64 header with empty header tables."""
    return build_elf(64, "<")


SAMPLE_PHDR = (1, 5, 0x0, 0x400000, 0x400000, 0x1000, 0x2000, 0x1000)


@pytest.fixture
def sample_elf64() -> bytes:
    """ELF64 image with two segments and three named sections."""
    strtab = b"\x00.text\x00.shstrtab\x00"
    strtab_offset = 64 + 2 * 56 + 3 * 64
    shdrs = [
        (0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
        (1, 1, 0x6, 0x401000, 0x40, 0x20, 0, 0, 16, 0),
        (7, 3, 0, 0, strtab_offset, len(strtab), 0, 0, 1, 0),
    ]
    phdrs = [SAMPLE_PHDR, (0x6474E551, 6, 0, 0, 0, 0, 0, 16)]
    return build_elf(64, "<", phdrs=phdrs, shdrs=shdrs, trailer=strtab, e_shstrndx=2)
