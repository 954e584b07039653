"""
Decoder Error Kinds
====================

Every fatal condition the ELF decoder can hit is represented by a subclass
of :class:`ElfError`.  Callers catch the base class to handle "not a
decodable ELF file" uniformly, or a subclass to tell the checks apart.

Errors raised after the identification bytes were validated carry the
already-computed identification summary, so that a front end can still show
what was learned about the file.
"""

from __future__ import annotations

from typing import Optional, Sequence


class ElfError(Exception):
    """Base class for all fatal decode errors.

    Attributes:
        identification: Identification entries computed before the failure,
            or ``None`` if the failure happened before identification.
    """

    def __init__(
        self,
        message: str,
        *,
        identification: Optional[Sequence[tuple[str, str]]] = None,
    ) -> None:
        super().__init__(message)
        self.identification: Optional[tuple[tuple[str, str], ...]] = (
            tuple(identification) if identification is not None else None
        )

    @property
    def kind(self) -> str:
        """Short symbolic name of the failed check (the class name)."""
        return type(self).__name__


class BufferTooSmall(ElfError):
    """Buffer shorter than ``e_ident`` or than the class's file header."""


class BadMagic(ElfError):
    """The first four bytes are not ``7F 45 4C 46``."""


class UnsupportedClass(ElfError):
    """``EI_CLASS`` is neither ELFCLASS32 nor ELFCLASS64."""


class UnsupportedEncoding(ElfError):
    """``EI_DATA`` is neither ELFDATA2LSB nor ELFDATA2MSB."""


class TruncatedField(ElfError):
    """A fixed-width integer read ran past the end of its slice."""


class OutOfBoundsRange(ElfError):
    """A byte range would extend past the end of the buffer."""
