"""
Byte-Order Reader
==================

Bounds-checked decoding of fixed-width unsigned integers from untrusted
byte buffers, in either byte order.
"""

from __future__ import annotations

import struct

from elfcat.core.errors import TruncatedField
from elfcat.core.models import Encoding


_WIDTH_CODES: dict[int, str] = {
    1: "B",
    2: "H",
    4: "I",
    8: "Q",
}


def read_uint(
    data: bytes | bytearray | memoryview,
    offset: int,
    width: int,
    encoding: Encoding,
) -> int:
    """Read an unsigned *width*-byte integer at *offset*.

    Args:
        data: Source buffer.
        offset: Byte offset of the first byte of the integer.
        width: Integer width in bytes (1, 2, 4 or 8).
        encoding: Byte order of the integer.

    Returns:
        The decoded value.

    Raises:
        TruncatedField: If fewer than *width* bytes are available at
            *offset* (or *offset* is negative).
        ValueError: If *width* is not a supported integer width.
    """
    code = _WIDTH_CODES.get(width)
    if code is None:
        raise ValueError(f"unsupported integer width: {width}")
    if offset < 0 or offset + width > len(data):
        raise TruncatedField(
            f"{width}-byte read at offset {offset} exceeds "
            f"buffer of {len(data)} bytes"
        )
    (value,) = struct.unpack_from(encoding.struct_prefix + code, data, offset)
    return value
