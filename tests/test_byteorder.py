import pytest

from elfcat.core.errors import TruncatedField
from elfcat.core.models import Encoding
from elfcat.parsers.byteorder import read_uint


DATA = bytes([0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07, 0x08])


@pytest.mark.parametrize(
    "width, little, big",
    [
        (1, 0x01, 0x01),
        (2, 0x0201, 0x0102),
        (4, 0x04030201, 0x01020304),
        (8, 0x0807060504030201, 0x0102030405060708),
    ],
)
def test_reads_both_byte_orders(width, little, big):
    assert read_uint(DATA, 0, width, Encoding.LITTLE) == little
    assert read_uint(DATA, 0, width, Encoding.BIG) == big


def test_reads_at_offset():
    assert read_uint(DATA, 6, 2, Encoding.BIG) == 0x0708


def test_values_are_unsigned():
    assert read_uint(b"\xff" * 8, 0, 8, Encoding.LITTLE) == 0xFFFF_FFFF_FFFF_FFFF


@pytest.mark.parametrize("offset, width", [(7, 2), (5, 4), (1, 8), (8, 1), (-1, 2)])
def test_short_input_raises_truncated_field(offset, width):
    with pytest.raises(TruncatedField):
        read_uint(DATA, offset, width, Encoding.LITTLE)


def test_empty_buffer():
    with pytest.raises(TruncatedField):
        read_uint(b"", 0, 2, Encoding.BIG)


def test_rejects_unsupported_width():
    with pytest.raises(ValueError):
        read_uint(DATA, 0, 3, Encoding.LITTLE)


def test_accepts_memoryview():
    view = memoryview(DATA)[4:]
    assert read_uint(view, 0, 4, Encoding.LITTLE) == 0x08070605
