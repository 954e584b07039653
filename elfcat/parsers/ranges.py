"""
Range Overlay Builder
======================

Accumulates labelled byte ranges while a file is decoded, then freezes them
into a :class:`~elfcat.core.models.RangeOverlay`.

Ranges are kept strictly in call order; renderers rely on "last added is
most specific".  A range reaching past the end of the buffer is rejected,
never clamped.
"""

from __future__ import annotations

from elfcat.core.errors import OutOfBoundsRange
from elfcat.core.models import RangeEntry, RangeLabel, RangeOverlay


class RangeOverlayBuilder:
    """Append-only collector of :class:`RangeEntry` values.

    Usage::

        builder = RangeOverlayBuilder(len(data))
        builder.add_range(0, 64, RangeLabel(kind=RangeKind.FILE_HEADER))
        overlay = builder.finalize()
    """

    def __init__(self, buffer_length: int) -> None:
        if buffer_length < 0:
            raise ValueError("buffer length must be non-negative")
        self._buffer_length = buffer_length
        self._entries: list[RangeEntry] = []
        self._finalized = False

    @property
    def buffer_length(self) -> int:
        return self._buffer_length

    def __len__(self) -> int:
        return len(self._entries)

    def add_range(self, offset: int, length: int, label: RangeLabel) -> RangeEntry:
        """Record ``[offset, offset + length)`` under *label*.

        Raises:
            OutOfBoundsRange: If the span is negative or ends past the
                buffer.
            RuntimeError: If the builder was already finalized.
        """
        if self._finalized:
            raise RuntimeError("range overlay already finalized")
        if offset < 0 or length < 0:
            raise OutOfBoundsRange(
                f"invalid range for {label}: offset={offset} length={length}"
            )
        if offset + length > self._buffer_length:
            raise OutOfBoundsRange(
                f"range for {label} [0x{offset:x}, 0x{offset + length:x}) "
                f"exceeds buffer of {self._buffer_length} bytes"
            )
        entry = RangeEntry(start=offset, length=length, label=label)
        self._entries.append(entry)
        return entry

    def finalize(self) -> RangeOverlay:
        """Freeze the collected ranges; no more ranges can be added."""
        self._finalized = True
        return RangeOverlay(
            buffer_length=self._buffer_length,
            entries=tuple(self._entries),
        )
