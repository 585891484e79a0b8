"""Bit level reader over a growing byte stream."""

from __future__ import annotations

from typing import Optional

_U64_MASK = (1 << 64) - 1


class ByteStreamReadBuffer:
    """Buffer that receives bytes and hands out little-endian bit fields."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._offset = 0

    def append(self, data: bytes) -> None:
        """Append bytes, dropping the bytes that are already fully consumed."""
        consumed = self._offset // 8
        self._offset -= consumed * 8
        self._buffer = self._buffer[consumed:] + bytes(data)

    def extract(self, bits: int) -> Optional[int]:
        """Extract up to 64 bits as an unsigned integer.

        The result may hold more bits than requested; callers mask them off.
        Returns ``None`` when not enough bits are available.
        """
        if self.available() < bits:
            return None
        start = self._offset // 8
        end = -(-(self._offset + bits) // 8)
        shift = self._offset % 8
        value = int.from_bytes(self._buffer[start:end], "little") >> shift
        self._offset += bits
        return value & _U64_MASK

    def available(self) -> int:
        """Number of bits that can still be extracted."""
        return len(self._buffer) * 8 - self._offset