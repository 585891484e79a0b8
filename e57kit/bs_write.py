"""Bit level writer that packs values into a byte stream."""

from __future__ import annotations


class ByteStreamWriteBuffer:
    """Collects bytes and bit fields, packing bits least significant first."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._last_byte_bit = 0

    def add_bytes(self, data: bytes) -> None:
        """Append whole bytes at the current bit position."""
        if self._last_byte_bit == 0:
            self._buffer.extend(data)
        else:
            self.add_bits(data, len(data) * 8)

    def add_bits(self, data: bytes, bits: int) -> None:
        """Append the lowest ``bits`` bits of ``data`` (little-endian)."""
        if self._last_byte_bit == 0:
            to_append = -(-bits // 8)
            self._buffer.extend(data[:to_append])
            self._last_byte_bit = bits % 8
            return

        buffer = self._buffer
        start_byte = len(buffer) - 1
        start_bit = self._last_byte_bit
        for b in range(bits):
            source_bit = (data[b // 8] >> (b % 8)) & 1
            target_byte = start_byte + (start_bit + b) // 8
            if target_byte >= len(buffer):
                buffer.append(0)
            if source_bit:
                buffer[target_byte] |= 1 << self._last_byte_bit
            self._last_byte_bit = (self._last_byte_bit + 1) % 8

    def get_full_bytes(self) -> bytes:
        """Remove and return all completely filled bytes."""
        count = self.full_bytes()
        taken = bytes(self._buffer[:count])
        del self._buffer[:count]
        return taken

    def get_all_bytes(self) -> bytes:
        """Remove and return all bytes, including a partially filled one."""
        self._last_byte_bit = 0
        taken = bytes(self._buffer)
        self._buffer.clear()
        return taken

    def full_bytes(self) -> int:
        """Number of completely filled bytes."""
        length = len(self._buffer)
        return length - 1 if self._last_byte_bit else length

    def all_bytes(self) -> int:
        """Number of bytes, including a partially filled one."""
        return len(self._buffer)