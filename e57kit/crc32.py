"""CRC-32C (iSCSI / Castagnoli) checksums as used by E57 pages."""

from __future__ import annotations

_POLYNOMIAL = 0x82F63B78
_MASK = 0xFFFFFFFF


def _table_entry(value: int) -> int:
    for _ in range(8):
        value = (value >> 1) ^ _POLYNOMIAL if value & 1 else value >> 1
    return value


class Crc32:
    """Table driven CRC-32C calculator."""

    def __init__(self) -> None:
        self._table = tuple(_table_entry(i) for i in range(256))

    def calculate(self, data: bytes) -> int:
        """Return the CRC-32C checksum of ``data``."""
        table = self._table
        crc = _MASK
        for byte in data:
            crc = table[(crc ^ byte) & 0xFF] ^ (crc >> 8)
        return crc ^ _MASK


_DEFAULT = Crc32()


def crc32c(data: bytes) -> int:
    """Return the CRC-32C checksum of ``data`` using a shared table."""
    return _DEFAULT.calculate(data)