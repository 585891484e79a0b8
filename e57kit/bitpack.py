"""Decoding of bit packed values from a byte stream."""

from __future__ import annotations

import struct

from .bs_read import ByteStreamReadBuffer
from .errors import InvalidError

_U32_MASK = 0xFFFFFFFF
_U64_MASK = (1 << 64) - 1


def unpack_doubles(stream: ByteStreamReadBuffer) -> list[float]:
    """Consume all complete 64-bit IEEE doubles from ``stream``."""
    values = []
    while (data := stream.extract(64)) is not None:
        values.append(struct.unpack("<d", (data & _U64_MASK).to_bytes(8, "little"))[0])
    return values


def unpack_singles(stream: ByteStreamReadBuffer) -> list[float]:
    """Consume all complete 32-bit IEEE floats from ``stream``."""
    values = []
    while (data := stream.extract(32)) is not None:
        values.append(struct.unpack("<f", (data & _U32_MASK).to_bytes(4, "little"))[0])
    return values


def unpack_ints(stream: ByteStreamReadBuffer, minimum: int, maximum: int) -> list[int]:
    """Consume all complete integers in ``[minimum, maximum]`` from ``stream``.

    Each value uses just enough bits to hold ``maximum - minimum``.
    """
    value_range = maximum - minimum
    if value_range <= 0:
        raise InvalidError(
            f"Integer range [{minimum}, {maximum}] must span more than one value"
        )
    bits = value_range.bit_length()
    mask = (1 << bits) - 1
    values = []
    while (data := stream.extract(bits)) is not None:
        values.append((data & mask) + minimum)
    return values