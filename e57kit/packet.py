"""Packet headers found inside compressed vector sections."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, ClassVar, Union

from .errors import InvalidError
from .header import _read_exact, _write_all

_INDEX_PACKET = 0
_DATA_PACKET = 1
_IGNORED_PACKET = 2


def _packet_length(raw: bytes) -> int:
    return struct.unpack("<H", raw)[0] + 1


@dataclass
class IndexPacketHeader:
    """Header of an index packet."""

    packet_length: int
    entry_count: int
    index_level: int

    @classmethod
    def read(cls, reader: BinaryIO) -> "IndexPacketHeader":
        """Read the header after its packet type byte was consumed."""
        data = _read_exact(reader, 15, "index packet header")
        packet_length = _packet_length(data[1:3])
        entry_count = struct.unpack("<H", data[3:5])[0]
        if packet_length % 4 != 0:
            raise InvalidError("Index packet length is not aligned and a multiple of four")
        return cls(packet_length, entry_count, data[5])


@dataclass
class DataPacketHeader:
    """Header of a data packet."""

    SIZE: ClassVar[int] = 6

    comp_restart_flag: bool
    packet_length: int
    bytestream_count: int

    @classmethod
    def read(cls, reader: BinaryIO) -> "DataPacketHeader":
        """Read the header after its packet type byte was consumed."""
        data = _read_exact(reader, cls.SIZE - 1, "data packet header")
        comp_restart_flag = bool(data[0] & 1)
        packet_length = _packet_length(data[1:3])
        bytestream_count = struct.unpack("<H", data[3:5])[0]
        if packet_length % 4 != 0:
            raise InvalidError("Data packet length is not aligned and a multiple of four")
        if bytestream_count == 0:
            raise InvalidError("A byte stream count of 0 is not allowed")
        return cls(comp_restart_flag, packet_length, bytestream_count)

    def write(self, writer: BinaryIO) -> None:
        """Serialize the header, including its packet type byte."""
        if not 1 <= self.packet_length <= 0x10000:
            raise InvalidError(
                f"Data packet length {self.packet_length} is outside of 1..65536"
            )
        if not 0 <= self.bytestream_count <= 0xFFFF:
            raise InvalidError(
                f"Byte stream count {self.bytestream_count} does not fit into 16 bits"
            )
        data = struct.pack(
            "<BBHH",
            _DATA_PACKET,
            1 if self.comp_restart_flag else 0,
            self.packet_length - 1,
            self.bytestream_count,
        )
        _write_all(writer, data, "data packet header")


@dataclass
class IgnoredPacketHeader:
    """Header of an ignored packet."""

    packet_length: int

    @classmethod
    def read(cls, reader: BinaryIO) -> "IgnoredPacketHeader":
        """Read the header after its packet type byte was consumed."""
        data = _read_exact(reader, 3, "ignored packet header")
        packet_length = _packet_length(data[1:3])
        if packet_length % 4 != 0:
            raise InvalidError(
                "Ignored packet length is not aligned and a multiple of four"
            )
        return cls(packet_length)


PacketHeader = Union[IndexPacketHeader, DataPacketHeader, IgnoredPacketHeader]

_PACKET_TYPES = {
    _INDEX_PACKET: IndexPacketHeader,
    _DATA_PACKET: DataPacketHeader,
    _IGNORED_PACKET: IgnoredPacketHeader,
}


def read_packet_header(reader: BinaryIO) -> PacketHeader:
    """Read a packet header of any type, identified by its first byte."""
    packet_type = _read_exact(reader, 1, "packet type ID")[0]
    header_class = _PACKET_TYPES.get(packet_type)
    if header_class is None:
        raise InvalidError("Found unknown packet ID when trying to read packet header")
    return header_class.read(reader)