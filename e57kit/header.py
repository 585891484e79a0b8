"""The fixed 48 byte header at the start of every E57 file."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

from .errors import InvalidError, ReadError, WriteError

SIGNATURE = b"ASTM-E57"
MAJOR_VERSION = 1
MINOR_VERSION = 0
PAGE_SIZE = 1024

_LAYOUT = struct.Struct("<8sIIQQQQ")
HEADER_SIZE = _LAYOUT.size


def _read_exact(reader: BinaryIO, size: int, what: str) -> bytes:
    data = bytearray()
    try:
        while len(data) < size:
            chunk = reader.read(size - len(data))
            if not chunk:
                break
            data += chunk
    except OSError as exc:
        raise ReadError(f"Failed to read {what}") from exc
    if len(data) < size:
        raise ReadError(f"Failed to read {what}: unexpected end of data")
    return bytes(data)


def _write_all(writer: BinaryIO, data: bytes, what: str) -> None:
    remaining = bytes(data)
    try:
        while remaining:
            written = writer.write(remaining)
            if written is None:
                return
            if written <= 0:
                raise WriteError(f"Failed to write {what}: no progress")
            remaining = remaining[written:]
    except OSError as exc:
        raise WriteError(f"Failed to write {what}") from exc


@dataclass
class Header:
    """File header structure found at the start of an E57 file."""

    signature: bytes = SIGNATURE
    major: int = MAJOR_VERSION
    minor: int = MINOR_VERSION
    phys_length: int = 0
    phys_xml_offset: int = 0
    xml_length: int = 0
    page_size: int = PAGE_SIZE

    @classmethod
    def read(cls, reader: BinaryIO) -> "Header":
        """Read and validate a header from a binary stream."""
        data = _read_exact(reader, HEADER_SIZE, "E57 file header")
        header = cls(*_LAYOUT.unpack(data))
        if header.signature != SIGNATURE:
            raise InvalidError("Found unsupported signature in header")
        if header.major != MAJOR_VERSION:
            raise InvalidError("Found unsupported major version in header")
        if header.minor != MINOR_VERSION:
            raise InvalidError("Found unsupported minor version in header")
        if header.page_size != PAGE_SIZE:
            raise InvalidError("Found unsupported page size in header")
        return header

    def write(self, writer: BinaryIO) -> None:
        """Serialize the header into a binary stream."""
        if len(self.signature) != 8:
            raise WriteError("File header signature must be exactly 8 bytes")
        try:
            data = _LAYOUT.pack(
                self.signature,
                self.major,
                self.minor,
                self.phys_length,
                self.phys_xml_offset,
                self.xml_length,
                self.page_size,
            )
        except struct.error as exc:
            raise WriteError("File header value out of range") from exc
        _write_all(writer, data, "E57 file header")