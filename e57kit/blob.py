"""Binary blob sections referenced from the XML part of an E57 file."""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass
from typing import BinaryIO, Optional
from xml.etree.ElementTree import Element

from .errors import InvalidError, ReadError, WriteError
from .paged_reader import PagedReader
from .paged_writer import PagedWriter

_SECTION_HEADER_SIZE = 16
_CHUNK_SIZE = 64 * 1024
_UINT = re.compile(r"\+?[0-9]+")
_U64_LIMIT = 1 << 64


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _parse_u64(element: Element, attribute: str, name: str) -> int:
    text = element.get(attribute)
    if text is None:
        raise InvalidError(f"Failed to find '{attribute}' attribute in blob tag")
    if not _UINT.fullmatch(text) or int(text) >= _U64_LIMIT:
        raise InvalidError(f"Unable to parse {name} as u64")
    return int(text)


def _section_header(section_length: int) -> bytes:
    return bytes(8) + struct.pack("<Q", section_length)


def _read_section_length(reader: PagedReader) -> int:
    try:
        data = reader.read_exact(_SECTION_HEADER_SIZE)
    except ReadError as exc:
        raise ReadError("Failed to read blob section header") from exc
    if data[0] != 0:
        raise InvalidError("Section ID of the blob section header is not 0")
    return struct.unpack("<Q", data[8:16])[0]


@dataclass
class Blob:
    """Location and logical size of a binary blob stored in an E57 file."""

    offset: int
    length: int

    @classmethod
    def from_element(cls, element: Element) -> "Blob":
        """Parse a blob description from its XML element."""
        if element.get("type") != "Blob":
            raise InvalidError("The supplied tag is not a blob")
        offset = _parse_u64(element, "fileOffset", "offset")
        length = _parse_u64(element, "length", "length")
        return cls(offset, length)

    @classmethod
    def from_parent(cls, tag_name: str, parent: Element) -> Optional["Blob"]:
        """Parse the first child blob named ``tag_name``, or return ``None``."""
        for child in parent:
            if isinstance(child.tag, str) and _local_name(child.tag) == tag_name:
                return cls.from_element(child)
        return None

    def xml_string(self, tag_name: str) -> str:
        """Serialize the blob description as an XML element."""
        return (
            f'<{tag_name} type="Blob" fileOffset="{self.offset}" '
            f'length="{self.length}"/>\n'
        )

    def read(self, reader: PagedReader, writer: BinaryIO) -> int:
        """Copy the blob contents into ``writer`` and return the byte count."""
        try:
            reader.seek_physical(self.offset)
        except ReadError as exc:
            raise ReadError("Failed to seek to start offset of blob") from exc
        section_length = _read_section_length(reader)
        if self.length > section_length + _SECTION_HEADER_SIZE:
            raise InvalidError("Blob XML length and blob section header mismatch")

        copied = 0
        remaining = self.length
        while remaining > 0:
            try:
                chunk = reader.read(min(remaining, _CHUNK_SIZE))
            except ReadError as exc:
                raise ReadError("Failed to read binary blob data") from exc
            if not chunk:
                break
            try:
                writer.write(chunk)
            except OSError as exc:
                raise ReadError("Failed to read binary blob data") from exc
            copied += len(chunk)
            remaining -= len(chunk)
        return copied

    @classmethod
    def write(cls, writer: PagedWriter, reader: BinaryIO) -> "Blob":
        """Write everything from ``reader`` as a new blob section."""
        start = writer.physical_position()
        writer.write(_section_header(0))

        length = 0
        while True:
            try:
                chunk = reader.read(_CHUNK_SIZE)
            except OSError as exc:
                raise WriteError("Failed to write blob data") from exc
            if not chunk:
                break
            writer.write(chunk)
            length += len(chunk)

        end = writer.physical_position()
        writer.physical_seek(start)
        writer.write(_section_header(length))
        writer.physical_seek(end)
        return cls(start, length)