"""Header of a compressed vector binary section."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO, ClassVar

from .errors import InvalidError
from .header import _read_exact, _write_all

_LAYOUT = struct.Struct("<B7xQQQ")


@dataclass
class CompressedVectorSectionHeader:
    """Section header that starts every compressed vector section."""

    SIZE: ClassVar[int] = 32

    section_id: int = 1
    section_length: int = 0
    data_offset: int = 0
    index_offset: int = 0

    @classmethod
    def read(cls, reader: BinaryIO) -> "CompressedVectorSectionHeader":
        """Read and validate a section header from a binary stream."""
        data = _read_exact(reader, cls.SIZE, "compressed vector section header")
        header = cls(*_LAYOUT.unpack(data))
        if header.section_id != 1:
            raise InvalidError(
                "Section ID of the compressed vector section header is not 1"
            )
        if header.section_length % 4 != 0:
            raise InvalidError("Section length is not aligned and a multiple of four")
        return header

    def write(self, writer: BinaryIO) -> None:
        """Serialize the section header into a binary stream."""
        data = _LAYOUT.pack(
            self.section_id, self.section_length, self.data_offset, self.index_offset
        )
        _write_all(writer, data, "compressed vector section header")