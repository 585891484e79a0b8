"""Writer that produces the CRC protected page layout of E57 files."""

from __future__ import annotations

import io
from typing import BinaryIO

from .crc32 import crc32c
from .errors import ReadError, WriteError

PAGE_SIZE = 1024
CRC_SIZE = 4
PAGE_PAYLOAD_SIZE = PAGE_SIZE - CRC_SIZE


class PagedWriter:
    """Writes logical data into 1024 byte pages that end with a CRC-32C.

    The underlying stream must be empty and support reading, writing and
    seeking. A partially filled page is written out by ``flush`` and stays
    editable until it is full. ``close`` flushes the pending page; the
    underlying stream is left open.
    """

    def __init__(self, stream: BinaryIO) -> None:
        try:
            end = stream.seek(0, io.SEEK_END)
        except OSError as exc:
            raise ReadError("Unable to seek length of writer") from exc
        if end != 0:
            raise WriteError("Supplied writer is not empty")
        self._stream = stream
        self._offset = 0
        self._page = bytearray(PAGE_PAYLOAD_SIZE)

    def _sealed_page(self) -> bytes:
        payload = bytes(self._page)
        # The checksum is stored big-endian, unlike every other value.
        return payload + crc32c(payload).to_bytes(CRC_SIZE, "big")

    def physical_position(self) -> int:
        """Current physical offset in the file."""
        try:
            position = self._stream.tell()
        except OSError as exc:
            raise ReadError("Failed to get position from writer") from exc
        return position + self._offset

    def physical_seek(self, pos: int) -> None:
        """Move to a physical offset, loading the existing page if there is one."""
        self.flush()
        try:
            end = self._stream.seek(0, io.SEEK_END)
        except OSError as exc:
            raise WriteError("Failed to seek to file end") from exc
        if pos < 0 or pos > end:
            raise WriteError("Cannot seek after end of file")
        page, offset = divmod(pos, PAGE_SIZE)
        if offset >= PAGE_PAYLOAD_SIZE:
            raise WriteError(f"Cannot seek into the checksum of page {page}")

        page_start = page * PAGE_SIZE
        self._page = bytearray(PAGE_PAYLOAD_SIZE)
        self._offset = offset
        try:
            self._stream.seek(page_start)
            if end >= page_start + PAGE_SIZE:
                existing = self._stream.read(PAGE_PAYLOAD_SIZE)
                if existing is None or len(existing) != PAGE_PAYLOAD_SIZE:
                    raise WriteError("Failed to read existing page data")
                self._page[:] = existing
                self._stream.seek(page_start)
        except OSError as exc:
            raise WriteError("Failed to seek to specified position") from exc

    def physical_size(self) -> int:
        """Current physical size of the file, after flushing the pending page."""
        self.flush()
        try:
            position = self._stream.tell()
            size = self._stream.seek(0, io.SEEK_END)
            self._stream.seek(position)
        except OSError as exc:
            raise WriteError("Cannot determine physical file size") from exc
        return size

    def align(self) -> None:
        """Write zero bytes up to the next 4-byte aligned offset."""
        misalignment = self._offset % 4
        if misalignment:
            self.write(bytes(4 - misalignment))

    def write(self, data: bytes) -> int:
        """Write all of ``data`` as logical bytes and return its length."""
        view = memoryview(data).cast("B")
        total = len(view)
        while view:
            count = min(len(view), PAGE_PAYLOAD_SIZE - self._offset)
            self._page[self._offset : self._offset + count] = view[:count]
            self._offset += count
            view = view[count:]
            if self._offset >= PAGE_PAYLOAD_SIZE:
                try:
                    self._stream.write(self._sealed_page())
                except OSError as exc:
                    raise WriteError("Failed to write page") from exc
                self._page = bytearray(PAGE_PAYLOAD_SIZE)
                self._offset = 0
        return total

    def flush(self) -> None:
        """Write the pending partial page and flush the underlying stream."""
        try:
            if self._offset > 0:
                position = self._stream.tell()
                self._stream.write(self._sealed_page())
                self._stream.seek(position)
            self._stream.flush()
        except OSError as exc:
            raise WriteError("Failed to flush paged writer") from exc

    def close(self) -> None:
        """Flush any pending data."""
        self.flush()

    def __enter__(self) -> "PagedWriter":
        return self

    def __exit__(self, *args) -> None:
        self.close()