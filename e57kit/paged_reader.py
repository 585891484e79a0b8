"""Reader that hides the CRC protected page layout of E57 files."""

from __future__ import annotations

import io
from typing import BinaryIO, Optional

from .crc32 import crc32c
from .errors import ReadError

CHECKSUM_SIZE = 4
ALIGNMENT_SIZE = 4
MAX_PAGE_SIZE = 1024 * 1024


class PagedReader:
    """Logical view over a paged stream whose pages end with a CRC-32C.

    Offsets used by ``read``, ``seek`` and ``tell`` are logical, i.e. they
    skip the checksum bytes. Every page is verified when it is first read.
    """

    def __init__(self, stream: BinaryIO, page_size: int) -> None:
        if page_size > MAX_PAGE_SIZE:
            raise ReadError(
                f"Page size {page_size} is bigger than the allowed maximum "
                f"page size of {MAX_PAGE_SIZE} bytes"
            )
        if page_size <= CHECKSUM_SIZE:
            raise ReadError(
                f"Page size {page_size} needs to be bigger than checksum "
                f"({CHECKSUM_SIZE} bytes)"
            )
        try:
            physical_size = stream.seek(0, io.SEEK_END)
        except OSError as exc:
            raise ReadError("Unable to determine stream size") from exc
        if physical_size == 0:
            raise ReadError("A file size of zero is not allowed")
        if physical_size % page_size != 0:
            raise ReadError(
                f"File size {physical_size} is not a multiple of the page size {page_size}"
            )

        self._stream = stream
        self._page_size = page_size
        self._payload_size = page_size - CHECKSUM_SIZE
        self._pages = physical_size // page_size
        self._physical_size = physical_size
        self._logical_size = self._pages * self._payload_size
        self._offset = 0
        self._page_num: Optional[int] = None
        self._page = b""

    def seek_physical(self, offset: int) -> int:
        """Move to a physical file offset and return the logical offset."""
        if offset < 0 or offset >= self._physical_size:
            raise ReadError(f"Offset {offset} is behind end of file")
        pages_before = offset // self._page_size
        self._offset = offset - pages_before * CHECKSUM_SIZE
        return self._offset

    def _load_page(self, page: int) -> None:
        if page >= self._pages:
            raise ReadError(
                f"Page {page} does not exist, only page numbers "
                f"0..{self._pages - 1} are valid"
            )
        try:
            self._stream.seek(page * self._page_size)
            raw = self._stream.read(self._page_size)
        except OSError as exc:
            raise ReadError(f"Failed to read page {page}") from exc
        if raw is None or len(raw) != self._page_size:
            raise ReadError(f"Page {page} is incomplete")

        payload = bytes(raw[: self._payload_size])
        expected = bytes(raw[self._payload_size :])
        # The checksum is stored big-endian, unlike every other value.
        calculated = crc32c(payload).to_bytes(CHECKSUM_SIZE, "big")
        if expected != calculated:
            self._page_num = None
            raise ReadError(
                f"Detected invalid checksum (expected: {list(expected)}, "
                f"actual: {list(calculated)}) for page {page}"
            )
        self._page = payload
        self._page_num = page

    def align(self) -> None:
        """Skip forward to the next 4-byte aligned logical offset."""
        misalignment = self._offset % ALIGNMENT_SIZE
        if misalignment:
            skip = ALIGNMENT_SIZE - misalignment
            if self._offset + skip > self._logical_size:
                raise ReadError("Tried to seek behind end of the file")
            self._offset += skip

    def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` logical bytes, or everything when negative."""
        chunks = []
        remaining = None if size is None or size < 0 else size
        while remaining is None or remaining > 0:
            page, page_offset = divmod(self._offset, self._payload_size)
            if page >= self._pages:
                break
            if self._page_num != page:
                self._load_page(page)
            count = self._payload_size - page_offset
            if remaining is not None:
                count = min(count, remaining)
                remaining -= count
            chunks.append(self._page[page_offset : page_offset + count])
            self._offset += count
        return b"".join(chunks)

    def read_exact(self, size: int) -> bytes:
        """Read exactly ``size`` logical bytes or raise ``ReadError``."""
        data = self.read(size)
        if len(data) != size:
            raise ReadError(
                f"Unexpected end of data: wanted {size} bytes, got {len(data)}"
            )
        return data

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move to a logical offset and return it."""
        if whence == io.SEEK_SET:
            new_offset = offset
        elif whence == io.SEEK_CUR:
            new_offset = self._offset + offset
        elif whence == io.SEEK_END:
            new_offset = self._logical_size + offset
        else:
            raise ValueError(f"Invalid whence value {whence}")
        if new_offset < 0 or new_offset > self._logical_size:
            raise ReadError(f"Detected invalid offset {new_offset} after end of file")
        self._offset = new_offset
        return self._offset

    def tell(self) -> int:
        """Current logical offset."""
        return self._offset