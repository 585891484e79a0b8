import io

import pytest

from e57kit.crc32 import crc32c
from e57kit.errors import ReadError
from e57kit.paged_reader import PagedReader

PAGE_SIZE = 1024
CHECKSUM_SIZE = 4
ALIGNMENT_SIZE = 4

FILE_SIZE = 743424
XML_LOGICAL_OFFSET = 737844
XML_PHYSICAL_OFFSET = 740736
LOGICAL_END = 740520


def _paged(payload: bytes, page_size: int = PAGE_SIZE) -> bytes:
    data_size = page_size - CHECKSUM_SIZE
    checksums = {}
    out = bytearray()
    for start in range(0, len(payload), data_size):
        chunk = payload[start : start + data_size].ljust(data_size, b"\0")
        if chunk not in checksums:
            checksums[chunk] = crc32c(chunk).to_bytes(4, "big")
        out += chunk + checksums[chunk]
    return bytes(out)


@pytest.fixture(scope="module")
def sample_file() -> bytes:
    payload = bytearray(LOGICAL_END)
    payload[XML_LOGICAL_OFFSET : XML_LOGICAL_OFFSET + 5] = b"<?xml"
    data = _paged(bytes(payload))
    assert len(data) == FILE_SIZE
    return data


def test_read_full_valid_file(sample_file):
    pages = FILE_SIZE // PAGE_SIZE
    logical_file_size = FILE_SIZE - pages * CHECKSUM_SIZE
    reader = PagedReader(io.BytesIO(sample_file), PAGE_SIZE)
    assert len(reader.read()) == logical_file_size


def test_size_not_multiple_of_page(sample_file):
    with pytest.raises(ReadError):
        PagedReader(io.BytesIO(sample_file), PAGE_SIZE - 1)


def test_page_size_too_small(sample_file):
    with pytest.raises(ReadError):
        PagedReader(io.BytesIO(sample_file), CHECKSUM_SIZE)


def test_page_size_too_big():
    with pytest.raises(ReadError):
        PagedReader(io.BytesIO(bytes(2 * 1024 * 1024)), 2 * 1024 * 1024)


def test_zero_pages():
    with pytest.raises(ReadError):
        PagedReader(io.BytesIO(b""), PAGE_SIZE)


def test_corrupt_page():
    reader = PagedReader(io.BytesIO(bytes(128)), 128)
    with pytest.raises(ReadError):
        reader.read()
    assert reader.tell() == 0


def test_seek(sample_file):
    reader = PagedReader(io.BytesIO(sample_file), PAGE_SIZE)
    assert reader.seek(XML_LOGICAL_OFFSET) == XML_LOGICAL_OFFSET
    assert reader.read_exact(5) == b"<?xml"
    assert reader.seek(0) == 0
    assert reader.seek(0, io.SEEK_END) == LOGICAL_END
    assert reader.seek(-10, io.SEEK_CUR) == LOGICAL_END - 10


def test_seek_after_end(sample_file):
    reader = PagedReader(io.BytesIO(sample_file), PAGE_SIZE)
    with pytest.raises(ReadError):
        reader.seek(LOGICAL_END + 1)


def test_physical_seek(sample_file):
    reader = PagedReader(io.BytesIO(sample_file), PAGE_SIZE)
    assert reader.seek_physical(XML_PHYSICAL_OFFSET) == XML_LOGICAL_OFFSET
    assert reader.read_exact(5) == b"<?xml"


def test_physical_seek_after_end(sample_file):
    reader = PagedReader(io.BytesIO(sample_file), PAGE_SIZE)
    with pytest.raises(ReadError):
        reader.seek_physical(FILE_SIZE)


def test_read_end(sample_file):
    reader = PagedReader(io.BytesIO(sample_file), PAGE_SIZE)
    reader.seek(0, io.SEEK_END)
    assert reader.read() == b""


def test_read_exact_past_end(sample_file):
    reader = PagedReader(io.BytesIO(sample_file), PAGE_SIZE)
    reader.seek(-3, io.SEEK_END)
    with pytest.raises(ReadError):
        reader.read_exact(4)


def test_read_across_page_boundary():
    payload = bytes(range(256)) * 8
    reader = PagedReader(io.BytesIO(_paged(payload)), PAGE_SIZE)
    reader.seek(1015)
    assert reader.read(10) == payload[1015:1025]


def test_corruption_detected_only_on_bad_page():
    payload = bytes(range(256)) * 8
    data = bytearray(_paged(payload))
    data[PAGE_SIZE + 5] ^= 0xFF
    reader = PagedReader(io.BytesIO(bytes(data)), PAGE_SIZE)
    assert reader.read_exact(100) == payload[:100]
    reader.seek(PAGE_SIZE - CHECKSUM_SIZE)
    with pytest.raises(ReadError):
        reader.read(1)


def test_align():
    reader = PagedReader(io.BytesIO(bytes(128)), 128)

    reader.align()
    assert reader.tell() == 0

    reader.seek(1)
    reader.align()
    assert reader.tell() == ALIGNMENT_SIZE

    reader.align()
    assert reader.tell() == ALIGNMENT_SIZE