# e57kit

Low-level building blocks for working with ASTM E57 point cloud files in
pure Python, with no dependencies outside the standard library.

E57 files are split into pages of 1024 bytes. Each page ends with a
CRC-32C checksum, stored in big-endian order. Point data lives in
compressed vector sections made of packets that carry bit-packed byte
streams, and the metadata lives in an XML section. This package covers
those layers:

- `e57kit.crc32`: the CRC-32C (Castagnoli) checksum (`Crc32`, `crc32c`).
- `e57kit.paged_reader`: `PagedReader`, a file-like logical view over a
  paged stream. Every page's checksum is verified when it is first read.
  It offers `read`, `read_exact`, `seek`, `tell`, `seek_physical` and
  `align`.
- `e57kit.paged_writer`: `PagedWriter`, which writes logical data into
  1024-byte pages with checksums. It offers `write`, `flush`, `close`,
  `align`, `physical_position`, `physical_seek` and `physical_size`, and
  works as a context manager. The underlying stream must be empty and
  readable, writable and seekable; closing the writer flushes the pending
  page but leaves the stream open.
- `e57kit.header`: the 48-byte file header (`Header`), with `Header.read`
  (which checks the signature, version 1.0 and a page size of 1024) and
  `Header.write`.
- `e57kit.cv_section`: compressed vector section headers
  (`CompressedVectorSectionHeader`).
- `e57kit.packet`: index, data and ignored packet headers
  (`read_packet_header`, `IndexPacketHeader`, `DataPacketHeader`,
  `IgnoredPacketHeader`). Only data packet headers can be written.
- `e57kit.bs_read` / `e57kit.bs_write`: bit-level byte stream buffers
  (`ByteStreamReadBuffer`, `ByteStreamWriteBuffer`).
- `e57kit.bitpack`: decoding of doubles, singles and bounded integers
  from a `ByteStreamReadBuffer` (`unpack_doubles`, `unpack_singles`,
  `unpack_ints`). `unpack_ints` raises `InvalidError` when the maximum is
  not greater than the minimum.
- `e57kit.blob`: binary blob sections (`Blob`), parsed from and
  serialized to XML, and copied in and out through `PagedReader` and
  `PagedWriter`.
- `e57kit.bounds`, `e57kit.date_time`: XML metadata elements
  (`CartesianBounds`, `SphericalBounds`, `IndexBounds`, `DateTime`), each
  with `from_element` for an `xml.etree.ElementTree.Element` and
  `xml_string` for serialization.
- `e57kit.extension`: `Extension`, `extensions_from_xml` (the prefixed
  namespaces declared on a document's root element) and `validate_name`.

Errors are raised as subclasses of `e57kit.errors.E57Error`:
`InvalidError`, `ReadError`, `WriteError`, `NotImplementedFeatureError`
and `InternalError`.

## Installation

```
pip install e57kit
```

## Examples

Checksum a block of data:

```python
from e57kit.crc32 import crc32c

assert crc32c(bytes([123] * 8)) == 3786498929
```

Write a paged file and read its header back:

```python
import io
from e57kit.header import Header
from e57kit.paged_writer import PagedWriter
from e57kit.paged_reader import PagedReader

stream = io.BytesIO()
with PagedWriter(stream) as writer:
    Header().write(writer)

reader = PagedReader(stream, 1024)
header = Header.read(reader)
print(header.page_size)  # 1024
```

Store a blob and copy it back out:

```python
import io
from e57kit.blob import Blob
from e57kit.paged_writer import PagedWriter
from e57kit.paged_reader import PagedReader

stream = io.BytesIO()
with PagedWriter(stream) as writer:
    blob = Blob.write(writer, io.BytesIO(b"hello"))

out = io.BytesIO()
blob.read(PagedReader(stream, 1024), out)
print(out.getvalue())              # b'hello'
print(blob.xml_string("pngImage")) # <pngImage type="Blob" fileOffset="0" length="5"/>
```

Extract bits from a byte stream:

```python
from e57kit.bs_read import ByteStreamReadBuffer

buffer = ByteStreamReadBuffer()
buffer.append(bytes([23, 42, 13]))
buffer.extract(2)
print(buffer.extract(22))  # 215685
```

List extensions and check a name before using it as an XML namespace or
attribute:

```python
from e57kit.extension import extensions_from_xml, validate_name

xml = '<e57Root xmlns:ext="https://example.com/ext"/>'
print(extensions_from_xml(xml))  # [Extension(namespace='ext', url='https://example.com/ext')]

validate_name("my_extension")  # passes
validate_name("xmlthing")      # raises InvalidError
```

## What this package does not do

These are the lower layers only. There is no high-level reader or writer
for whole E57 files: nothing parses the XML root, point cloud or image
descriptions, nothing iterates over the points of a compressed vector
section or encodes new point records into packets, and there is no
command-line tool.

## Running the tests

```
pip install -e .[test]
pytest
```