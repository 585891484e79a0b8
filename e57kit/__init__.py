"""Low-level building blocks for reading and writing ASTM E57 point cloud files."""

__version__ = "0.1.0"

__all__ = [
    "bitpack",
    "blob",
    "bounds",
    "bs_read",
    "bs_write",
    "crc32",
    "cv_section",
    "date_time",
    "errors",
    "extension",
    "header",
    "packet",
    "paged_reader",
    "paged_writer",
]