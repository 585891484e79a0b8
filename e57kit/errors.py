"""Exception hierarchy for problems met while reading or writing E57 data."""

from __future__ import annotations


class E57Error(Exception):
    """Base class of every error raised by this package."""

    prefix = "E57 error"

    def __init__(self, desc: str) -> None:
        super().__init__(desc)
        self.desc = str(desc)

    def __str__(self) -> str:
        return f"{self.prefix}: {self.desc}"


class InvalidError(E57Error):
    """The data does not conform to the E57 format specification."""

    prefix = "Invalid E57 content"


class ReadError(E57Error):
    """Reading E57 data failed, typically because of I/O or a truncated file."""

    prefix = "Failed to read E57"


class WriteError(E57Error):
    """Writing E57 data failed, typically because of I/O."""

    prefix = "Failed to write E57"


class NotImplementedFeatureError(E57Error, NotImplementedError):
    """A part of the E57 format that is not supported."""

    prefix = "Not implemented"


class InternalError(E57Error):
    """An unexpected internal inconsistency, most likely a bug."""

    prefix = "Internal error"