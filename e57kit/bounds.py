"""Optional coordinate and index bounds of a point cloud."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from xml.etree.ElementTree import Element

from .errors import InvalidError

_FLOAT = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_INT = re.compile(r"[+-]?[0-9]+")
_I64_MIN = -(1 << 63)
_I64_MAX = (1 << 63) - 1


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _find_child(parent: Element, tag_name: str) -> Optional[Element]:
    for child in parent:
        if isinstance(child.tag, str) and _local_name(child.tag) == tag_name:
            return child
    return None


def _parse_float(text: str, tag_name: str) -> float:
    if not _FLOAT.fullmatch(text):
        raise InvalidError(f"Cannot parse value of XML tag '{tag_name}' as double")
    return float(text)


def _parse_int(text: str, tag_name: str) -> int:
    if not _INT.fullmatch(text):
        raise InvalidError(f"Cannot parse value of XML tag '{tag_name}' as integer")
    value = int(text)
    if not _I64_MIN <= value <= _I64_MAX:
        raise InvalidError(f"Integer value of XML tag '{tag_name}' is out of range")
    return value


def _opt_typed_text(parent: Element, tag_name: str, type_name: str) -> Optional[str]:
    child = _find_child(parent, tag_name)
    if child is None:
        return None
    if child.get("type") != type_name:
        raise InvalidError(f"XML tag '{tag_name}' is not of type '{type_name}'")
    return child.text if child.text is not None else "0"


def _opt_float(parent: Element, tag_name: str) -> Optional[float]:
    text = _opt_typed_text(parent, tag_name, "Float")
    return None if text is None else _parse_float(text, tag_name)


def _opt_int(parent: Element, tag_name: str) -> Optional[int]:
    text = _opt_typed_text(parent, tag_name, "Integer")
    return None if text is None else _parse_int(text, tag_name)


def _format_float(value: float) -> str:
    """Shortest round-tripping decimal text, without exponent or trailing '.0'."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _gen_float(tag_name: str, value: float) -> str:
    return f'<{tag_name} type="Float">{_format_float(value)}</{tag_name}>\n'


def _gen_int(tag_name: str, value: int) -> str:
    return f'<{tag_name} type="Integer">{int(value)}</{tag_name}>\n'


def _structure(tag_name: str, items: list[tuple[str, Optional[object]]], gen) -> str:
    body = "".join(gen(name, value) for name, value in items if value is not None)
    return f'<{tag_name} type="Structure">\n{body}</{tag_name}>\n'


@dataclass
class CartesianBounds:
    """Optional minimum and maximum values for Cartesian X, Y and Z coordinates."""

    x_min: Optional[float] = None
    x_max: Optional[float] = None
    y_min: Optional[float] = None
    y_max: Optional[float] = None
    z_min: Optional[float] = None
    z_max: Optional[float] = None

    @classmethod
    def from_element(cls, element: Element) -> "CartesianBounds":
        """Parse the bounds from a ``cartesianBounds`` XML element."""
        return cls(
            x_min=_opt_float(element, "xMinimum"),
            x_max=_opt_float(element, "xMaximum"),
            y_min=_opt_float(element, "yMinimum"),
            y_max=_opt_float(element, "yMaximum"),
            z_min=_opt_float(element, "zMinimum"),
            z_max=_opt_float(element, "zMaximum"),
        )

    def xml_string(self) -> str:
        """Serialize the bounds as a ``cartesianBounds`` XML element."""
        items = [
            ("xMinimum", self.x_min),
            ("xMaximum", self.x_max),
            ("yMinimum", self.y_min),
            ("yMaximum", self.y_max),
            ("zMinimum", self.z_min),
            ("zMaximum", self.z_max),
        ]
        return _structure("cartesianBounds", items, _gen_float)


@dataclass
class SphericalBounds:
    """Optional minimum and maximum values for spherical coordinates."""

    range_min: Optional[float] = None
    range_max: Optional[float] = None
    elevation_min: Optional[float] = None
    elevation_max: Optional[float] = None
    azimuth_start: Optional[float] = None
    azimuth_end: Optional[float] = None

    @classmethod
    def from_element(cls, element: Element) -> "SphericalBounds":
        """Parse the bounds from a ``sphericalBounds`` XML element."""
        return cls(
            range_min=_opt_float(element, "rangeMinimum"),
            range_max=_opt_float(element, "rangeMaximum"),
            elevation_min=_opt_float(element, "elevationMinimum"),
            elevation_max=_opt_float(element, "elevationMaximum"),
            azimuth_start=_opt_float(element, "azimuthStart"),
            azimuth_end=_opt_float(element, "azimuthEnd"),
        )

    def xml_string(self) -> str:
        """Serialize the bounds as a ``sphericalBounds`` XML element."""
        items = [
            ("azimuthStart", self.azimuth_start),
            ("azimuthEnd", self.azimuth_end),
            ("elevationMinimum", self.elevation_min),
            ("elevationMaximum", self.elevation_max),
            ("rangeMinimum", self.range_min),
            ("rangeMaximum", self.range_max),
        ]
        return _structure("sphericalBounds", items, _gen_float)


@dataclass
class IndexBounds:
    """Optional minimum and maximum values for the row, column and return indices."""

    row_min: Optional[int] = None
    row_max: Optional[int] = None
    column_min: Optional[int] = None
    column_max: Optional[int] = None
    return_min: Optional[int] = None
    return_max: Optional[int] = None

    @classmethod
    def from_element(cls, element: Element) -> "IndexBounds":
        """Parse the bounds from an ``indexBounds`` XML element."""
        return cls(
            row_min=_opt_int(element, "rowMinimum"),
            row_max=_opt_int(element, "rowMaximum"),
            column_min=_opt_int(element, "columnMinimum"),
            column_max=_opt_int(element, "columnMaximum"),
            return_min=_opt_int(element, "returnMinimum"),
            return_max=_opt_int(element, "returnMaximum"),
        )

    def xml_string(self) -> str:
        """Serialize the bounds as an ``indexBounds`` XML element."""
        items = [
            ("rowMinimum", self.row_min),
            ("rowMaximum", self.row_max),
            ("columnMinimum", self.column_min),
            ("columnMaximum", self.column_max),
            ("returnMinimum", self.return_min),
            ("returnMaximum", self.return_max),
        ]
        return _structure("indexBounds", items, _gen_int)