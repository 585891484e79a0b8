"""GPS based date and time values used in E57 metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from xml.etree.ElementTree import Element

from .bounds import _format_float, _local_name, _parse_float
from .errors import InvalidError


def _find_typed_child(parent: Element, tag_name: str, type_name: str) -> Optional[Element]:
    for child in parent:
        if (
            isinstance(child.tag, str)
            and _local_name(child.tag) == tag_name
            and child.get("type") == type_name
        ):
            return child
    return None


@dataclass
class DateTime:
    """A point in time as seconds since the GPS epoch (1980-01-06 00:00 UTC)."""

    gps_time: float
    atomic_reference: bool = False

    @classmethod
    def from_element(cls, element: Element) -> Optional["DateTime"]:
        """Parse a date time structure, or return ``None`` when it is incomplete."""
        value_node = _find_typed_child(element, "dateTimeValue", "Float")
        if value_node is None:
            raise InvalidError(
                "Unable to find XML tag 'dateTimeValue' with type 'Float'"
            )
        if value_node.text is None:
            return None
        try:
            gps_time = _parse_float(value_node.text, "dateTimeValue")
        except InvalidError as exc:
            raise InvalidError(
                "Failed to parse inner text of XML tag 'dateTimeValue' as double"
            ) from exc

        atomic_node = _find_typed_child(element, "isAtomicClockReferenced", "Integer")
        if atomic_node is None:
            return None
        atomic_reference = (atomic_node.text or "0").strip() == "1"
        return cls(gps_time, atomic_reference)

    def xml_string(self, tag_name: str) -> str:
        """Serialize as a structure element named ``tag_name``."""
        flag = "1" if self.atomic_reference else "0"
        return (
            f'<{tag_name} type="Structure">\n'
            f'<dateTimeValue type="Float">{_format_float(self.gps_time)}</dateTimeValue>\n'
            f'<isAtomicClockReferenced type="Integer">{flag}</isAtomicClockReferenced>\n'
            f"</{tag_name}>\n"
        )