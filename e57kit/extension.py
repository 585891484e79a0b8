"""E57 extensions declared as XML namespaces."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Union
from xml.etree.ElementTree import ParseError, iterparse

from .errors import InvalidError


@dataclass
class Extension:
    """An extension described by its XML namespace prefix and URL."""

    namespace: str
    url: str


def extensions_from_xml(xml_text: Union[str, bytes]) -> list[Extension]:
    """Return the prefixed namespaces declared on the root element of a document."""
    data = xml_text.encode("utf-8") if isinstance(xml_text, str) else bytes(xml_text)
    extensions: list[Extension] = []
    seen_root = False
    try:
        for event, item in iterparse(io.BytesIO(data), events=("start", "start-ns")):
            if event == "start":
                seen_root = True
            elif not seen_root:
                prefix, uri = item
                if prefix:
                    extensions.append(Extension(prefix, uri))
    except ParseError as exc:
        raise InvalidError("Failed to parse XML data") from exc
    return extensions


def validate_name(name: str) -> None:
    """Raise ``InvalidError`` unless ``name`` is usable as an XML namespace or tag."""
    if name.lower().startswith("xml"):
        raise InvalidError(
            f"Strings used as XML namespaces or attributes must not start with 'XML': {name}"
        )
    if not all((c.isascii() and c.isalnum()) or c in "_-" for c in name):
        raise InvalidError(
            "Strings used as XML namespaces or attributes should consist only of "
            f"a-z, A-Z, 0-9, dashes and underscores: '{name}'"
        )