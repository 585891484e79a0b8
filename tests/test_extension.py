import pytest

from e57kit.errors import InvalidError
from e57kit.extension import Extension, extensions_from_xml, validate_name


@pytest.mark.parametrize("name", ["abcz", "ABCZ", "0129", "-_-", "aBC-DEf-Z_09", "axml"])
def test_valid_names(name):
    assert validate_name(name) is None


@pytest.mark.parametrize("name", ["xmlabc", "XMLabc", "abc.", "äüöß"])
def test_invalid_names(name):
    with pytest.raises(InvalidError):
        validate_name(name)


def test_extensions_from_root_namespaces():
    xml = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<e57Root type="Structure" xmlns="http://www.astm.org/COMMIT/E57/2010-e57-v1.0" '
        'xmlns:ext="http://example.com/ext" xmlns:other="http://example.com/other">'
        "<child/></e57Root>"
    )
    assert extensions_from_xml(xml) == [
        Extension("ext", "http://example.com/ext"),
        Extension("other", "http://example.com/other"),
    ]


def test_nested_namespaces_are_ignored():
    xml = '<root xmlns:a="http://example.com/a"><c xmlns:b="http://example.com/b"/></root>'
    assert extensions_from_xml(xml.encode("utf-8")) == [
        Extension("a", "http://example.com/a")
    ]


def test_no_extensions():
    assert extensions_from_xml("<root/>") == []


def test_malformed_xml_raises():
    with pytest.raises(InvalidError):
        extensions_from_xml("<root><unclosed></root>")