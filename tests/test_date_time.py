import xml.etree.ElementTree as ET

import pytest

from e57kit.date_time import DateTime
from e57kit.errors import InvalidError


def _parse(text):
    return DateTime.from_element(ET.fromstring(text))


def test_round_trip_atomic():
    value = DateTime(gps_time=1234567.5, atomic_reference=True)
    assert _parse(value.xml_string("creationDateTime")) == value


def test_round_trip_not_atomic():
    value = DateTime(gps_time=0.25, atomic_reference=False)
    assert _parse(value.xml_string("acquisitionDateTime")) == value


def test_xml_string_layout():
    xml = DateTime(gps_time=1.5, atomic_reference=True).xml_string("creationDateTime")
    assert xml.startswith('<creationDateTime type="Structure">\n')
    assert '<dateTimeValue type="Float">1.5</dateTimeValue>\n' in xml
    assert (
        '<isAtomicClockReferenced type="Integer">1</isAtomicClockReferenced>\n' in xml
    )
    assert xml.endswith("</creationDateTime>\n")


def test_missing_value_raises():
    with pytest.raises(InvalidError):
        _parse('<t type="Structure"><isAtomicClockReferenced type="Integer">1'
               "</isAtomicClockReferenced></t>")


def test_value_with_wrong_type_raises():
    with pytest.raises(InvalidError):
        _parse('<t type="Structure"><dateTimeValue type="Integer">5</dateTimeValue></t>')


def test_unparsable_value_raises():
    with pytest.raises(InvalidError):
        _parse('<t type="Structure"><dateTimeValue type="Float">soon</dateTimeValue>'
               '<isAtomicClockReferenced type="Integer">0</isAtomicClockReferenced></t>')


def test_empty_value_gives_none():
    result = _parse(
        '<t type="Structure"><dateTimeValue type="Float"/>'
        '<isAtomicClockReferenced type="Integer">1</isAtomicClockReferenced></t>'
    )
    assert result is None


def test_missing_atomic_flag_gives_none():
    result = _parse('<t type="Structure"><dateTimeValue type="Float">3.5</dateTimeValue></t>')
    assert result is None


def test_atomic_flag_trimmed():
    result = _parse(
        '<t type="Structure"><dateTimeValue type="Float">3.5</dateTimeValue>'
        '<isAtomicClockReferenced type="Integer"> 1 </isAtomicClockReferenced></t>'
    )
    assert result == DateTime(3.5, True)


def test_empty_atomic_flag_is_false():
    result = _parse(
        '<t type="Structure"><dateTimeValue type="Float">3.5</dateTimeValue>'
        '<isAtomicClockReferenced type="Integer"/></t>'
    )
    assert result == DateTime(3.5, False)