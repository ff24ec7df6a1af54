"""
Unit tests for SNMP value and OID helpers.
"""

import pytest
from pysnmp.proto.rfc1902 import Counter64, Integer32, IpAddress, OctetString, TimeTicks
from pysnmp.proto.rfc1905 import noSuchInstance, noSuchObject

from peercheck.snmp_helpers import (
    NO_SUCH_INSTANCE,
    convert_snmp_value,
    format_error_pair,
    is_missing,
    oid_sort_key,
    oid_suffix,
    parse_error_octets,
    to_int,
)


class TestConvertSnmpValue:
    """Tests for convert_snmp_value."""

    def test_integers(self):
        assert convert_snmp_value(Integer32(6)) == 6
        assert convert_snmp_value(Counter64(2 ** 40)) == 2 ** 40

    def test_timeticks_to_seconds(self):
        assert convert_snmp_value(TimeTicks(12345)) == 123

    def test_ip_address(self):
        assert convert_snmp_value(IpAddress("10.0.0.1")) == "10.0.0.1"

    def test_text(self):
        assert convert_snmp_value(OctetString("corp")) == "corp"

    def test_missing_instance(self):
        assert convert_snmp_value(noSuchInstance) is NO_SUCH_INSTANCE
        assert convert_snmp_value(noSuchObject) is NO_SUCH_INSTANCE


class TestValueHelpers:

    def test_marker_is_missing_and_falsy(self):
        assert is_missing(NO_SUCH_INSTANCE)
        assert is_missing(None)
        assert not is_missing(0)
        assert not NO_SUCH_INSTANCE

    def test_to_int(self):
        assert to_int("42") == 42
        assert to_int(NO_SUCH_INSTANCE) is None
        assert to_int("abc") is None


class TestOidHelpers:

    def test_suffix_inside_subtree(self):
        assert oid_suffix("1.3.6.1.2.1.15.3.1.2.10.0.0.1", "1.3.6.1.2.1.15.3.1.2") == (10, 0, 0, 1)

    def test_suffix_outside_subtree(self):
        assert oid_suffix("1.3.6.1.2.1.15.3.1.3.10.0.0.1", "1.3.6.1.2.1.15.3.1.2") is None
        # A sibling sharing a textual prefix is not in the subtree
        assert oid_suffix("1.3.6.1.2.1.15.3.1.20.1", "1.3.6.1.2.1.15.3.1.2") is None
        assert oid_suffix("1.3.6.1.2.1.15.3.1.2", "1.3.6.1.2.1.15.3.1.2") is None

    def test_numeric_ordering(self):
        oids = ["1.3.6.10", "1.3.6.9", "1.3.6.9.1"]
        assert sorted(oids, key=oid_sort_key) == ["1.3.6.9", "1.3.6.9.1", "1.3.6.10"]


class TestErrorOctets:
    """Tests for BGP last-error decoding."""

    @pytest.mark.parametrize("value,expected", [
        ("0x0602", (6, 2)),
        ("06 02", (6, 2)),
        (b"\x04\x00", (4, 0)),
        ("0x0000", (0, 0)),
        ("0x03", (3, 0)),
        ("", (0, 0)),
        ("garbage", (0, 0)),
        (NO_SUCH_INSTANCE, (0, 0)),
    ])
    def test_parse(self, value, expected):
        assert parse_error_octets(value) == expected

    def test_format_pair(self):
        assert format_error_pair(6, 2) == "06 02"
        assert format_error_pair(3, 10) == "03 0A"
