"""
SNMP Helper Functions

Utilities for converting SNMP data types to Python native types and for
handling OIDs as integer component sequences.
"""

from typing import Any, Iterable, Optional, Tuple, Union
from pysnmp.proto.rfc1902 import (
    Integer,
    Integer32,
    Unsigned32,
    Counter32,
    Counter64,
    Gauge32,
    TimeTicks,
    OctetString,
    IpAddress,
)
from pysnmp.proto.rfc1905 import EndOfMibView, NoSuchInstance, NoSuchObject


class _NoSuchInstance:
    """Marker for an OID the agent answered with noSuchInstance/noSuchObject."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "noSuchInstance"

    def __bool__(self):
        return False


NO_SUCH_INSTANCE = _NoSuchInstance()


def convert_snmp_value(value: Any) -> Union[int, str, _NoSuchInstance]:

    # Exceptional responses first, they are not real values
    if isinstance(value, (NoSuchInstance, NoSuchObject, EndOfMibView)):
        return NO_SUCH_INSTANCE

    if isinstance(value, (Integer, Integer32, Unsigned32, Gauge32)):
        return int(value)

    elif isinstance(value, (Counter32, Counter64)):
        return int(value)

    elif isinstance(value, TimeTicks):
        # Convert to seconds
        return int(value) // 100

    # IpAddress is an OctetString subclass, so it has to be checked first
    elif isinstance(value, IpAddress):
        return value.prettyPrint()

    elif isinstance(value, OctetString):
        # Printable text comes back as-is, binary as a 0x-prefixed hex string
        return value.prettyPrint()

    else:
        # Fallback for unknown types
        return str(value)


def is_missing(value: Any) -> bool:
    return value is None or value is NO_SUCH_INSTANCE


def to_int(value: Any) -> Optional[int]:
    if is_missing(value):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def split_oid(oid: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in oid.strip(".").split(".") if part != "")


def join_oid(components: Iterable[int]) -> str:
    return ".".join(str(c) for c in components)


def oid_sort_key(oid: str) -> Tuple[int, ...]:
    """Numeric-aware ordering, so 1.10 sorts after 1.9."""
    return split_oid(oid)


def oid_suffix(oid: str, prefix: str) -> Optional[Tuple[int, ...]]:
    """Components of ``oid`` below ``prefix``, or None if it is outside the subtree."""
    full = split_oid(oid)
    base = split_oid(prefix)
    if len(full) <= len(base) or full[: len(base)] != base:
        return None
    return full[len(base):]


def parse_error_octets(value: Any) -> Tuple[int, int]:
    """
    Decode a 2-octet BGP last-error value into (code, subcode).

    Agents return it as raw bytes, a 0x-prefixed hex string (pysnmp's rendering
    of non-printable octets) or occasionally space separated hex.
    """
    if is_missing(value):
        return 0, 0

    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        text = str(value).strip()
        if text.lower().startswith("0x"):
            text = text[2:]
        text = text.replace(" ", "").replace(":", "")
        try:
            raw = bytes.fromhex(text)
        except ValueError:
            return 0, 0

    if len(raw) < 2:
        return (raw[0], 0) if raw else (0, 0)
    return raw[0], raw[1]


def format_error_pair(code: int, subcode: int) -> str:
    return f"{code:02X} {subcode:02X}"
