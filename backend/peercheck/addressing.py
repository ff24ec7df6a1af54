"""
Address <-> OID index codec.

Peer tables index their rows by the peer address, encoded as OID components.
The vendor MIBs disagree on the exact layout (routing instance or not, local
address before the remote one, explicit octet count or not); ``IndexScheme``
describes one layout and ``decode_index`` walks the components accordingly.
"""

import ipaddress
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .exceptions import InvalidAddress, MalformedIndex
from .models import PeerIdentity
from .snmp_helpers import join_oid

# InetAddressType values (INET-ADDRESS-MIB), also used as AFI
IPV4 = 1
IPV6 = 2

OCTETS_PER_FAMILY = {
    IPV4: 4,
    IPV6: 16,
}

_FAMILY_ALIASES = {
    4: IPV4,
    6: IPV6,
    IPV4: IPV4,
    IPV6: IPV6,
}


@dataclass(frozen=True)
class IndexScheme:
    has_instance: bool = False
    address_groups: int = 1
    length_prefixed: bool = False
    implied_family: Optional[int] = None


def address_family(address: str) -> int:
    """INET-ADDRESS-MIB family (1 or 2) of an address literal."""
    try:
        ip = ipaddress.ip_address(str(address).strip())
    except ValueError:
        raise InvalidAddress(f"Invalid IP addr: {address}")
    if getattr(ip, "scope_id", None):
        raise InvalidAddress(f"Scoped IP addr not supported: {address}")
    return IPV4 if ip.version == 4 else IPV6


def encode_address(address: str, family: Optional[int] = None) -> Tuple[int, ...]:
    """
    Convert an address literal to its OID octet components.

    IPv4 yields the 4 decimal octets unchanged. IPv6 yields 16 decimal octets:
    the expanded address with colons removed, read 2 hex digits at a time.
    ``family`` may be given as 4/6 or as the MIB values 1/2.
    """
    detected = address_family(address)
    if family is not None and _FAMILY_ALIASES.get(family) != detected:
        raise InvalidAddress(f"{address} is not an address of family {family}")

    ip = ipaddress.ip_address(str(address).strip())
    if detected == IPV4:
        return tuple(int(part) for part in str(ip).split("."))

    hexdigits = ip.exploded.replace(":", "")
    return tuple(int(hexdigits[i:i + 2], 16) for i in range(0, len(hexdigits), 2))


def format_address(family: int, octets: Sequence[int]) -> str:
    if OCTETS_PER_FAMILY.get(family) != len(octets):
        raise MalformedIndex(f"{len(octets)} octets do not form a family {family} address")
    if any(not 0 <= o <= 255 for o in octets):
        raise MalformedIndex(f"Octet out of range in {join_oid(octets)}")
    return str(ipaddress.ip_address(bytes(octets)))


def oid_suffix(address: str) -> str:
    return join_oid(encode_address(address))


def _take(components: Sequence[int], pos: int, count: int, what: str) -> Tuple[int, ...]:
    if len(components) - pos < count:
        raise MalformedIndex(
            f"Index {join_oid(components)} too short for {what} "
            f"({count} components needed at position {pos})"
        )
    return tuple(components[pos:pos + count])


def _read_address(components: Sequence[int], pos: int, scheme: IndexScheme):
    if scheme.implied_family is not None:
        family = scheme.implied_family
    else:
        (family,) = _take(components, pos, 1, "address family")
        pos += 1

    if family not in OCTETS_PER_FAMILY:
        raise MalformedIndex(f"AFInet {family} is not ipv4 or ipv6 in {join_oid(components)}")
    width = OCTETS_PER_FAMILY[family]

    if scheme.length_prefixed:
        (length,) = _take(components, pos, 1, "address length")
        pos += 1
        if length != width:
            raise MalformedIndex(
                f"Address length {length} does not match family {family} in {join_oid(components)}"
            )

    octets = _take(components, pos, width, "address octets")
    if any(not 0 <= o <= 255 for o in octets):
        raise MalformedIndex(f"Octet out of range in {join_oid(components)}")
    return family, octets, pos + width


def decode_index(components: Sequence[int], scheme: IndexScheme) -> PeerIdentity:
    """
    Decode an OID index suffix into a PeerIdentity.

    The correlation key is the suffix itself, so secondary tables can be
    addressed with exactly what the agent returned.
    """
    components = tuple(components)
    pos = 0
    instance = None
    if scheme.has_instance:
        (instance,) = _take(components, pos, 1, "routing instance")
        pos += 1

    local = None
    if scheme.address_groups == 2:
        _, local, pos = _read_address(components, pos, scheme)

    family, remote, pos = _read_address(components, pos, scheme)

    if pos != len(components):
        raise MalformedIndex(f"Trailing components in index {join_oid(components)}")

    return PeerIdentity(
        routing_instance=instance,
        address_family=family,
        remote_address=remote,
        local_address=local,
        correlation_key=join_oid(components),
    )
