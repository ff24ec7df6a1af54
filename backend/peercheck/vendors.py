"""
Vendor BGP schemas and auto-detection.

Each supported MIB family is described once in ``VENDORS``. Detection walks
the state table of each candidate in a fixed order and keeps the first one
that answers; the walk result is handed on so the peer lookup does not have
to poll it again.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .addressing import IPV4, IPV6, IndexScheme
from .exceptions import CapabilityNotSupported, VendorNotSupported, VendorUndetected
from .snmp_oids import ARISTA_BGP, BROCADE_BGP, CISCO_BGP, GENERIC_BGP, JUNIPER_BGP

logger = logging.getLogger(__name__)

# Counter correlation strategies
PEER_TABLE = "peer-table"          # counter table keyed by the peer index itself
PEER_INDEX = "peer-index"          # counter table keyed by a separate per-peer number
SUMMARY_LOOKUP = "summary-lookup"  # counter table found by address in a summary table


@dataclass(frozen=True)
class VendorSchema:
    name: str
    mib: str
    state_oid: str
    admin_status_oid: str
    remote_as_oid: str
    index_scheme: IndexScheme
    local_as_oid: Optional[str] = None
    error_oid: Optional[str] = None
    error_code_oid: Optional[str] = None
    error_subcode_oid: Optional[str] = None
    error_text_oid: Optional[str] = None
    counter_oid: Optional[str] = None
    counter_strategy: Optional[str] = None
    counter_index_oid: Optional[str] = None
    supports_ipv6: bool = True
    supports_counters: bool = True
    supports_ipv6_counters: bool = True

    def counters_available(self, family: int) -> bool:
        if not self.supports_counters or self.counter_strategy is None:
            return False
        return family == IPV4 or self.supports_ipv6_counters

    def check_capabilities(self, family: int, thresholds) -> None:
        """Reject targets and options this MIB has no data for."""
        if family == IPV6 and not self.supports_ipv6:
            raise CapabilityNotSupported("This router's MIB doesn't support IPv6")

        if not self.supports_counters and thresholds.has_bounds:
            raise CapabilityNotSupported(
                "This router doesn't expose prefix count. Unable to use -w and -c flags"
            )

        if family == IPV6 and not self.supports_ipv6_counters and thresholds.direction:
            raise CapabilityNotSupported("Device doesn't support v6 prefix count")


VENDORS: Dict[str, VendorSchema] = {
    "cisco": VendorSchema(
        name="cisco",
        mib="CISCO-BGP4-MIB",
        state_oid=CISCO_BGP["cbgpPeer2State"],
        admin_status_oid=CISCO_BGP["cbgpPeer2AdminStatus"],
        local_as_oid=CISCO_BGP["cbgpPeer2LocalAs"],
        remote_as_oid=CISCO_BGP["cbgpPeer2RemoteAs"],
        error_oid=CISCO_BGP["cbgpPeer2LastError"],
        error_text_oid=CISCO_BGP["cbgpPeer2LastErrorTxt"],
        counter_oid=CISCO_BGP["cbgpPeer2AcceptedPrefixes"],
        counter_strategy=PEER_TABLE,
        index_scheme=IndexScheme(length_prefixed=True),
    ),
    "juniper": VendorSchema(
        name="juniper",
        mib="BGP4-V2-MIB-JUNIPER",
        state_oid=JUNIPER_BGP["jnxBgpM2PeerState"],
        admin_status_oid=JUNIPER_BGP["jnxBgpM2PeerStatus"],
        local_as_oid=JUNIPER_BGP["jnxBgpM2PeerLocalAs"],
        remote_as_oid=JUNIPER_BGP["jnxBgpM2PeerRemoteAs"],
        error_oid=JUNIPER_BGP["jnxBgpM2PeerLastErrorReceived"],
        error_text_oid=JUNIPER_BGP["jnxBgpM2PeerLastErrorReceivedText"],
        counter_oid=JUNIPER_BGP["jnxBgpM2PrefixInPrefixesAccepted"],
        counter_strategy=PEER_INDEX,
        counter_index_oid=JUNIPER_BGP["jnxBgpM2PeerIndex"],
        index_scheme=IndexScheme(has_instance=True, address_groups=2),
    ),
    "arista": VendorSchema(
        name="arista",
        mib="ARISTA-BGP4V2-MIB",
        state_oid=ARISTA_BGP["aristaBgp4V2PeerState"],
        admin_status_oid=ARISTA_BGP["aristaBgp4V2PeerAdminStatus"],
        local_as_oid=ARISTA_BGP["aristaBgp4V2PeerLocalAs"],
        remote_as_oid=ARISTA_BGP["aristaBgp4V2PeerRemoteAs"],
        error_code_oid=ARISTA_BGP["aristaBgp4V2PeerLastErrorCodeReceived"],
        error_subcode_oid=ARISTA_BGP["aristaBgp4V2PeerLastErrorSubCodeReceived"],
        error_text_oid=ARISTA_BGP["aristaBgp4V2PeerLastErrorReceivedText"],
        counter_oid=ARISTA_BGP["aristaBgp4V2PrefixInPrefixes"],
        counter_strategy=PEER_TABLE,
        index_scheme=IndexScheme(has_instance=True, length_prefixed=True),
    ),
    "brocade": VendorSchema(
        name="brocade",
        mib="BGP4V2-MIB",
        state_oid=BROCADE_BGP["bgp4V2PeerState"],
        admin_status_oid=BROCADE_BGP["bgp4V2PeerAdminStatus"],
        local_as_oid=BROCADE_BGP["bgp4V2PeerLocalAs"],
        remote_as_oid=BROCADE_BGP["bgp4V2PeerRemoteAs"],
        error_code_oid=BROCADE_BGP["bgp4V2PeerLastErrorCodeReceived"],
        error_subcode_oid=BROCADE_BGP["bgp4V2PeerLastErrorSubCodeReceived"],
        counter_oid=BROCADE_BGP["snBgp4NeighborSummaryRouteReceived"],
        counter_strategy=SUMMARY_LOOKUP,
        counter_index_oid=BROCADE_BGP["snBgp4NeighborSummaryIp"],
        supports_ipv6_counters=False,
        index_scheme=IndexScheme(has_instance=True, address_groups=2, length_prefixed=True),
    ),
    "generic": VendorSchema(
        name="generic",
        mib="BGP4-MIB",
        state_oid=GENERIC_BGP["bgpPeerState"],
        admin_status_oid=GENERIC_BGP["bgpPeerAdminStatus"],
        remote_as_oid=GENERIC_BGP["bgpPeerRemoteAs"],
        error_oid=GENERIC_BGP["bgpPeerLastError"],
        supports_ipv6=False,
        supports_counters=False,
        supports_ipv6_counters=False,
        index_scheme=IndexScheme(implied_family=IPV4),
    ),
}

DETECTION_ORDER = ("cisco", "juniper", "brocade", "arista", "generic")


def get_schema(name: str) -> VendorSchema:
    schema = VENDORS.get(str(name).lower())
    if schema is None:
        raise VendorNotSupported(
            f"Router type {name} not supported, types include {', '.join(DETECTION_ORDER)}"
        )
    return schema


async def detect_vendor(session, vendor: Optional[str] = None) -> Tuple[VendorSchema, Dict[str, Any]]:
    """
    Find the schema the device answers for.

    Returns the schema together with its walked state table. With a vendor
    hint only that schema is tried and an empty answer is final.
    """
    if vendor:
        schema = get_schema(vendor)
        logger.info(f"BGP: Polling for router type {schema.name}")
        table = await session.table_walk(schema.state_oid)
        if not table:
            raise VendorNotSupported(
                f"Router type {schema.name} not defined correctly, or other error "
                f"({schema.mib} not answered)"
            )
        return schema, table

    for name in DETECTION_ORDER:
        schema = VENDORS[name]
        logger.debug(f"BGP: Trying {schema.mib} at {schema.state_oid}")
        table = await session.table_walk(schema.state_oid)
        if table:
            logger.info(f"BGP: Vendor detected -> {schema.name}")
            return schema, table

    raise VendorUndetected("Unable to determine vendor, can't continue.")
