"""
Pytest configuration and fixtures.
"""

import os
import sys
import pytest

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "backend"))

from peercheck.snmp_helpers import NO_SUCH_INSTANCE, oid_sort_key, oid_suffix  # noqa: E402
from peercheck.snmp_oids import (  # noqa: E402
    ARISTA_BGP,
    BROCADE_BGP,
    CISCO_BGP,
    CISCO_EIGRP,
    CISCO_WLAN,
    GENERIC_BGP,
    JUNIPER_BGP,
    SYSTEM,
)


class FakeSession:
    """In-memory telemetry source. Every request is recorded in ``calls``."""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.calls = []
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True

    async def table_walk(self, oid_prefix):
        self.calls.append(("walk", oid_prefix))
        rows = {oid: value for oid, value in self.data.items() if oid_suffix(oid, oid_prefix) is not None}
        return {oid: rows[oid] for oid in sorted(rows, key=oid_sort_key)}

    async def get(self, oids):
        self.calls.append(("get", tuple(oids)))
        return {oid: self.data.get(oid, NO_SUCH_INSTANCE) for oid in oids}

    @property
    def walked(self):
        return [target for kind, target in self.calls if kind == "walk"]


@pytest.fixture
def make_session():
    """Factory for FakeSession, so tests can build one per device."""
    return FakeSession


# Cisco: type.len.addr
CISCO_KEY = "1.4.10.0.0.1"
CISCO_V6_KEY = "2.16.253.9.180.34.49.133.0.0.0.0.0.0.0.0.171.189"


@pytest.fixture
def cisco_data():
    return {
        f"{CISCO_BGP['cbgpPeer2State']}.{CISCO_KEY}": 6,
        f"{CISCO_BGP['cbgpPeer2AdminStatus']}.{CISCO_KEY}": 2,
        f"{CISCO_BGP['cbgpPeer2LocalAs']}.{CISCO_KEY}": 65000,
        f"{CISCO_BGP['cbgpPeer2RemoteAs']}.{CISCO_KEY}": 65001,
        f"{CISCO_BGP['cbgpPeer2LastError']}.{CISCO_KEY}": "0x0000",
        f"{CISCO_BGP['cbgpPeer2LastErrorTxt']}.{CISCO_KEY}": "",
        f"{CISCO_BGP['cbgpPeer2AcceptedPrefixes']}.{CISCO_KEY}.1.1": 120,
        # A second peer the lookups must ignore
        f"{CISCO_BGP['cbgpPeer2State']}.1.4.10.0.0.2": 1,
        f"{CISCO_BGP['cbgpPeer2State']}.{CISCO_V6_KEY}": 6,
        f"{CISCO_BGP['cbgpPeer2AdminStatus']}.{CISCO_V6_KEY}": 2,
        f"{CISCO_BGP['cbgpPeer2LocalAs']}.{CISCO_V6_KEY}": 65000,
        f"{CISCO_BGP['cbgpPeer2RemoteAs']}.{CISCO_V6_KEY}": 65000,
        f"{CISCO_BGP['cbgpPeer2AcceptedPrefixes']}.{CISCO_V6_KEY}.2.1": 40,
        SYSTEM["bgpLocalAs"]: 65000,
    }


# Juniper: instance.type.local.type.remote
JUNIPER_KEY = "0.1.10.0.0.2.1.10.0.0.1"


@pytest.fixture
def juniper_data():
    return {
        f"{JUNIPER_BGP['jnxBgpM2PeerState']}.{JUNIPER_KEY}": 6,
        f"{JUNIPER_BGP['jnxBgpM2PeerStatus']}.{JUNIPER_KEY}": 2,
        f"{JUNIPER_BGP['jnxBgpM2PeerLocalAs']}.{JUNIPER_KEY}": 65000,
        f"{JUNIPER_BGP['jnxBgpM2PeerRemoteAs']}.{JUNIPER_KEY}": 65002,
        f"{JUNIPER_BGP['jnxBgpM2PeerIndex']}.{JUNIPER_KEY}": 5,
        f"{JUNIPER_BGP['jnxBgpM2PrefixInPrefixesAccepted']}.5.1.1": 800,
    }


# Arista: instance.type.len.remote
ARISTA_KEY = "1.1.4.10.0.0.1"


@pytest.fixture
def arista_data():
    return {
        f"{ARISTA_BGP['aristaBgp4V2PeerState']}.{ARISTA_KEY}": 3,
        f"{ARISTA_BGP['aristaBgp4V2PeerAdminStatus']}.{ARISTA_KEY}": 2,
        f"{ARISTA_BGP['aristaBgp4V2PeerLocalAs']}.{ARISTA_KEY}": 65000,
        f"{ARISTA_BGP['aristaBgp4V2PeerRemoteAs']}.{ARISTA_KEY}": 65003,
        f"{ARISTA_BGP['aristaBgp4V2PeerLastErrorCodeReceived']}.{ARISTA_KEY}": 4,
        f"{ARISTA_BGP['aristaBgp4V2PeerLastErrorSubCodeReceived']}.{ARISTA_KEY}": 0,
        f"{ARISTA_BGP['aristaBgp4V2PeerLastErrorReceivedText']}.{ARISTA_KEY}": "hold timer",
    }


# Brocade: instance.type.len.local.type.len.remote
BROCADE_KEY = "1.1.4.10.0.0.2.1.4.10.0.0.1"


@pytest.fixture
def brocade_data():
    return {
        f"{BROCADE_BGP['bgp4V2PeerState']}.{BROCADE_KEY}": 6,
        f"{BROCADE_BGP['bgp4V2PeerAdminStatus']}.{BROCADE_KEY}": 2,
        f"{BROCADE_BGP['bgp4V2PeerLocalAs']}.{BROCADE_KEY}": 65000,
        f"{BROCADE_BGP['bgp4V2PeerRemoteAs']}.{BROCADE_KEY}": 65004,
        f"{BROCADE_BGP['snBgp4NeighborSummaryIp']}.7": "10.0.0.1",
        f"{BROCADE_BGP['snBgp4NeighborSummaryIp']}.8": "10.0.0.9",
        f"{BROCADE_BGP['snBgp4NeighborSummaryRouteReceived']}.7": 55,
        f"{BROCADE_BGP['snBgp4NeighborSummaryRouteReceived']}.8": 3,
    }


@pytest.fixture
def generic_data():
    return {
        f"{GENERIC_BGP['bgpPeerState']}.10.0.0.1": 1,
        f"{GENERIC_BGP['bgpPeerAdminStatus']}.10.0.0.1": 2,
        f"{GENERIC_BGP['bgpPeerRemoteAs']}.10.0.0.1": 65005,
        f"{GENERIC_BGP['bgpPeerLastError']}.10.0.0.1": "0x0602",
        SYSTEM["bgpLocalAs"]: 65000,
    }


@pytest.fixture
def eigrp_data():
    # cEigrpNbrCount index: vpnId.asNumber
    return {
        f"{CISCO_EIGRP['cEigrpVpnName']}.0": "default",
        f"{CISCO_EIGRP['cEigrpVpnName']}.3": "CUSTOMER",
        f"{CISCO_EIGRP['cEigrpVpnName']}.4": "CUSTOMER",
        f"{CISCO_EIGRP['cEigrpNbrCount']}.0.100": 2,
        f"{CISCO_EIGRP['cEigrpNbrCount']}.3.200": 4,
        f"{CISCO_EIGRP['cEigrpNbrCount']}.4.200": 1,
        f"{CISCO_EIGRP['cEigrpNbrCount']}.4.300": 7,
    }


@pytest.fixture
def wlan_data():
    return {
        f"{CISCO_WLAN['cLWlanSsid']}.1": "corp",
        f"{CISCO_WLAN['cLWlanSsid']}.2": "guest",
        f"{CISCO_WLAN['cLWlanSsid']}.5": "corp",
        f"{CISCO_WLAN['bsnDot11EssNumberOfMobileStations']}.1": 10,
        f"{CISCO_WLAN['bsnDot11EssNumberOfMobileStations']}.2": 25,
        f"{CISCO_WLAN['bsnDot11EssNumberOfMobileStations']}.5": 5,
    }
