# =============================================================================
# GLOBAL SCALARS
# =============================================================================

SYSTEM = {
    "sysObjectID": "1.3.6.1.2.1.1.2.0",   # Vendor's OID for this device type
    "bgpLocalAs": "1.3.6.1.2.1.15.2.0",   # BGP4-MIB local AS, fallback for per-peer local AS
}

# =============================================================================
# BGP4-MIB (1.3.6.1.2.1.15) - RFC 4273
# Vendor-neutral. Indexed by bgpPeerRemoteAddr (IpAddress), so IPv4 only.
# This MIB does NOT expose prefix counts.
# =============================================================================

GENERIC_BGP = {
    "bgpPeerState": "1.3.6.1.2.1.15.3.1.2",        # idle(1) .. established(6)
    "bgpPeerAdminStatus": "1.3.6.1.2.1.15.3.1.3",  # stop(1), start(2)
    "bgpPeerLocalAddr": "1.3.6.1.2.1.15.3.1.5",
    "bgpPeerRemoteAddr": "1.3.6.1.2.1.15.3.1.7",
    "bgpPeerRemoteAs": "1.3.6.1.2.1.15.3.1.9",
    "bgpPeerLastError": "1.3.6.1.2.1.15.3.1.14",   # 2 octets: code, subcode
}

# =============================================================================
# CISCO-BGP4-MIB (1.3.6.1.4.1.9.9.187)
# cbgpPeer2Table index: remoteAddrType.length.remoteAddr
#   ie: ...5.1.3.1.4.206.108.35.254 <-- type 1, 4 octets follow
# =============================================================================

CISCO_BGP = {
    "cbgpPeer2Entry": "1.3.6.1.4.1.9.9.187.1.2.5.1",
    "cbgpPeer2State": "1.3.6.1.4.1.9.9.187.1.2.5.1.3",
    "cbgpPeer2AdminStatus": "1.3.6.1.4.1.9.9.187.1.2.5.1.4",   # 1 = stop, 2 = start
    "cbgpPeer2LocalAs": "1.3.6.1.4.1.9.9.187.1.2.5.1.8",       # used with bgp local-as
    "cbgpPeer2RemoteAs": "1.3.6.1.4.1.9.9.187.1.2.5.1.11",
    "cbgpPeer2LastError": "1.3.6.1.4.1.9.9.187.1.2.5.1.17",    # 2 octets: code, subcode
    "cbgpPeer2LastErrorTxt": "1.3.6.1.4.1.9.9.187.1.2.5.1.28",
    "cbgpPeer2AcceptedPrefixes": "1.3.6.1.4.1.9.9.187.1.2.8.1.1",  # trailing .afi.safi
}

# =============================================================================
# BGP4-V2-MIB-JUNIPER (1.3.6.1.4.1.2636.5.1.1)
# jnxBgpM2PeerTable index: instance.localType.localAddr.remoteType.remoteAddr
# Addresses carry no length component.
# =============================================================================

JUNIPER_BGP = {
    "jnxBgpM2PeerState": "1.3.6.1.4.1.2636.5.1.1.2.1.1.1.2",
    "jnxBgpM2PeerStatus": "1.3.6.1.4.1.2636.5.1.1.2.1.1.1.3",   # halted(1), running(2)
    "jnxBgpM2PeerLocalAs": "1.3.6.1.4.1.2636.5.1.1.2.1.1.1.9",
    "jnxBgpM2PeerRemoteAs": "1.3.6.1.4.1.2636.5.1.1.2.1.1.1.13",
    "jnxBgpM2PeerIndex": "1.3.6.1.4.1.2636.5.1.1.2.1.1.1.14",   # pivot into prefix counters
    "jnxBgpM2PeerLastErrorReceived": "1.3.6.1.4.1.2636.5.1.1.2.2.1.1.1",
    "jnxBgpM2PeerLastErrorReceivedText": "1.3.6.1.4.1.2636.5.1.1.2.2.1.1.5",
    "jnxBgpM2PrefixInPrefixesAccepted": "1.3.6.1.4.1.2636.5.1.1.2.6.2.1.8",  # .peerIndex.afi.safi
}

# =============================================================================
# ARISTA-BGP4V2-MIB (1.3.6.1.4.1.30065.4.1)
# aristaBgp4V2PeerTable index: instance.remoteType.length.remoteAddr
# =============================================================================

ARISTA_BGP = {
    "aristaBgp4V2PeerTable": "1.3.6.1.4.1.30065.4.1.1.2",
    "aristaBgp4V2PeerLocalAddrType": "1.3.6.1.4.1.30065.4.1.1.2.1.2",
    "aristaBgp4V2PeerLocalAddr": "1.3.6.1.4.1.30065.4.1.1.2.1.3",
    "aristaBgp4V2PeerRemoteAddrType": "1.3.6.1.4.1.30065.4.1.1.2.1.4",
    "aristaBgp4V2PeerRemoteAddr": "1.3.6.1.4.1.30065.4.1.1.2.1.5",
    "aristaBgp4V2PeerLocalAs": "1.3.6.1.4.1.30065.4.1.1.2.1.7",
    "aristaBgp4V2PeerRemoteAs": "1.3.6.1.4.1.30065.4.1.1.2.1.10",
    "aristaBgp4V2PeerAdminStatus": "1.3.6.1.4.1.30065.4.1.1.2.1.12",
    "aristaBgp4V2PeerState": "1.3.6.1.4.1.30065.4.1.1.2.1.13",
    "aristaBgp4V2PeerDescription": "1.3.6.1.4.1.30065.4.1.1.2.1.14",
    "aristaBgp4V2PeerLastErrorCodeReceived": "1.3.6.1.4.1.30065.4.1.1.3.1.1",
    "aristaBgp4V2PeerLastErrorSubCodeReceived": "1.3.6.1.4.1.30065.4.1.1.3.1.2",
    "aristaBgp4V2PeerLastErrorReceivedText": "1.3.6.1.4.1.30065.4.1.1.3.1.4",
    "aristaBgp4V2PrefixInPrefixes": "1.3.6.1.4.1.30065.4.1.1.8.1.3",  # trailing .afi.safi
}

# =============================================================================
# BGP4V2-MIB as shipped by Brocade/Foundry (1.3.6.1.4.1.1991.3.5.1)
# bgp4V2PeerTable index: instance.localType.length.localAddr.remoteType.length.remoteAddr
# Prefix counts only via the legacy IPv4 neighbour summary table.
# =============================================================================

BROCADE_BGP = {
    "bgp4V2PeerEntry": "1.3.6.1.4.1.1991.3.5.1.1.2.1",
    "bgp4V2PeerLocalAs": "1.3.6.1.4.1.1991.3.5.1.1.2.1.7",
    "bgp4V2PeerRemoteAs": "1.3.6.1.4.1.1991.3.5.1.1.2.1.10",
    "bgp4V2PeerAdminStatus": "1.3.6.1.4.1.1991.3.5.1.1.2.1.12",
    "bgp4V2PeerState": "1.3.6.1.4.1.1991.3.5.1.1.2.1.13",
    "bgp4V2PeerLastErrorCodeReceived": "1.3.6.1.4.1.1991.3.5.1.1.3.1.1",
    "bgp4V2PeerLastErrorSubCodeReceived": "1.3.6.1.4.1.1991.3.5.1.1.3.1.2",
    "snBgp4NeighborSummaryIp": "1.3.6.1.4.1.1991.1.2.11.17.1.1.2",
    "snBgp4NeighborSummaryRouteReceived": "1.3.6.1.4.1.1991.1.2.11.17.1.1.5",
}

# =============================================================================
# CISCO-EIGRP-MIB (1.3.6.1.4.1.9.9.449)
# =============================================================================

CISCO_EIGRP = {
    "cEigrpVpnName": "1.3.6.1.4.1.9.9.449.1.1.1.1.2",     # index: vpnId
    "cEigrpNbrCount": "1.3.6.1.4.1.9.9.449.1.2.1.1.2",    # index: vpnId.asNumber
    "cEigrpPeerAddrType": "1.3.6.1.4.1.9.9.449.1.4.1.1.2",
    "cEigrpPeerIfIndex": "1.3.6.1.4.1.9.9.449.1.4.1.1.4",
    "cEigrpPeerCount": "1.3.6.1.4.1.9.9.449.1.5.1.1.3",
}

# =============================================================================
# CISCO-LWAPP-WLAN-MIB (1.3.6.1.4.1.9.9.512) / AIRESPACE-WIRELESS-MIB (14179)
# Wireless LAN controllers
# =============================================================================

CISCO_WLAN = {
    "cLWlanRowStatus": "1.3.6.1.4.1.9.9.512.1.1.1.1.2",
    "cLWlanProfileName": "1.3.6.1.4.1.9.9.512.1.1.1.1.3",
    "cLWlanSsid": "1.3.6.1.4.1.9.9.512.1.1.1.1.4",                          # index: wlanIndex
    "bsnDot11EssNumberOfMobileStations": "1.3.6.1.4.1.14179.2.1.1.1.38",   # index: wlanIndex
}

# =============================================================================
# CODE TABLES
# =============================================================================

BGP_STATES = {
    1: "Idle",
    2: "Connect",
    3: "Active",
    4: "OpenSent",
    5: "OpenConfirm",
    6: "Established",
}

ADMIN_STATUS = {
    1: "Stop",
    2: "Start",
}

# https://www.iana.org/assignments/address-family-numbers/address-family-numbers.txt
AFI = {
    1: "ipv4",
    2: "ipv6",
}

# https://www.iana.org/assignments/safi-namespace/safi-namespace.txt
SAFI = {
    1: "unicast",
    2: "multicast",
    3: "unicastAndMulticast",
    4: "mpls",
    65: "vpls",
    66: "mdt",
    67: "ipv4over6",
    68: "ipv6over4",
    70: "evpn",
    128: "vpn",
    129: "vpn multicast",
}

# https://www.iana.org/assignments/bgp-parameters/bgp-parameters.txt
BGP_NOTIFICATIONS = {
    "01 00": "Message Header Error",
    "01 01": "Message Header Error - Connection Not Synchronized",
    "01 02": "Message Header Error - Bad Message Length",
    "01 03": "Message Header Error - Bad Message Type",
    "02 00": "OPEN Message Error",
    "02 01": "OPEN Message Error - Unsupported Version Number",
    "02 02": "OPEN Message Error - Bad Peer AS",
    "02 03": "OPEN Message Error - Bad BGP Identifier",
    "02 04": "OPEN Message Error - Unsupported Optional Parameter",
    "02 05": "OPEN Message Error",  # deprecated
    "02 06": "OPEN Message Error - Unacceptable Hold Time",
    "02 07": "OPEN Message Error - Unsupported Capability",
    "02 0B": "OPEN Message Error - Role Mismatch",
    "03 00": "UPDATE Message Error",
    "03 01": "UPDATE Message Error - Malformed Attribute List",
    "03 02": "UPDATE Message Error - Unrecognized Well-known Attribute",
    "03 03": "UPDATE Message Error - Missing Well-known Attribute",
    "03 04": "UPDATE Message Error - Attribute Flags Error",
    "03 05": "UPDATE Message Error - Attribute Length Error",
    "03 06": "UPDATE Message Error - Invalid ORIGIN Attribute",
    "03 07": "UPDATE Message Error",  # deprecated
    "03 08": "UPDATE Message Error - Invalid NEXT_HOP Attribute",
    "03 09": "UPDATE Message Error - Optional Attribute Error",
    "03 0A": "UPDATE Message Error - Invalid Network Field",
    "03 0B": "UPDATE Message Error - Malformed AS_PATH",
    "04 00": "Hold Timer Expired",
    "05 00": "Finite State Machine Error",
    "05 01": "Finite State Machine Error - Unexpected Message in OpenSent",
    "05 02": "Finite State Machine Error - Unexpected Message in OpenConfirm",
    "05 03": "Finite State Machine Error - Unexpected Message in Established",
    "06 00": "Cease",
    "06 01": "Cease - Maximum Number of Prefixes Reached",
    "06 02": "Cease - Administrative Shutdown",
    "06 03": "Cease - Peer De-configured",
    "06 04": "Cease - Administrative Reset",
    "06 05": "Cease - Connection Rejected",
    "06 06": "Cease - Other Configuration Change",
    "06 07": "Cease - Connection Collision Resolution",
    "06 08": "Cease - Out of Resources",
    "06 09": "Cease - Hard Reset",
    "06 0A": "Cease - BFD Down",
    "07 00": "ROUTE-REFRESH Message Error",
    "07 01": "ROUTE-REFRESH Message Error - Invalid Message Length",
}


def describe_afi_safi(afi: int, safi: int) -> str:
    return f"{AFI.get(afi, str(afi))}-{SAFI.get(safi, str(safi))}"
