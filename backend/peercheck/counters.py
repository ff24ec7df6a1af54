"""
Prefix counter correlation.

Exactly one counter row may belong to a peer. No row means the device keeps no
counter for it; several rows mean more than one AFI/SAFI is negotiated on the
session and there is no safe way to tell which one the thresholds are about.
"""

import logging
from typing import Optional

from .addressing import format_address
from .exceptions import AmbiguousCounterTable, PeerStateUnavailable
from .models import Counter, PeerIdentity
from .snmp_helpers import is_missing, join_oid, oid_sort_key, oid_suffix, to_int
from .vendors import PEER_INDEX, PEER_TABLE, SUMMARY_LOOKUP, VendorSchema

logger = logging.getLogger(__name__)


def _single_row(rows: dict, peer: str) -> Optional[str]:
    if not rows:
        return None
    if len(rows) > 1:
        raise AmbiguousCounterTable(
            f"Multiple Prefix SAFI detected for {peer} ({len(rows)} counter rows), bailing."
        )
    return next(iter(rows))


async def _peer_table(session, schema: VendorSchema, identity: PeerIdentity, peer: str):
    base = f"{schema.counter_oid}.{identity.correlation_key}"
    rows = await session.table_walk(base)
    oid = _single_row(rows, peer)
    if oid is None:
        return None

    trailer = oid_suffix(oid, base) or ()
    afi, safi = (trailer[-2], trailer[-1]) if len(trailer) >= 2 else (None, None)
    return Counter(value=to_int(rows[oid]), afi=afi, safi=safi)


async def _peer_index(session, schema: VendorSchema, identity: PeerIdentity, peer: str):
    index_oid = f"{schema.counter_index_oid}.{identity.correlation_key}"
    result = await session.get([index_oid])
    peer_index = to_int(result.get(index_oid))
    if peer_index is None:
        raise PeerStateUnavailable(f"BGP error: no peer index for {peer}, does peer exist on this router?")
    logger.debug(f"BGP: peer {peer} has counter index {peer_index}")

    base = f"{schema.counter_oid}.{peer_index}.{identity.address_family}"
    rows = await session.table_walk(base)
    oid = _single_row(rows, peer)
    if oid is None:
        return None

    trailer = oid_suffix(oid, base) or ()
    safi = trailer[-1] if trailer else None
    return Counter(value=to_int(rows[oid]), afi=identity.address_family, safi=safi)


async def _summary_lookup(session, schema: VendorSchema, identity: PeerIdentity, peer: str):
    address = format_address(identity.address_family, identity.remote_address)
    summary = await session.table_walk(schema.counter_index_oid)

    indexes = []
    for oid in sorted(summary, key=oid_sort_key):
        if str(summary[oid]) != address:
            continue
        components = oid_suffix(oid, schema.counter_index_oid)
        if components:
            indexes.append(join_oid(components))

    if not indexes:
        return None
    if len(indexes) > 1:
        raise AmbiguousCounterTable(
            f"Multiple neighbour summary rows for {peer} ({', '.join(indexes)}), bailing."
        )
    logger.debug(f"BGP: Found prefix table index {indexes[0]} for peer {peer}")

    counter_oid = f"{schema.counter_oid}.{indexes[0]}"
    result = await session.get([counter_oid])
    value = result.get(counter_oid)
    if is_missing(value):
        return None
    return Counter(value=to_int(value))


_STRATEGIES = {
    PEER_TABLE: _peer_table,
    PEER_INDEX: _peer_index,
    SUMMARY_LOOKUP: _summary_lookup,
}


async def correlate_counter(session, schema: VendorSchema, identity: PeerIdentity, peer: str = "") -> Optional[Counter]:
    """Resolve the single prefix counter of a peer, or None when there is none."""
    if not schema.counters_available(identity.address_family):
        return None

    counter = await _STRATEGIES[schema.counter_strategy](session, schema, identity, peer)
    if counter is None or counter.value is None:
        logger.info(f"BGP: no prefix counter for {peer}")
        return None

    if counter.session_family:
        logger.info(f"BGP: session is {counter.session_family}")
    return counter
