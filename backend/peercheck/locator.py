"""
Find the table rows that belong to a target.

Peer tables are matched on the address decoded from the row index; name
tables (EIGRP VPN names, WLAN SSIDs) are matched on the row value.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from .addressing import address_family, decode_index, encode_address
from .exceptions import InvalidArgument, PeerNotFound
from .models import PeerIdentity
from .snmp_helpers import join_oid, oid_sort_key, oid_suffix

logger = logging.getLogger(__name__)


def locate_peers(state_table: Dict[str, Any], target: str, schema) -> List[PeerIdentity]:
    family = address_family(target)
    wanted = encode_address(target)

    matches = []
    for oid in sorted(state_table, key=oid_sort_key):
        components = oid_suffix(oid, schema.state_oid)
        if components is None:
            continue
        # Every layout ends with the remote address; rows of other peers are not decoded
        if components[-len(wanted):] != wanted:
            continue

        identity = decode_index(components, schema.index_scheme)
        if identity.address_family != family or identity.remote_address != wanted:
            continue

        logger.debug(
            f"BGP: matched {schema.name} row {identity.correlation_key} "
            f"(instance {identity.routing_instance})"
        )
        matches.append(identity)

    if not matches:
        raise PeerNotFound(f"BGP error: Does peer {target} exist on this router?")

    logger.info(f"BGP: {len(matches)} session(s) found for peer {target}")
    return matches


def match_named_rows(table: Dict[str, Any], base_oid: str, name: str) -> List[Tuple[int, ...]]:
    """Index suffixes of every row whose value equals ``name``, in OID order."""
    indexes = []
    for oid in sorted(table, key=oid_sort_key):
        if str(table[oid]) != name:
            continue
        components = oid_suffix(oid, base_oid)
        if components is None:
            continue
        logger.debug(f"Matched {name} at index {join_oid(components)}")
        indexes.append(components)
    return indexes


def validate_name(name, what: str) -> Optional[str]:
    """A lookup name must carry at least one alphanumeric character."""
    if name is None:
        return None
    if not re.search(r"[A-Za-z0-9]", name):
        raise InvalidArgument(f"Invalid {what}: {name!r}")
    return name
