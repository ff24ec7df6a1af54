"""
Build the immutable SessionRecord for one located peer.
"""

import logging
from typing import Optional

from .exceptions import PeerStateUnavailable
from .models import BgpState, Counter, PeerIdentity, SessionRecord
from .snmp_helpers import format_error_pair, is_missing, parse_error_octets, to_int
from .snmp_oids import BGP_NOTIFICATIONS, SYSTEM
from .vendors import VendorSchema

logger = logging.getLogger(__name__)


def describe_error(code: int, subcode: int) -> str:
    """IANA text for a BGP NOTIFICATION code/subcode pair, empty if unknown."""
    if not code and not subcode:
        return ""
    return BGP_NOTIFICATIONS.get(format_error_pair(code, subcode), "")


def scalar_oids(schema: VendorSchema, identity: PeerIdentity) -> dict:
    key = identity.correlation_key
    oids = {
        "state": f"{schema.state_oid}.{key}",
        "admin_status": f"{schema.admin_status_oid}.{key}",
        "remote_as": f"{schema.remote_as_oid}.{key}",
        "bgp_local_as": SYSTEM["bgpLocalAs"],
    }
    if schema.local_as_oid:
        oids["local_as"] = f"{schema.local_as_oid}.{key}"
    if schema.error_oid:
        oids["error"] = f"{schema.error_oid}.{key}"
    if schema.error_code_oid:
        oids["error_code"] = f"{schema.error_code_oid}.{key}"
    if schema.error_subcode_oid:
        oids["error_subcode"] = f"{schema.error_subcode_oid}.{key}"
    if schema.error_text_oid:
        oids["error_text"] = f"{schema.error_text_oid}.{key}"
    return oids


def _device_text(value) -> str:
    if is_missing(value):
        return ""
    text = str(value).strip()
    # Binary octets rendered as hex carry no readable text
    if text.lower().startswith("0x"):
        return ""
    return text


async def assemble_record(
    session,
    schema: VendorSchema,
    identity: PeerIdentity,
    peer: str,
    counter: Optional[Counter] = None,
) -> SessionRecord:
    oids = scalar_oids(schema, identity)
    logger.info("POLL: Attempting to poll state, admStatus, ASN, error Codes, etc..")
    result = await session.get(list(oids.values()))
    values = {name: result.get(oid) for name, oid in oids.items()}

    raw_state = values["state"]
    if is_missing(raw_state):
        raise PeerStateUnavailable(
            f"BGP error: peer {peer} is configured but its state is not available"
        )
    try:
        state = BgpState(to_int(raw_state))
    except ValueError:
        raise PeerStateUnavailable(f"BGP error: unexpected state {raw_state} for peer {peer}")

    local_as = to_int(values.get("local_as")) or to_int(values["bgp_local_as"]) or 0
    remote_as = to_int(values["remote_as"]) or 0

    if "error" in values:
        code, subcode = parse_error_octets(values["error"])
    else:
        code = to_int(values.get("error_code")) or 0
        subcode = to_int(values.get("error_subcode")) or 0

    error_text = describe_error(code, subcode)
    if not error_text and (code or subcode):
        error_text = _device_text(values.get("error_text"))

    record = SessionRecord(
        identity=identity,
        peer=peer,
        vendor=schema.name,
        state=state,
        admin_status=to_int(values["admin_status"]),
        local_as=local_as,
        remote_as=remote_as,
        error_code=code,
        error_subcode=subcode,
        error_text=error_text,
        counter=counter,
    )
    logger.info(
        f"BGP: {record.session_type} neigh {peer}, AS {remote_as}, "
        f"state({int(state)}/{state.label})"
    )
    return record
