"""
Wireless controller client count check.

SSIDs are looked up in CISCO-LWAPP-WLAN-MIB, client counts read from
AIRESPACE-WIRELESS-MIB; both tables share the WLAN index.
"""

import logging
from typing import Optional

from .exceptions import CapabilityNotSupported, InvalidArgument, NameNotFound
from .locator import match_named_rows, validate_name
from .models import CheckResult
from .snmp_helpers import oid_suffix, to_int
from .snmp_oids import CISCO_WLAN
from .thresholds import ThresholdConfig, evaluate_count

logger = logging.getLogger(__name__)


async def ssid_indexes(session, ssid: str) -> list:
    base = CISCO_WLAN["cLWlanSsid"]
    table = await session.table_walk(base)
    indexes = [index for index in match_named_rows(table, base, ssid) if index]
    if not indexes:
        raise NameNotFound("WLAN error: Does ssid exist on this controller?")
    logger.info(f"WLAN: {ssid} found at index {', '.join('.'.join(map(str, i)) for i in indexes)}")
    return indexes


async def check_wlan(
    session,
    ssid: Optional[str] = None,
    all_clients: bool = False,
    config: ThresholdConfig = ThresholdConfig(),
) -> CheckResult:
    ssid = validate_name(ssid, "ssid")
    if (ssid is None) == (not all_clients):
        raise InvalidArgument("Specify exactly one of an ssid or all clients")

    indexes = await ssid_indexes(session, ssid) if ssid is not None else None

    base = CISCO_WLAN["bsnDot11EssNumberOfMobileStations"]
    table = await session.table_walk(base)
    if not table:
        raise CapabilityNotSupported(
            "Wireless controller doesn't support AIRESPACE-WIRELESS-MIB::bsnDot11EssNumberOfMobileStations"
        )

    total = 0
    for oid, value in table.items():
        index = oid_suffix(oid, base)
        if indexes is not None and index not in indexes:
            continue
        count = to_int(value) or 0
        logger.debug(f"CNT: index {index} with {count} clients")
        total += count

    if ssid is not None:
        ok_message = f"SSID {ssid} client count {total}"
    else:
        ok_message = f"Client count {total}"
    verdict = evaluate_count("Client count", total, config, ok_message, "clients")
    return CheckResult(verdicts=(verdict,))
