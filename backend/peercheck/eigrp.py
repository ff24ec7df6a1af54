"""
EIGRP neighbour count check over CISCO-EIGRP-MIB.
"""

import logging
from typing import Optional

from .exceptions import CapabilityNotSupported, InvalidArgument, NameNotFound
from .locator import match_named_rows, validate_name
from .models import CheckResult
from .snmp_helpers import oid_suffix, to_int
from .snmp_oids import CISCO_EIGRP
from .thresholds import ThresholdConfig, evaluate_count

logger = logging.getLogger(__name__)

MAX_ASN = 65535


def validate_asn(asn) -> Optional[int]:
    if asn is None or asn == "":
        return None
    try:
        number = int(str(asn).strip())
    except ValueError:
        raise InvalidArgument(f"Invalid ASN: {asn}")
    if not 1 <= number <= MAX_ASN:
        raise InvalidArgument(f"Invalid ASN: {asn}, must be between 1 and {MAX_ASN}")
    return number


async def vpn_instances(session, vpn: str) -> list:
    table = await session.table_walk(CISCO_EIGRP["cEigrpVpnName"])
    instances = [index[0] for index in match_named_rows(table, CISCO_EIGRP["cEigrpVpnName"], vpn) if index]
    if not instances:
        raise NameNotFound("EIGRP error: Does vpnName exist on this router?")
    logger.info(f"VPN: {vpn} has instances {', '.join(map(str, instances))}")
    return instances


async def check_eigrp(
    session,
    asn=None,
    vpn: Optional[str] = None,
    config: ThresholdConfig = ThresholdConfig(),
) -> CheckResult:
    asn = validate_asn(asn)
    vpn = validate_name(vpn, "vpn name")
    if asn is None and vpn is None:
        raise InvalidArgument("Either an ASN or a vpn name is required")

    instances = await vpn_instances(session, vpn) if vpn is not None else None

    base = CISCO_EIGRP["cEigrpNbrCount"]
    table = await session.table_walk(base)
    if not table:
        raise CapabilityNotSupported("Router doesn't support CISCO-EIGRP-MIB::cEigrpNbrCount")

    total = 0
    asns = []
    for oid, value in table.items():
        index = oid_suffix(oid, base)
        if not index or len(index) < 2:
            continue
        instance, row_asn = index[0], index[-1]
        if instances is not None and instance not in instances:
            continue
        if asn is not None and row_asn != asn:
            continue

        count = to_int(value) or 0
        logger.debug(f"CNT: instance {instance} AS {row_asn} with {count} neighbours")
        total += count
        if row_asn not in asns:
            asns.append(row_asn)

    if not asns:
        raise NameNotFound(f"AS {asn if asn is not None else vpn} does not exist")

    label = ",".join(str(a) for a in sorted(asns))
    verdict = evaluate_count("Peer count", total, config, f"AS{label} Peer count {total}", "peers")
    return CheckResult(verdicts=(verdict,))
