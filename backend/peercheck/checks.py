"""
BGP check orchestration.

Validates the request without touching the network, then runs
detection -> lookup -> counter correlation -> assembly -> evaluation for every
session the target peer has on the device and folds the verdicts into one
result.
"""

import asyncio
import ipaddress
import logging
from dataclasses import replace
from typing import Awaitable, Callable, Optional

from .addressing import address_family
from .assembler import assemble_record
from .counters import correlate_counter
from .exceptions import CheckError, InvalidArgument, TransportError, WatchdogExpired
from .locator import locate_peers
from .models import BgpState, CheckResult, Status, Verdict
from .thresholds import ThresholdConfig, evaluate_session
from .vendors import detect_vendor, get_schema

logger = logging.getLogger(__name__)

WATCHDOG_MESSAGE = "Plugin took too long to complete (alarm)"


def display_address(target: str) -> str:
    """Canonical short form of a peer address."""
    try:
        return ipaddress.ip_address(target.strip()).compressed
    except ValueError:
        return target


def _tag_perfdata(verdict: Verdict, tag: str) -> Verdict:
    tagged = tuple(
        f"{label}_{tag}={rest}"
        for label, _, rest in (p.partition("=") for p in verdict.perfdata)
    )
    return replace(verdict, perfdata=tagged)


async def check_bgp(
    session,
    peer: str,
    vendor: Optional[str] = None,
    config: ThresholdConfig = ThresholdConfig(),
) -> CheckResult:
    family = address_family(peer)
    if config.expected is not None and not BgpState.IDLE <= config.expected <= BgpState.ESTABLISHED:
        raise InvalidArgument(
            f"Expected state must be between {BgpState.IDLE.value} and {BgpState.ESTABLISHED.value}"
        )
    if vendor:
        get_schema(vendor).check_capabilities(family, config)

    schema, table = await detect_vendor(session, vendor)
    schema.check_capabilities(family, config)

    identities = locate_peers(table, peer, schema)
    shown = display_address(peer)

    verdicts = []
    records = []
    for identity in identities:
        name = shown
        if len(identities) > 1:
            name = f"{shown} (instance {identity.routing_instance})"
        try:
            counter = await correlate_counter(session, schema, identity, name)
            record = await assemble_record(session, schema, identity, name, counter)
        except TransportError:
            raise
        except CheckError as e:
            logger.warning(f"BGP: {name}: {e}")
            verdicts.append(Verdict(e.status, str(e)))
            continue

        verdict = evaluate_session(record, config)
        if len(identities) > 1 and verdict.perfdata:
            verdict = _tag_perfdata(verdict, str(identity.routing_instance))
        records.append(record)
        verdicts.append(verdict)

    return CheckResult(verdicts=tuple(verdicts), records=tuple(records))


async def run_with_watchdog(coro: Awaitable, timeout: float):
    """Await ``coro``, abandoning it once ``timeout`` seconds have passed."""
    try:
        return await asyncio.wait_for(coro, timeout)
    except asyncio.TimeoutError:
        raise WatchdogExpired(WATCHDOG_MESSAGE)


def error_result(error: CheckError) -> CheckResult:
    return CheckResult.single(error.status, str(error))


async def run_check(session, check: Callable[..., Awaitable[CheckResult]], timeout: float, **kwargs) -> CheckResult:
    """
    Run one check against an open session and always come back with a result.

    Known failures become the status their error class carries; the session
    is closed whatever happens.
    """
    try:
        async with session:
            return await run_with_watchdog(check(session, **kwargs), timeout)
    except CheckError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return error_result(e)


def unexpected_result(error: Exception) -> CheckResult:
    logger.debug("Unhandled failure", exc_info=error)
    return CheckResult.single(Status.UNKNOWN, f"{type(error).__name__}: {error}")
