"""
Threshold evaluation.

Rules are applied in a fixed order and the first one that matches decides:
an exact expected value overrides everything, a session that is not
established decides on its own, and only then are counters compared with the
warning/critical bounds. Bounds are inclusive.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .exceptions import ConflictingThresholdMode, InvalidThreshold
from .models import BgpState, SessionRecord, Status, Verdict

logger = logging.getLogger(__name__)

LOW = "low"
HIGH = "high"

MODE_NONE = "none"
MODE_EXACT = "exact-match"
MODE_LOW = "low-bound"
MODE_HIGH = "high-bound"


def _parse_number(value, name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        raise InvalidThreshold(f"Invalid {name} threshold: {value}")
    if number < 0:
        raise InvalidThreshold(f"Invalid {name} threshold: {value}")
    return number


@dataclass(frozen=True)
class ThresholdConfig:
    warning: Optional[int] = None
    critical: Optional[int] = None
    expected: Optional[int] = None
    direction: Optional[str] = None

    @classmethod
    def from_options(cls, warning=None, critical=None, expected=None, low=False, high=False) -> "ThresholdConfig":
        """Validate raw option values. Never touches the network."""
        if low and high:
            raise ConflictingThresholdMode("Cannot define both low and high alert directions")
        return cls(
            warning=_parse_number(warning, "warning"),
            critical=_parse_number(critical, "critical"),
            expected=_parse_number(expected, "expected result"),
            direction=LOW if low else HIGH if high else None,
        )

    @property
    def mode(self) -> str:
        if self.expected is not None:
            return MODE_EXACT
        if self.direction == LOW:
            return MODE_LOW
        if self.direction == HIGH:
            return MODE_HIGH
        return MODE_NONE

    @property
    def has_bounds(self) -> bool:
        return self.warning is not None or self.critical is not None

    def perfdata(self, label: str, value: int) -> str:
        warn = "" if self.warning is None else self.warning
        crit = "" if self.critical is None else self.critical
        return f"{label}={value};{warn};{crit}"


def check_bounds(count: int, config: ThresholdConfig) -> Tuple[Status, Optional[int]]:
    """Status from the bound rules and the threshold that fired, if any."""
    if config.mode == MODE_LOW:
        if config.critical is not None and count <= config.critical:
            return Status.CRITICAL, config.critical
        if config.warning is not None and count <= config.warning:
            return Status.WARNING, config.warning
    elif config.mode == MODE_HIGH:
        if config.critical is not None and count >= config.critical:
            return Status.CRITICAL, config.critical
        if config.warning is not None and count >= config.warning:
            return Status.WARNING, config.warning
    return Status.OK, None


def evaluate_session(record: SessionRecord, config: ThresholdConfig) -> Verdict:
    state = f"{int(record.state)}/{record.state.label}"
    perfdata = ()
    if record.prefixes is not None:
        perfdata = (config.perfdata("prefixes", record.prefixes),)

    if config.mode == MODE_EXACT:
        status = Status.OK if int(record.state) == config.expected else Status.CRITICAL
        return Verdict(status, f"Peer {record.peer} state {state}. resCode: {config.expected}", perfdata)

    if record.state != BgpState.ESTABLISHED:
        if record.admin_stopped:
            return Verdict(Status.WARNING, f"Peer {record.peer} local admin shutdown", perfdata)
        error = record.error_text or "none"
        return Verdict(Status.CRITICAL, f"Peer {record.peer} down ({state}), err: {error}", perfdata)

    summary = f"{record.session_type} AS{record.remote_as} {record.peer}"
    if record.prefixes is None:
        return Verdict(Status.OK, f"{summary} is {record.state.label}")

    status, threshold = check_bounds(record.prefixes, config)
    if status is not Status.OK:
        direction = "below" if config.mode == MODE_LOW else "above"
        message = f"{summary} routes {direction} {threshold} (pfx {record.prefixes})"
        return Verdict(status, message, perfdata)

    return Verdict(Status.OK, f"{summary} is {record.state.label}. pfx count {record.prefixes}", perfdata)


def evaluate_count(label: str, count: int, config: ThresholdConfig, ok_message: str, perf_label: str) -> Verdict:
    """Exact-match and bound rules for a plain count (neighbours, clients)."""
    perfdata = (config.perfdata(perf_label, count),)

    if config.mode == MODE_EXACT:
        if count == config.expected:
            return Verdict(Status.OK, f"{label} {count}", perfdata)
        return Verdict(Status.CRITICAL, f"{label} {count}, expecting {config.expected}", perfdata)

    status, threshold = check_bounds(count, config)
    if status is not Status.OK:
        side = "low" if config.mode == MODE_LOW else "high"
        level = status.name.lower()
        return Verdict(status, f"{label} {count}, {side} {level} threshold {threshold}", perfdata)

    return Verdict(Status.OK, ok_message, perfdata)
