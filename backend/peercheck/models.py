"""
Data model shared by the check engine.

Everything here is created fresh for one invocation and discarded once a
status line has been emitted. Records are frozen: the assembler builds them
once and the evaluator only reads them.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple

from .snmp_oids import BGP_STATES, describe_afi_safi


class Status(IntEnum):
    """Monitoring plugin states, valued as their process exit codes."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def severity(self) -> int:
        # CRITICAL outranks UNKNOWN when several results are combined
        return {0: 0, 1: 1, 3: 2, 2: 3}[self.value]


class BgpState(IntEnum):
    IDLE = 1
    CONNECT = 2
    ACTIVE = 3
    OPENSENT = 4
    OPENCONFIRM = 5
    ESTABLISHED = 6

    @property
    def label(self) -> str:
        return BGP_STATES[self.value]


ADMIN_STOPPED = 1


@dataclass(frozen=True)
class PeerIdentity:
    routing_instance: Optional[int]
    address_family: int
    remote_address: Tuple[int, ...]
    correlation_key: str
    local_address: Optional[Tuple[int, ...]] = None


@dataclass(frozen=True)
class Counter:
    """A single correlated counter row. afi/safi are diagnostic only."""

    value: int
    afi: Optional[int] = None
    safi: Optional[int] = None

    @property
    def session_family(self) -> Optional[str]:
        if self.afi is None or self.safi is None:
            return None
        return describe_afi_safi(self.afi, self.safi)


@dataclass(frozen=True)
class SessionRecord:
    identity: PeerIdentity
    peer: str
    vendor: str
    state: BgpState
    admin_status: Optional[int]
    local_as: int
    remote_as: int
    error_code: int = 0
    error_subcode: int = 0
    error_text: str = ""
    counter: Optional[Counter] = None

    @property
    def session_type(self) -> str:
        return "iBGP" if self.local_as == self.remote_as else "eBGP"

    @property
    def prefixes(self) -> Optional[int]:
        return self.counter.value if self.counter is not None else None

    @property
    def admin_stopped(self) -> bool:
        return self.admin_status == ADMIN_STOPPED

    def to_dict(self) -> dict:
        return {
            "peer": self.peer,
            "vendor": self.vendor,
            "routing_instance": self.identity.routing_instance,
            "state": int(self.state),
            "state_name": self.state.label,
            "admin_status": self.admin_status,
            "local_as": self.local_as,
            "remote_as": self.remote_as,
            "type": self.session_type,
            "error_code": self.error_code,
            "error_subcode": self.error_subcode,
            "error_text": self.error_text,
            "prefixes": self.prefixes,
            "session_family": self.counter.session_family if self.counter else None,
        }


@dataclass(frozen=True)
class Verdict:
    status: Status
    message: str
    perfdata: Tuple[str, ...] = field(default_factory=tuple)

    def render(self) -> str:
        line = f"{self.status.name} - {self.message}"
        if self.perfdata:
            line += " | " + " ".join(self.perfdata)
        return line


def worst(verdicts) -> Status:
    """Most severe status of a non-empty collection of verdicts."""
    return max((v.status for v in verdicts), key=lambda s: s.severity)


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one check run: one verdict per evaluated record."""

    verdicts: Tuple[Verdict, ...]
    records: Tuple[SessionRecord, ...] = ()

    @classmethod
    def single(cls, status: Status, message: str) -> "CheckResult":
        return cls(verdicts=(Verdict(status, message),))

    @property
    def status(self) -> Status:
        return worst(self.verdicts)

    @property
    def message(self) -> str:
        return "; ".join(v.message for v in self.verdicts)

    @property
    def perfdata(self) -> Tuple[str, ...]:
        return tuple(p for v in self.verdicts for p in v.perfdata)

    def render(self) -> str:
        return Verdict(self.status, self.message, self.perfdata).render()

    def to_dict(self) -> dict:
        return {
            "status": self.status.name,
            "exit_code": int(self.status),
            "message": self.message,
            "perfdata": list(self.perfdata),
            "records": [r.to_dict() for r in self.records],
        }
