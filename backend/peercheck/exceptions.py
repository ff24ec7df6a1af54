"""
Failure taxonomy for the check engine.

Each error class carries the plugin status it is reported as, so the entry
points can turn any failure into exactly one status line.
"""

from .models import Status


class CheckError(Exception):
    status = Status.UNKNOWN


# Configuration, raised before any network I/O

class InvalidArgument(CheckError):
    pass


class InvalidThreshold(InvalidArgument):
    pass


class ConflictingThresholdMode(InvalidArgument):
    pass


class InvalidAddress(InvalidArgument):
    pass


class CapabilityNotSupported(CheckError):
    pass


# Decode / lookup

class MalformedIndex(CheckError):
    pass


class VendorNotSupported(CheckError):
    status = Status.CRITICAL


class VendorUndetected(CheckError):
    status = Status.CRITICAL


class PeerNotFound(CheckError):
    pass


class PeerStateUnavailable(CheckError):
    pass


class AmbiguousCounterTable(CheckError):
    status = Status.WARNING


class NameNotFound(CheckError):
    pass


# Transport

class TransportError(CheckError):
    pass


class TransportTimeout(TransportError):
    pass


class WatchdogExpired(CheckError):
    pass
