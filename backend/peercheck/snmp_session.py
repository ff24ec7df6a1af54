"""
SNMP telemetry source backed by pysnmp.

One session talks to one device and issues one request at a time. Walks come
back as an OID-ordered mapping, gets as a mapping in which missing instances
carry the NO_SUCH_INSTANCE marker.
"""
import asyncio
import logging
import socket
from typing import Any, Dict, List, Optional, Protocol

from pysnmp.hlapi.v3arch.asyncio import (
    get_cmd,
    walk_cmd,
    bulk_walk_cmd,
    SnmpEngine,
    CommunityData,
    UsmUserData,
    UdpTransportTarget,
    Udp6TransportTarget,
    ContextData,
    ObjectType,
    ObjectIdentity,
    USM_AUTH_NONE,
    USM_AUTH_HMAC96_MD5,
    USM_AUTH_HMAC96_SHA,
    USM_AUTH_HMAC128_SHA224,
    USM_AUTH_HMAC192_SHA256,
    USM_AUTH_HMAC256_SHA384,
    USM_AUTH_HMAC384_SHA512,
    USM_PRIV_NONE,
    USM_PRIV_CBC56_DES,
    USM_PRIV_CBC168_3DES,
    USM_PRIV_CFB128_AES,
    USM_PRIV_CFB192_AES,
    USM_PRIV_CFB256_AES,
    USM_KEY_TYPE_PASSPHRASE,
    USM_KEY_TYPE_LOCALIZED,
)
from pysnmp.proto import errind

from . import config
from .exceptions import InvalidArgument, TransportError, TransportTimeout
from .snmp_helpers import convert_snmp_value, is_missing, oid_sort_key, oid_suffix

logger = logging.getLogger(__name__)

AUTH_PROTOCOLS = {
    "NONE": USM_AUTH_NONE,
    "MD5": USM_AUTH_HMAC96_MD5,
    "SHA": USM_AUTH_HMAC96_SHA,
    "SHA1": USM_AUTH_HMAC96_SHA,
    "SHA224": USM_AUTH_HMAC128_SHA224,
    "SHA256": USM_AUTH_HMAC192_SHA256,
    "SHA384": USM_AUTH_HMAC256_SHA384,
    "SHA512": USM_AUTH_HMAC384_SHA512,
}

PRIV_PROTOCOLS = {
    "NONE": USM_PRIV_NONE,
    "DES": USM_PRIV_CBC56_DES,
    "3DES": USM_PRIV_CBC168_3DES,
    "3DESEDE": USM_PRIV_CBC168_3DES,
    "AES": USM_PRIV_CFB128_AES,
    "AES128": USM_PRIV_CFB128_AES,
    "AES192": USM_PRIV_CFB192_AES,
    "AES256": USM_PRIV_CFB256_AES,
}

MAX_REPETITIONS = 25


class TelemetrySource(Protocol):
    async def table_walk(self, oid_prefix: str) -> Dict[str, Any]:
        ...

    async def get(self, oids: List[str]) -> Dict[str, Any]:
        ...


def _secret(value: str):
    """0x-prefixed secrets are localized keys, anything else a passphrase."""
    if value.lower().startswith("0x"):
        try:
            return bytes.fromhex(value[2:]), USM_KEY_TYPE_LOCALIZED
        except ValueError:
            raise InvalidArgument(f"Invalid hex key: {value}")
    return value, USM_KEY_TYPE_PASSPHRASE


def build_auth(version: str, community: Optional[str]):
    """
    Build pysnmp credentials.

    v1/v2c take a plain community string. v3 packs the USM parameters into the
    same argument as ``user:authpass:authproto:privpass:privproto``, trailing
    fields optional.
    """
    version = str(version).lower()
    if not community:
        raise InvalidArgument("No proper SNMP ver/comm combo")

    if version in ("1", "v1"):
        return CommunityData(community, mpModel=0)
    if version in ("2", "2c", "v2c"):
        return CommunityData(community, mpModel=1)
    if version not in ("3", "v3"):
        raise InvalidArgument(f"Unsupported SNMP version: {version}")

    fields = community.split(":")
    user = fields[0]
    auth_pass = fields[1] if len(fields) > 1 and fields[1] else None
    auth_proto = fields[2].upper() if len(fields) > 2 and fields[2] else "MD5"
    priv_pass = fields[3] if len(fields) > 3 and fields[3] else None
    priv_proto = fields[4].upper() if len(fields) > 4 and fields[4] else "DES"

    if auth_proto not in AUTH_PROTOCOLS:
        raise InvalidArgument(f"Unknown SNMPv3 auth protocol: {auth_proto}")
    if priv_proto not in PRIV_PROTOCOLS:
        raise InvalidArgument(f"Unknown SNMPv3 privacy protocol: {priv_proto}")

    logger.debug(f"SNMP: v3 user {user}, authprot {auth_proto}, privprot {priv_proto}")

    if auth_pass is None:
        return UsmUserData(user)

    auth_key, auth_key_type = _secret(auth_pass)
    if priv_pass is None:
        return UsmUserData(
            user,
            authKey=auth_key,
            authProtocol=AUTH_PROTOCOLS[auth_proto],
            authKeyType=auth_key_type,
        )

    priv_key, priv_key_type = _secret(priv_pass)
    return UsmUserData(
        user,
        authKey=auth_key,
        privKey=priv_key,
        authProtocol=AUTH_PROTOCOLS[auth_proto],
        privProtocol=PRIV_PROTOCOLS[priv_proto],
        authKeyType=auth_key_type,
        privKeyType=priv_key_type,
    )


class SnmpSession:

    def __init__(
        self,
        host: str,
        community: Optional[str] = config.SNMP_COMMUNITY,
        version: str = config.SNMP_VERSION,
        port: int = config.SNMP_PORT,
        timeout: float = config.SNMP_TIMEOUT,
        retries: int = config.SNMP_RETRIES,
        transport: Optional[str] = None,
    ):
        self.host = host
        self.port = port
        self.version = str(version).lower()
        self.timeout = timeout
        self.retries = retries
        self.transport = transport
        self.auth = build_auth(version, community)

        self.engine: Optional[SnmpEngine] = None
        self.target = None

    async def __aenter__(self):
        # Opened on the first request, so nothing touches the network before it
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.close()

    async def _resolve_transport(self) -> str:
        """Pick udp or udp6 from the first resolved address unless forced."""
        if self.transport:
            return self.transport
        loop = asyncio.get_running_loop()
        try:
            infos = await loop.getaddrinfo(
                self.host, self.port, family=socket.AF_UNSPEC, type=socket.SOCK_DGRAM
            )
        except socket.gaierror as e:
            raise TransportError(f"Cannot resolve {self.host}: {e}")
        if not infos:
            raise TransportError(f"Cannot resolve {self.host}")
        return "udp6" if infos[0][0] == socket.AF_INET6 else "udp"

    async def open(self):
        transport = await self._resolve_transport()
        logger.debug(f"SNMP: Transport will be {transport} to {self.host}:{self.port}")

        target_cls = Udp6TransportTarget if transport == "udp6" else UdpTransportTarget
        try:
            self.target = await target_cls.create(
                (self.host, self.port), timeout=self.timeout, retries=self.retries
            )
        except Exception as e:
            raise TransportError(f"SNMP session check failed: {e}")
        self.engine = SnmpEngine()

    def close(self):
        if self.engine is not None:
            self.engine.close_dispatcher()
            self.engine = None

    @property
    def _request_timeout(self) -> float:
        # Transport timeout covers a single attempt, this covers all of them
        return self.timeout * (self.retries + 1) + 1

    def _raise_for(self, error_indication):
        if isinstance(error_indication, errind.RequestTimedOut):
            raise TransportTimeout(f"SNMP timeout polling {self.host}")
        raise TransportError(f"SNMP error: {error_indication}")

    async def get(self, oids: List[str]) -> Dict[str, Any]:
        """
        Query multiple OIDs from the device in one request.

        Returns:
            Dictionary of {oid: converted_value}, NO_SUCH_INSTANCE where the
            agent has no such instance.
        """
        if self.engine is None:
            await self.open()

        logger.debug(f"POLL: GET {' '.join(oids)}")
        oid_objects = [ObjectType(ObjectIdentity(oid)) for oid in oids]

        try:
            error_indication, error_status, error_index, var_binds = await asyncio.wait_for(
                get_cmd(
                    self.engine,
                    self.auth,
                    self.target,
                    ContextData(),
                    *oid_objects,
                    lookupMib=False,
                ),
                timeout=self._request_timeout,
            )
        except asyncio.TimeoutError:
            raise TransportTimeout(f"SNMP timeout polling {self.host}")

        if error_indication:
            self._raise_for(error_indication)
        if error_status:
            raise TransportError(f"SNMP error: {error_status.prettyPrint()}")

        results = {}
        for oid, value in var_binds:
            results[str(oid)] = convert_snmp_value(value)

        logger.debug(f"POLL: GET-RESULT {results}")
        return results

    async def table_walk(self, oid_prefix: str) -> Dict[str, Any]:
        """
        Walk every instance below ``oid_prefix``.

        Returns:
            Dictionary of {oid: converted_value} in numeric OID order, empty
            when the subtree does not exist on the device.
        """
        if self.engine is None:
            await self.open()

        logger.debug(f"POLL: WALK {oid_prefix}")
        if self.version in ("1", "v1"):
            walker = walk_cmd(
                self.engine,
                self.auth,
                self.target,
                ContextData(),
                ObjectType(ObjectIdentity(oid_prefix)),
                lexicographicMode=False,
                lookupMib=False,
            )
        else:
            walker = bulk_walk_cmd(
                self.engine,
                self.auth,
                self.target,
                ContextData(),
                0,
                MAX_REPETITIONS,
                ObjectType(ObjectIdentity(oid_prefix)),
                lexicographicMode=False,
                lookupMib=False,
            )

        results = {}
        async for error_indication, error_status, error_index, var_binds in walker:
            if error_indication:
                self._raise_for(error_indication)
            if error_status:
                # noSuchName and friends terminate the walk on v1 agents
                break

            for oid, value in var_binds:
                oid_str = str(oid)
                # Stop if we've left the base OID subtree
                if oid_suffix(oid_str, oid_prefix) is None:
                    break
                converted = convert_snmp_value(value)
                if is_missing(converted):
                    continue
                results[oid_str] = converted

        ordered = {oid: results[oid] for oid in sorted(results, key=oid_sort_key)}
        logger.debug(f"POLL: WALK {oid_prefix} returned {len(ordered)} rows")
        return ordered
