"""
Monitoring plugin entry points.

Every command prints exactly one status line on stdout and exits with the
matching plugin code. Logging goes to stderr.
"""

import argparse
import asyncio
import logging
import sys

from . import config
from .checks import check_bgp, error_result, run_check, unexpected_result
from .eigrp import check_eigrp
from .exceptions import CheckError
from .models import Status
from .snmp_session import SnmpSession
from .thresholds import ThresholdConfig
from .wlan import check_wlan

logger = logging.getLogger(__name__)


class PluginArgumentParser(argparse.ArgumentParser):
    """Usage errors exit UNKNOWN instead of argparse's usual 2 (CRITICAL)."""

    def error(self, message):
        self.print_usage(sys.stderr)
        print(f"{Status.UNKNOWN.name} - {message}")
        sys.exit(int(Status.UNKNOWN))


def build_parser(description: str, low_help: str, high_help: str) -> PluginArgumentParser:
    parser = PluginArgumentParser(description=description)
    parser.add_argument("-H", "--host", required=True, help="Device IP address or hostname")
    parser.add_argument("-s", "--snmpcomm", default=config.SNMP_COMMUNITY,
                        help="SNMP community, or user:authpass:authproto:privpass:privproto for v3")
    parser.add_argument("-P", "--snmpver", default=config.SNMP_VERSION,
                        choices=["1", "2", "2c", "3"], help="SNMP version")
    parser.add_argument("-p", "--port", type=int, default=config.SNMP_PORT, help="SNMP port")
    parser.add_argument("-r", "--result", help="Expected exact result, anything else is CRITICAL")
    parser.add_argument("-w", "--warning", help="Warning threshold")
    parser.add_argument("-c", "--critical", help="Critical threshold")
    parser.add_argument("-A", dest="high", action="store_true", help=high_help)
    parser.add_argument("-B", dest="low", action="store_true", help=low_help)
    parser.add_argument("--timeout", type=float, default=config.CHECK_TIMEOUT,
                        help="Abort the whole check after this many seconds")

    family = parser.add_mutually_exclusive_group()
    family.add_argument("-4", dest="transport", action="store_const", const="udp",
                        help="Poll the device over IPv4")
    family.add_argument("-6", dest="transport", action="store_const", const="udp6",
                        help="Poll the device over IPv6")

    parser.add_argument("-v", "--verbose", action="store_true", help="Log decisions to stderr")
    parser.add_argument("-d", "--debug", action="store_true", help="Log every request to stderr")
    return parser


def configure_logging(verbose: bool = False, debug: bool = False):
    level = getattr(logging, config.LOG_LEVEL, logging.WARNING)
    if verbose:
        level = logging.INFO
    if debug:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def execute(args, check, **kwargs) -> int:
    """Validate options, run ``check`` and print its status line."""
    try:
        thresholds = ThresholdConfig.from_options(
            warning=args.warning,
            critical=args.critical,
            expected=args.result,
            low=args.low,
            high=args.high,
        )
        session = SnmpSession(
            args.host,
            community=args.snmpcomm,
            version=args.snmpver,
            port=args.port,
            transport=args.transport,
        )
        result = asyncio.run(run_check(session, check, args.timeout, config=thresholds, **kwargs))
    except CheckError as e:
        logger.error(f"{type(e).__name__}: {e}")
        result = error_result(e)
    except Exception as e:
        result = unexpected_result(e)

    print(result.render())
    return int(result.status)


def check_bgp_main(argv=None):
    parser = build_parser(
        "Check BGP peer state and accepted prefix count",
        low_help="Alert when the prefix count drops below the thresholds",
        high_help="Alert when the prefix count rises above the thresholds",
    )
    parser.add_argument("-b", "--bgppeer", required=True, help="BGP peer address (IPv4 or IPv6)")
    parser.add_argument("-t", "--type", dest="vendor",
                        help="Router type: cisco, juniper, brocade, arista or generic")
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.debug)
    sys.exit(execute(args, check_bgp, peer=args.bgppeer, vendor=args.vendor))


def check_eigrp_main(argv=None):
    parser = build_parser(
        "Check EIGRP neighbour count",
        low_help="Alert if the neighbour count drops below the thresholds",
        high_help="Alert if the neighbour count rises above the thresholds",
    )
    parser.add_argument("-a", "--asn", help="EIGRP autonomous system number")
    parser.add_argument("-n", "--vpn", help="EIGRP vpn (instance) name")
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.debug)
    sys.exit(execute(args, check_eigrp, asn=args.asn, vpn=args.vpn))


def check_wlan_main(argv=None):
    parser = build_parser(
        "Check wireless controller client counts (total or per SSID)",
        low_help="Alert if the client count drops below the thresholds",
        high_help="Alert if the client count rises above the thresholds",
    )
    parser.add_argument("-a", "--all", dest="all_clients", action="store_true",
                        help="Count clients across every SSID")
    parser.add_argument("-n", "--ssid", help="Count clients of this SSID only")
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.debug)
    sys.exit(execute(args, check_wlan, ssid=args.ssid, all_clients=args.all_clients))


if __name__ == "__main__":
    check_bgp_main()
