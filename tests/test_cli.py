"""
Unit tests for the plugin entry points.
"""

import pytest

from peercheck import cli


@pytest.fixture
def device(monkeypatch, make_session):
    """Point the CLI at a FakeSession; returns the list of sessions created."""
    created = []

    def install(data, session_cls=make_session):
        def factory(*args, **kwargs):
            session = session_cls(data)
            session.options = (args, kwargs)
            created.append(session)
            return session

        monkeypatch.setattr(cli, "SnmpSession", factory)
        return created

    return install


def _run(main, argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


class TestCheckBgpMain:
    """Tests for the check_bgp command."""

    def test_ok(self, device, cisco_data, capsys):
        device(cisco_data)
        code = _run(cli.check_bgp_main, ["-H", "192.0.2.1", "-s", "public", "-b", "10.0.0.1"])

        assert code == 0
        assert capsys.readouterr().out == "OK - eBGP AS65001 10.0.0.1 is Established. pfx count 120 | prefixes=120;;\n"

    def test_low_bound_critical(self, device, cisco_data, capsys):
        device(cisco_data)
        code = _run(cli.check_bgp_main, ["-H", "192.0.2.1", "-s", "public", "-b", "10.0.0.1",
                                         "-B", "-w", "150", "-c", "120"])

        assert code == 2
        assert capsys.readouterr().out.startswith("CRITICAL - eBGP AS65001 10.0.0.1 routes below 120")

    def test_options_reach_session(self, device, cisco_data):
        sessions = device(cisco_data)
        _run(cli.check_bgp_main, ["-H", "router1", "-s", "public", "-P", "3", "-p", "1161", "-6", "-b", "10.0.0.1"])

        args, kwargs = sessions[0].options
        assert args == ("router1",)
        assert kwargs["version"] == "3"
        assert kwargs["port"] == 1161
        assert kwargs["transport"] == "udp6"

    def test_conflicting_directions_never_poll(self, device, cisco_data, capsys):
        sessions = device(cisco_data)
        code = _run(cli.check_bgp_main, ["-H", "192.0.2.1", "-s", "public", "-b", "10.0.0.1", "-A", "-B"])

        assert code == 3
        assert capsys.readouterr().out == "UNKNOWN - Cannot define both low and high alert directions\n"
        assert sessions == []

    def test_vendor_failure_is_critical(self, device, capsys):
        device({})
        code = _run(cli.check_bgp_main, ["-H", "192.0.2.1", "-s", "public", "-b", "10.0.0.1", "-t", "arista"])

        assert code == 2
        assert capsys.readouterr().out.startswith("CRITICAL - Router type arista")

    def test_usage_error_is_unknown(self, capsys):
        code = _run(cli.check_bgp_main, ["-s", "public", "-b", "10.0.0.1"])

        assert code == 3
        assert capsys.readouterr().out.startswith("UNKNOWN - ")

    def test_unexpected_error_is_unknown(self, device, make_session, capsys):
        class Broken(make_session):
            async def table_walk(self, oid_prefix):
                raise RuntimeError("boom")

        device({}, Broken)
        code = _run(cli.check_bgp_main, ["-H", "192.0.2.1", "-s", "public", "-b", "10.0.0.1"])

        assert code == 3
        assert capsys.readouterr().out == "UNKNOWN - RuntimeError: boom\n"


class TestOtherCommands:

    def test_eigrp(self, device, eigrp_data, capsys):
        device(eigrp_data)
        code = _run(cli.check_eigrp_main, ["-H", "192.0.2.1", "-s", "public", "-a", "200"])

        assert code == 0
        assert capsys.readouterr().out == "OK - AS200 Peer count 5 | peers=5;;\n"

    def test_eigrp_invalid_asn(self, device, eigrp_data, capsys):
        sessions = device(eigrp_data)
        code = _run(cli.check_eigrp_main, ["-H", "192.0.2.1", "-s", "public", "-a", "70000"])

        assert code == 3
        assert sessions[0].calls == []

    def test_wlan(self, device, wlan_data, capsys):
        device(wlan_data)
        code = _run(cli.check_wlan_main, ["-H", "192.0.2.1", "-s", "public", "-n", "corp", "-A", "-w", "10", "-c", "12"])

        assert code == 2
        assert capsys.readouterr().out == "CRITICAL - Client count 15, high critical threshold 12 | clients=15;10;12\n"
