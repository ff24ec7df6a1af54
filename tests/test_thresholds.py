"""
Unit tests for threshold configuration and evaluation.
"""

import pytest

from peercheck.exceptions import ConflictingThresholdMode, InvalidThreshold
from peercheck.models import BgpState, Counter, PeerIdentity, SessionRecord, Status
from peercheck.thresholds import (
    MODE_EXACT,
    MODE_HIGH,
    MODE_LOW,
    MODE_NONE,
    ThresholdConfig,
    check_bounds,
    evaluate_count,
    evaluate_session,
)

IDENTITY = PeerIdentity(
    routing_instance=None,
    address_family=1,
    remote_address=(10, 0, 0, 1),
    correlation_key="1.4.10.0.0.1",
)


def make_record(state=6, prefixes=None, admin_status=2, local_as=65000, remote_as=65001, error_text=""):
    return SessionRecord(
        identity=IDENTITY,
        peer="10.0.0.1",
        vendor="cisco",
        state=BgpState(state),
        admin_status=admin_status,
        local_as=local_as,
        remote_as=remote_as,
        error_text=error_text,
        counter=Counter(prefixes, 1, 1) if prefixes is not None else None,
    )


class TestThresholdConfig:
    """Tests for ThresholdConfig.from_options."""

    def test_conflicting_directions(self):
        with pytest.raises(ConflictingThresholdMode):
            ThresholdConfig.from_options(warning=10, low=True, high=True)

    @pytest.mark.parametrize("value", ["abc", "-1", "1.5"])
    def test_invalid_number(self, value):
        with pytest.raises(InvalidThreshold):
            ThresholdConfig.from_options(warning=value)

    def test_modes(self):
        assert ThresholdConfig.from_options().mode == MODE_NONE
        assert ThresholdConfig.from_options(low=True).mode == MODE_LOW
        assert ThresholdConfig.from_options(high=True).mode == MODE_HIGH
        assert ThresholdConfig.from_options(expected="6", low=True).mode == MODE_EXACT

    def test_parses_strings(self):
        config = ThresholdConfig.from_options(warning="150", critical=" 120 ")
        assert (config.warning, config.critical) == (150, 120)
        assert config.has_bounds

    def test_perfdata(self):
        assert ThresholdConfig(warning=5).perfdata("prefixes", 9) == "prefixes=9;5;"


class TestCheckBounds:

    def test_low_bound_critical_first(self):
        """Critical wins even though warning would also fire."""
        config = ThresholdConfig(warning=150, critical=120, direction="low")
        assert check_bounds(100, config) == (Status.CRITICAL, 120)

    def test_high_bound_inclusive(self):
        config = ThresholdConfig(warning=130, direction="high")
        assert check_bounds(130, config) == (Status.WARNING, 130)
        assert check_bounds(129, config) == (Status.OK, None)

    def test_no_direction_never_fires(self):
        assert check_bounds(0, ThresholdConfig(warning=10, critical=5)) == (Status.OK, None)


class TestEvaluateSession:
    """Tests for evaluate_session."""

    def test_exact_match_overrides_thresholds(self):
        config = ThresholdConfig(warning=150, critical=120, expected=6, direction="low")
        verdict = evaluate_session(make_record(prefixes=100), config)

        assert verdict.status == Status.OK
        assert "6/Established" in verdict.message

    def test_exact_mismatch(self):
        verdict = evaluate_session(make_record(), ThresholdConfig(expected=2))
        assert verdict.status == Status.CRITICAL

    def test_admin_shutdown_is_warning(self):
        verdict = evaluate_session(make_record(state=1, admin_status=1), ThresholdConfig())

        assert verdict.status == Status.WARNING
        assert verdict.message == "Peer 10.0.0.1 local admin shutdown"

    def test_down_is_critical(self):
        record = make_record(state=3, error_text="Hold Timer Expired")
        verdict = evaluate_session(record, ThresholdConfig(warning=1, direction="low"))

        assert verdict.status == Status.CRITICAL
        assert verdict.message == "Peer 10.0.0.1 down (3/Active), err: Hold Timer Expired"

    def test_low_bound(self):
        config = ThresholdConfig(warning=150, critical=120, direction="low")
        verdict = evaluate_session(make_record(prefixes=100), config)

        assert verdict.status == Status.CRITICAL
        assert verdict.message == "eBGP AS65001 10.0.0.1 routes below 120 (pfx 100)"
        assert verdict.perfdata == ("prefixes=100;150;120",)

    def test_high_bound_boundary(self):
        verdict = evaluate_session(make_record(prefixes=130), ThresholdConfig(warning=130, direction="high"))

        assert verdict.status == Status.WARNING
        assert "above 130" in verdict.message

    def test_bound_mode_without_thresholds(self):
        verdict = evaluate_session(make_record(prefixes=100), ThresholdConfig(direction="low"))

        assert verdict.status == Status.OK
        assert verdict.render() == "OK - eBGP AS65001 10.0.0.1 is Established. pfx count 100 | prefixes=100;;"

    def test_ibgp_without_counter(self):
        verdict = evaluate_session(make_record(remote_as=65000), ThresholdConfig())

        assert verdict.status == Status.OK
        assert verdict.render() == "OK - iBGP AS65000 10.0.0.1 is Established"


class TestEvaluateCount:
    """Tests for evaluate_count."""

    def test_ok(self):
        verdict = evaluate_count("Peer count", 3, ThresholdConfig(), "AS100 Peer count 3", "peers")
        assert verdict.render() == "OK - AS100 Peer count 3 | peers=3;;"

    def test_exact(self):
        config = ThresholdConfig(expected=4)
        assert evaluate_count("Client count", 4, config, "x", "clients").status == Status.OK

        verdict = evaluate_count("Client count", 3, config, "x", "clients")
        assert verdict.status == Status.CRITICAL
        assert verdict.message == "Client count 3, expecting 4"

    def test_low_warning(self):
        config = ThresholdConfig(warning=5, critical=2, direction="low")
        verdict = evaluate_count("Peer count", 4, config, "x", "peers")

        assert verdict.status == Status.WARNING
        assert verdict.message == "Peer count 4, low warning threshold 5"
