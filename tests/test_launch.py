"""Tests for per-attempt launch parameters."""

import pytest

from launchguard.launch import LaunchParameterResolver

DAEMONS = ["maintenance", "dnsd", "autounlock"]
FLAGS = ["-config", "cfg.json", "-supervisor=true", "-daemons", "maintenance,dnsd,autounlock", "-maxworkers", "8"]
FULL_FLAGS = ["-config", "cfg.json", "-maxworkers", "8"]
CONFIG_ONLY = ["-config", "cfg.json"]
TAIL = ["-supervisor=false", "-daemons"]


@pytest.fixture
def resolver():
    return LaunchParameterResolver(FLAGS, DAEMONS)


class TestLaunchParameterResolver:
    def test_strips_daemons_flag_at_construction(self, resolver):
        assert resolver.cli_flags == ("-config", "cfg.json", "-supervisor=true", "-maxworkers", "8")
        assert resolver.shed_ladder == (("dnsd", "autounlock"), ("autounlock",))

    def test_first_attempt_is_normal_start(self, resolver):
        flags, daemons = resolver.resolve(0)
        assert daemons == DAEMONS
        assert flags == FULL_FLAGS + TAIL + ["maintenance,dnsd,autounlock"]

    def test_second_attempt_keeps_only_config(self, resolver):
        flags, daemons = resolver.resolve(1)
        assert daemons == DAEMONS
        assert flags == CONFIG_ONLY + TAIL + ["maintenance,dnsd,autounlock"]

    def test_further_attempts_shed_daemons(self, resolver):
        flags, daemons = resolver.resolve(2)
        assert daemons == ["dnsd", "autounlock"]
        assert flags == CONFIG_ONLY + TAIL + ["dnsd,autounlock"]

        flags, daemons = resolver.resolve(3)
        assert daemons == ["autounlock"]
        assert flags == CONFIG_ONLY + TAIL + ["autounlock"]

    def test_attempt_after_ladder_restores_daemons_only(self, resolver):
        flags, daemons = resolver.resolve(4)
        assert daemons == DAEMONS
        assert flags == CONFIG_ONLY + TAIL + ["maintenance,dnsd,autounlock"]

    @pytest.mark.parametrize("attempt", [5, 6, 50])
    def test_gives_up_shedding_and_restores_everything(self, resolver, attempt):
        flags, daemons = resolver.resolve(attempt)
        assert daemons == DAEMONS
        assert flags == FULL_FLAGS + TAIL + ["maintenance,dnsd,autounlock"]

    @pytest.mark.parametrize("attempt", range(8))
    def test_resolve_is_pure(self, resolver, attempt):
        first = resolver.resolve(attempt)
        first[0].append("-mutated")
        first[1].clear()
        assert resolver.resolve(attempt) == resolver.resolve(attempt)
        assert "-mutated" not in resolver.resolve(attempt)[0]

    @pytest.mark.parametrize("attempt", range(8))
    def test_supervisor_always_disabled_once(self, resolver, attempt):
        flags, _ = resolver.resolve(attempt)
        supervisor_flags = [f for f in flags if f.startswith("-supervisor")]
        assert supervisor_flags == ["-supervisor=false"]

    def test_rejects_negative_attempt(self, resolver):
        with pytest.raises(ValueError):
            resolver.resolve(-1)

    def test_short_ladder_holds_smallest_set(self):
        resolver = LaunchParameterResolver(["-config", "c"], ["custom", "dnsd", "other"], shed_order=["dnsd"])
        assert resolver.shed_ladder == (("custom", "other"),)
        assert resolver.resolve(2)[1] == ["custom", "other"]
        assert resolver.resolve(3)[1] == ["custom", "other"]
        assert resolver.resolve(4)[1] == ["custom", "dnsd", "other"]

    def test_single_daemon_is_never_shed(self):
        resolver = LaunchParameterResolver(["-config", "c", "-maxworkers", "2"], ["autounlock"])
        assert resolver.resolve(1) == (["-config", "c", "-supervisor=false", "-daemons", "autounlock"], ["autounlock"])
        assert resolver.resolve(2) == (["-config", "c", "-supervisor=false", "-daemons", "autounlock"], ["autounlock"])
        assert resolver.resolve(3)[0] == ["-config", "c", "-maxworkers", "2", "-supervisor=false", "-daemons", "autounlock"]
