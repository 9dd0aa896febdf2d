"""Tests for CLI flag rewriting and parsing."""

import pytest

from launchguard.flags import flag_matches, parse_bool, parse_flags, remove_from_flags, split_daemon_names


class TestRemoveFromFlags:
    def test_removes_separated_flag_with_value(self):
        flags = ["-config", "cfg.json", "-daemons", "dnsd,httpd", "-gomaxprocs", "8"]
        result = remove_from_flags(lambda f: f == "-daemons", flags)
        assert result == ["-config", "cfg.json", "-gomaxprocs", "8"]

    def test_removes_joined_flag_alone(self):
        flags = ["-supervisor=true", "-config", "cfg.json"]
        result = remove_from_flags(lambda f: f.startswith("-supervisor"), flags)
        assert result == ["-config", "cfg.json"]

    def test_keeps_everything_when_nothing_matches(self):
        flags = ["-config", "cfg.json", "-supervisor=false", "-maxworkers", "4"]
        assert remove_from_flags(lambda f: False, flags) == flags

    def test_removes_everything_but_config(self):
        flags = ["-maxworkers", "4", "-config", "cfg.json", "-supervisor=true", "-daemons", "dnsd"]
        result = remove_from_flags(lambda f: not flag_matches(f, "config"), flags)
        assert result == ["-config", "cfg.json"]

    def test_removes_joined_config_flag(self):
        flags = ["-config=cfg.json", "-daemons", "dnsd"]
        result = remove_from_flags(lambda f: flag_matches(f, "config"), flags)
        assert result == ["-daemons", "dnsd"]

    def test_removes_bare_boolean_flag(self):
        flags = ["-supervisor", "-config", "cfg.json"]
        result = remove_from_flags(lambda f: flag_matches(f, "supervisor"), flags)
        assert result == ["-config", "cfg.json"]

    def test_does_not_modify_input(self):
        flags = ["-daemons", "dnsd", "-config", "cfg.json"]
        remove_from_flags(lambda f: f == "-daemons", flags)
        assert flags == ["-daemons", "dnsd", "-config", "cfg.json"]

    def test_empty_input(self):
        assert remove_from_flags(lambda f: True, []) == []


class TestParseFlags:
    def test_defaults(self):
        args = parse_flags(["-daemons", "dnsd"])
        assert args.supervisor is True
        assert args.config == ""
        assert args.daemons == ["dnsd"]
        assert args.max_workers == 0

    def test_go_style_flags(self):
        args = parse_flags(["-config", "cfg.json", "-supervisor=false", "-daemons", "dnsd,httpd", "-maxworkers", "8"])
        assert args.config == "cfg.json"
        assert args.supervisor is False
        assert args.daemons == ["dnsd", "httpd"]
        assert args.max_workers == 8

    def test_joined_config_flag(self):
        assert parse_flags(["-config=cfg.json"]).config == "cfg.json"

    def test_bare_supervisor_flag_means_true(self):
        assert parse_flags(["-supervisor", "-config", "cfg.json"]).supervisor is True

    def test_rejects_unknown_flag(self):
        with pytest.raises(SystemExit) as exc_info:
            parse_flags(["-bogus", "1"])
        assert exc_info.value.code == 2

    def test_rejects_bad_boolean(self):
        with pytest.raises(SystemExit):
            parse_flags(["-supervisor=maybe"])


class TestHelpers:
    @pytest.mark.parametrize("value", ["1", "t", "TRUE", "yes"])
    def test_parse_bool_true(self, value):
        assert parse_bool(value) is True

    @pytest.mark.parametrize("value", ["0", "f", "False", "no"])
    def test_parse_bool_false(self, value):
        assert parse_bool(value) is False

    def test_split_daemon_names(self):
        assert split_daemon_names("dnsd, httpd,,dnsd,smtpd ") == ["dnsd", "httpd", "smtpd"]

    def test_split_empty(self):
        assert split_daemon_names("") == []
