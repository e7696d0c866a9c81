"""Tests for the output system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- format_response in JSON, plain, and rich modes
- Classifier notifications mapped to stderr levels
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from apiguard import output as output_module
from apiguard.models import NotificationSeverity
from apiguard.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("apiguard.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("apiguard.output._is_tty", lambda: True)


def _plain(**kwargs) -> OutputManager:
    return OutputManager(format=OutputFormat.PLAIN, no_color=True, **kwargs)


# ------------------------------------------------------------------ #
# Format resolution
# ------------------------------------------------------------------ #


class TestFormatResolution:
    def test_auto_resolves_to_plain_when_not_tty(self, non_tty):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("TERM", raising=False)
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_no_color(self, tty):
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDetection:
    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "xterm-256color")
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# Stream discipline
# ------------------------------------------------------------------ #


class TestStreams:
    def test_print_data_goes_to_stdout(self, capfd, non_tty):
        _plain().print_data("payload")
        captured = capfd.readouterr()
        assert captured.out == "payload\n"
        assert captured.err == ""

    @pytest.mark.parametrize(
        ("method", "expected"),
        [
            ("info", "hello"),
            ("success", "hello"),
            ("warning", "Warning: hello"),
            ("error", "Error: hello"),
            ("suggest", "→ hello"),
        ],
    )
    def test_diagnostics_go_to_stderr(self, capfd, non_tty, method, expected):
        getattr(_plain(), method)("hello")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err.strip() == expected

    def test_quiet_suppresses_info_success_suggest(self, capfd, non_tty):
        out = _plain(quiet=True)
        out.info("a")
        out.success("b")
        out.suggest("c")
        assert capfd.readouterr().err == ""

    def test_quiet_keeps_warning_and_error(self, capfd, non_tty):
        out = _plain(quiet=True)
        out.warning("w")
        out.error("e")
        err = capfd.readouterr().err
        assert "Warning: w" in err
        assert "Error: e" in err

    def test_debug_only_when_verbose(self, capfd, non_tty):
        _plain().debug("hidden")
        assert capfd.readouterr().err == ""
        _plain(verbose=True).debug("shown")
        assert "[debug] shown" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# format_response
# ------------------------------------------------------------------ #


class TestFormatResponse:
    def test_json_dict(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).format_response({"id": 1, "name": "Depot"})
        assert json.loads(capfd.readouterr().out) == {"id": 1, "name": "Depot"}

    def test_json_string_that_is_json(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).format_response('[1, 2]')
        assert json.loads(capfd.readouterr().out) == [1, 2]

    def test_json_plain_string(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).format_response("pong")
        assert capfd.readouterr().out == "pong\n"

    def test_plain_dict_as_key_value(self, capfd, non_tty):
        _plain().format_response({"id": 1, "name": "Depot"})
        assert capfd.readouterr().out == "id\t1\nname\tDepot\n"

    def test_plain_list_of_dicts(self, capfd, non_tty):
        _plain().format_response([{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])
        assert capfd.readouterr().out == "1\ta\n2\tb\n"

    def test_rich_dict_produces_output(self, capfd, non_tty):
        OutputManager(format=OutputFormat.RICH, no_color=True).format_response({"id": 1})
        assert "id" in capfd.readouterr().out


# ------------------------------------------------------------------ #
# Notifications
# ------------------------------------------------------------------ #


class TestNotify:
    @pytest.mark.parametrize(
        ("severity", "expected"),
        [
            (NotificationSeverity.ERROR, "Error: Server error."),
            (NotificationSeverity.WARNING, "Warning: Server error."),
            (NotificationSeverity.INFO, "Server error."),
        ],
    )
    def test_severity_maps_to_level(self, capfd, non_tty, severity, expected):
        _plain().notify("Server error.", severity)
        assert capfd.readouterr().err.strip() == expected

    def test_quiet_hides_info_notifications(self, capfd, non_tty):
        _plain(quiet=True).notify("fyi", NotificationSeverity.INFO)
        assert capfd.readouterr().err == ""


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_creates_default(self, non_tty):
        assert isinstance(get_output(), OutputManager)

    def test_set_and_reset(self, non_tty):
        custom = _plain()
        set_output(custom)
        assert get_output() is custom
        reset_output()
        assert get_output() is not custom

    def test_convenience_functions_use_global(self, capfd, non_tty):
        set_output(_plain())
        output_module.error("bad")
        output_module.format_response("ok")
        captured = capfd.readouterr()
        assert "Error: bad" in captured.err
        assert captured.out == "ok\n"
