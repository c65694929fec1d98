"""Tests for utils/ui/formatters.py and commands/decorators.py."""

from __future__ import annotations

import json

import pytest
import typer
import yaml
from pydantic import ValidationError

from focustimer_cli.commands.decorators import AppError, command_wrapper
from focustimer_cli.models.exceptions import StorageWriteError
from focustimer_cli.models.focus.settings import TimerSettings
from focustimer_cli.utils import exit_codes
from focustimer_cli.utils.ui.formatters import format_output


# ---------------------------------------------------------------------------
# format_output
# ---------------------------------------------------------------------------


class TestFormatOutput:
    def test_json(self, capsys):
        format_output({"total_sessions": 3, "completion_rate": 66.7}, "json")
        assert json.loads(capsys.readouterr().out) == {
            "total_sessions": 3,
            "completion_rate": 66.7,
        }

    def test_yaml_keeps_key_order(self, capsys):
        format_output({"phase": "focus", "status": "idle"}, "yaml")
        out = capsys.readouterr().out
        assert yaml.safe_load(out) == {"phase": "focus", "status": "idle"}
        assert out.index("phase") < out.index("status")

    def test_dict_as_key_value_table(self, capsys):
        format_output({"focus_minutes": 25.0, "completed": True})
        out = capsys.readouterr().out
        assert "Focus Minutes" in out
        assert "25.0" in out

    def test_list_as_table(self, capsys):
        format_output([{"id": "1", "distractions": 2}])
        out = capsys.readouterr().out
        assert "Distractions" in out

    def test_empty_list(self, capsys):
        format_output([])
        assert "No items found" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# command_wrapper
# ---------------------------------------------------------------------------


def _raising(exc: Exception):
    @command_wrapper
    def failing_command():
        raise exc

    return failing_command


def _validation_error() -> ValidationError:
    try:
        TimerSettings(focus_seconds=0)
    except ValidationError as e:
        return e
    raise AssertionError("expected a validation error")


class TestCommandWrapper:
    def test_passes_result_through(self):
        @command_wrapper
        def ok():
            return 42

        assert ok() == 42
        assert ok.__name__ == "ok"

    @pytest.mark.parametrize(
        "exc,code",
        [
            (AppError("nope", exit_code=exit_codes.ERROR_INVALID_ARGS), exit_codes.ERROR_INVALID_ARGS),
            (StorageWriteError("disk full"), exit_codes.ERROR_STORAGE),
            (RuntimeError("boom"), exit_codes.ERROR_GENERAL),
        ],
    )
    def test_maps_errors_to_exit_codes(self, exc, code, capsys):
        with pytest.raises(typer.Exit) as info:
            _raising(exc)()
        assert info.value.exit_code == code
        assert "Error:" in capsys.readouterr().out

    def test_validation_error_is_invalid_args(self, capsys):
        with pytest.raises(typer.Exit) as info:
            _raising(_validation_error())()
        assert info.value.exit_code == exit_codes.ERROR_INVALID_ARGS
        assert "focus_seconds" in capsys.readouterr().out

    def test_typer_exit_is_not_wrapped(self):
        with pytest.raises(typer.Exit) as info:
            _raising(typer.Exit(code=7))()
        assert info.value.exit_code == 7


def test_exit_code_names():
    assert exit_codes.get_exit_code_name(exit_codes.ERROR_STORAGE) == "ERROR_STORAGE"
    assert "storage" in exit_codes.get_exit_code_description(exit_codes.ERROR_STORAGE).lower()
