"""Unit tests for CLI utilities."""

import pytest

from sobuild.cli_utils import ErrorFormatter


class TestErrorFormatter:
    """Tests for ErrorFormatter class."""

    def test_format_fatal_with_command(self):
        assert ErrorFormatter.format_fatal("build", "stat(x): denied") == "sobuild build: stat(x): denied"

    def test_format_fatal_without_command(self):
        assert ErrorFormatter.format_fatal("", "no such command") == "sobuild: no such command"

    def test_fatal_exits_one(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            ErrorFormatter.fatal("build", "subprocess trouble, check output")

        assert exc_info.value.code == 1
        assert capsys.readouterr().out == "sobuild build: subprocess trouble, check output\n"

    def test_keyboard_interrupt_exit_code(self):
        with pytest.raises(SystemExit) as exc_info:
            ErrorFormatter.handle_keyboard_interrupt()
        assert exc_info.value.code == 130

    def test_keyboard_interrupt_warning(self, capsys):
        with pytest.raises(SystemExit):
            ErrorFormatter.handle_keyboard_interrupt()

        out = capsys.readouterr().out
        assert "Build interrupted" in out
        assert out.rstrip().endswith(ErrorFormatter.RESET)

    def test_only_warning_colors_defined(self):
        assert not hasattr(ErrorFormatter, "print_success")
        assert not hasattr(ErrorFormatter, "GREEN")
        assert not hasattr(ErrorFormatter, "RED")

    def test_unexpected_error(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            ErrorFormatter.handle_unexpected_error("clean", RuntimeError("boom"))

        assert exc_info.value.code == 1
        assert "sobuild clean: RuntimeError: boom" in capsys.readouterr().out
