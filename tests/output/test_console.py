"""Tests for the Rich Console factory and theme."""

from io import StringIO

from adledger.output.console import LEDGER_THEME, create_console, get_output, style_for_status


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[bold red]hello[/bold red]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "hello" in output

    def test_widths(self) -> None:
        assert create_console().width == 120
        assert create_console(width=80).width == 80


class TestStyleForStatus:
    def test_known_statuses_are_themed(self) -> None:
        for status in ("OPEN", "CLOSED", "BOUGHT"):
            style = style_for_status(status)
            assert style == f"ledger.status.{status}"
            assert style in LEDGER_THEME.styles

    def test_unknown_status_unstyled(self) -> None:
        assert style_for_status("open") == ""
