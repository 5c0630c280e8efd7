"""Unit tests for modorder.utils.console module.

Test Coverage:
- Color detection and console singleton lifecycle
- Status message helpers
- Diagnostic lists, tables and JSON output
- Status markup
- Interactive confirmation
"""

from __future__ import annotations

import io
import json
import sys
from typing import Generator
from unittest.mock import patch

import pytest
from rich.console import Console

import modorder.utils.console as console_module
from modorder.utils.console import (
    MODORDER_THEME,
    STATUS_LABELS,
    _get_console,
    _color_enabled,
    colorize_status,
    confirm,
    get_raw_console,
    print_diagnostics,
    print_error,
    print_json,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)


@pytest.fixture(autouse=True)
def reset_console() -> Generator[None, None, None]:
    """Reset console singleton before and after each test."""
    reconfigure_console()
    yield
    reconfigure_console()


@pytest.fixture
def output(monkeypatch: pytest.MonkeyPatch) -> io.StringIO:
    """Route console output into a buffer."""
    buffer = io.StringIO()
    console = Console(file=buffer, theme=MODORDER_THEME, no_color=True, width=120)
    monkeypatch.setattr(console_module, "_get_console", lambda: console)
    return buffer


@pytest.mark.unit
class TestColorDetection:
    """Tests for color detection and the cached console."""

    def test_no_color_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")

        assert _color_enabled() is False

    def test_ci_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("CI", "true")

        assert _color_enabled() is False

    def test_tty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.delenv("CI", raising=False)

        with patch.object(sys.stdout, "isatty", return_value=True):
            assert _color_enabled() is True

    def test_singleton(self) -> None:
        assert _get_console() is _get_console()
        assert get_raw_console() is _get_console()

    def test_reconfigure_creates_new_console(self) -> None:
        first = _get_console()

        reconfigure_console()

        assert _get_console() is not first


@pytest.mark.unit
class TestMessages:
    """Tests for print_success / print_error / print_warning."""

    def test_success(self, output: io.StringIO) -> None:
        print_success("Saved")

        assert output.getvalue() == "[OK] Saved\n"

    def test_error(self, output: io.StringIO) -> None:
        print_error("Broken")

        assert output.getvalue() == "[ERROR] Broken\n"

    def test_warning_custom_prefix(self, output: io.StringIO) -> None:
        print_warning("Careful", prefix="!")

        assert output.getvalue() == "! Careful\n"

    def test_markup_not_interpreted(self, output: io.StringIO) -> None:
        """Mod ids may contain brackets."""
        print_error("[bold]mod[/bold]")

        assert "[bold]mod[/bold]" in output.getvalue()


@pytest.mark.unit
class TestPrintDiagnostics:
    """Tests for print_diagnostics."""

    def test_prints_bullets(self, output: io.StringIO) -> None:
        count = print_diagnostics(["first", "second"], title="Dependency problems")

        text = output.getvalue()
        assert count == 2
        assert "Dependency problems:" in text
        assert "  - first" in text
        assert "  - second" in text

    def test_empty_prints_nothing(self, output: io.StringIO) -> None:
        assert print_diagnostics([]) == 0
        assert output.getvalue() == ""


@pytest.mark.unit
class TestPrintTable:
    """Tests for print_table."""

    def test_renders_headers_and_rows(self, output: io.StringIO) -> None:
        print_table(
            [{"#": 1, "Mod": "core"}, {"#": 2, "Mod": "addon"}],
            title="Load order",
            column_styles={"#": {"justify": "right"}},
        )

        text = output.getvalue()
        assert "Load order" in text
        assert "Mod" in text
        assert "core" in text
        assert "addon" in text

    def test_explicit_headers_subset(self, output: io.StringIO) -> None:
        print_table([{"a": "shown", "b": "hidden"}], headers=["a"])

        assert "shown" in output.getvalue()
        assert "hidden" not in output.getvalue()

    def test_row_styler_called(self, output: io.StringIO) -> None:
        seen = []

        def styler(row):
            seen.append(row["Mod"])
            return "bold"

        print_table([{"Mod": "x"}, {"Mod": "y"}], row_styler=styler)

        assert seen == ["x", "y"]

    def test_empty_data(self, output: io.StringIO) -> None:
        print_table([])

        assert output.getvalue() == ""


@pytest.mark.unit
class TestPrintJson:
    """Tests for print_json."""

    def test_valid_json(self, output: io.StringIO) -> None:
        print_json({"order": ["a", "b"], "cycled": []})

        assert json.loads(output.getvalue()) == {"order": ["a", "b"], "cycled": []}


@pytest.mark.unit
class TestColorizeStatus:
    """Tests for colorize_status."""

    @pytest.mark.parametrize("status", list(STATUS_LABELS))
    def test_known(self, status: str) -> None:
        markup = colorize_status(status)

        assert markup == f"[status.{status}]{STATUS_LABELS[status]}[/status.{status}]"

    def test_case_insensitive(self) -> None:
        assert colorize_status("HARD") == colorize_status("hard")

    def test_unknown_returned_as_is(self) -> None:
        assert colorize_status("weird") == "weird"


@pytest.mark.unit
class TestConfirm:
    """Tests for confirm."""

    @pytest.mark.parametrize(
        "answer,default,expected",
        [
            ("y", False, True),
            ("YES", False, True),
            ("n", True, False),
            ("no", True, False),
            ("", True, True),
            ("", False, False),
            ("maybe", True, True),
        ],
    )
    def test_answers(
        self,
        output: io.StringIO,
        answer: str,
        default: bool,
        expected: bool,
    ) -> None:
        with patch("builtins.input", return_value=answer):
            assert confirm("Write?", default=default) is expected

    def test_prompt_suffix(self, output: io.StringIO) -> None:
        with patch("builtins.input", return_value="y"):
            confirm("Write?", default=True)

        assert output.getvalue() == "Write? [Y/n]: "

    @pytest.mark.parametrize("error", [KeyboardInterrupt, EOFError])
    def test_interrupt_declines(self, output: io.StringIO, error) -> None:
        with patch("builtins.input", side_effect=error):
            assert confirm("Write?", default=True) is False
