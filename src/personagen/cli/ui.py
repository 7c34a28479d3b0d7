# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.padding import Padding
from rich.table import Table

from personagen.engine.pipeline.report import RunReport

# Global padding configuration
LEFT_PADDING = 2
RIGHT_PADDING = 2

_STATUS_STYLES = {
    "success": "green",
    "partial": "yellow",
    "failed": "red",
}

# Private console instance - all output goes through this
_console = Console()

# Public console alias for external imports
console = _console


def display_run_report(report: RunReport) -> None:
    """Display the summary of a run and a table of every file that did not fully succeed.

    Args:
        report: Report returned by the pipeline.
    """
    summary = ", ".join(f"{count} {status}" for status, count in sorted(report.summary.items()))
    print_text(f"Operations: {summary or 'none'}")

    if not report.failures:
        return

    table = Table(title="Failed operations", title_justify="left", show_lines=False)
    table.add_column("Operation", no_wrap=True)
    table.add_column("Path", overflow="fold")
    table.add_column("Status", no_wrap=True)
    table.add_column("Errors", overflow="fold")
    for outcome in report.failures:
        style = _STATUS_STYLES.get(outcome.status.value, "")
        table.add_row(
            outcome.operation.value,
            escape(str(outcome.path)),
            f"[{style}]{outcome.status.value}[/{style}]" if style else outcome.status.value,
            escape("\n".join(f"{error.error_type}: {error.message}" for error in outcome.errors)),
        )
    _print_with_padding(table)


def print_success(message: str) -> None:
    """Print a success message with green styling.

    Args:
        message: Success message to display
    """
    _print_with_padding(f"✅  {message}")


def print_error(message: str) -> None:
    """Print an error message with red styling.

    Args:
        message: Error message to display
    """
    _print_with_padding(f"❌  {message}")


def print_warning(message: str) -> None:
    """Print a warning message with yellow styling.

    Args:
        message: Warning message to display
    """
    _print_with_padding(f"⚠️   {message}")


def print_info(message: str) -> None:
    """Print an info message with blue styling.

    Args:
        message: Info message to display
    """
    _print_with_padding(f"💡  {message}")


def print_text(message: str) -> None:
    _print_with_padding(message)


def print_header(text: str) -> None:
    """Print a styled header.

    Args:
        text: Header text
    """
    _console.print()
    padding_str = " " * LEFT_PADDING
    available_width = _console.width - LEFT_PADDING - RIGHT_PADDING

    title_text = f" {text} "
    rule_chars = max(0, (available_width - len(title_text)) // 2)
    remaining = max(0, available_width - len(title_text) - (rule_chars * 2))
    rule_line = "─" * rule_chars + title_text + "─" * (rule_chars + remaining)

    _console.print(f"{padding_str}[bold cyan]{rule_line}[/bold cyan]", markup=True, highlight=False)
    _console.print()


def _print_with_padding(content: str | Table) -> None:
    """Internal helper to print with left padding.

    Args:
        content: Content to print (string or Table)
    """
    padding = " " * LEFT_PADDING
    if isinstance(content, Table):
        _console.print(Padding(content, (0, 0, 0, LEFT_PADDING)))
        return
    for line in str(content).split("\n"):
        _console.print(padding + line, markup=False, highlight=False)
