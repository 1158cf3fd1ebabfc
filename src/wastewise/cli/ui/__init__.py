#!/usr/bin/env python3
from __future__ import annotations

import sys
from collections.abc import Sequence
from contextlib import contextmanager

from rich import box
from rich.live import Live
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from .state import THEME, UIContext, get_context, isatty

DEFAULT_CONTEXT = get_context()
console = DEFAULT_CONTEXT.console
console_err = DEFAULT_CONTEXT.console_err


def _resolve_context(context: UIContext | None) -> UIContext:
    return context or DEFAULT_CONTEXT


def configure_ui(*, no_color: bool, context: UIContext | None = None) -> None:
    context = _resolve_context(context)
    context.console.no_color = no_color
    context.console_err.no_color = no_color


@contextmanager
def progress(*, quiet: bool, context: UIContext | None = None):
    context = _resolve_context(context)
    if quiet:
        yield None
        return
    progress_bar = Progress(
        SpinnerColumn(style="accent"),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=context.console,
        transient=True,
        disable=not isatty(sys.__stdout__, sys.stdout),
    )
    with progress_bar:
        yield progress_bar


@contextmanager
def status(message: str, *, quiet: bool, context: UIContext | None = None):
    context = _resolve_context(context)
    if quiet:
        yield None
        return
    if not context.console.is_terminal:
        context.console.print(f"[subtitle]{message}[/subtitle]")
        yield None
        return
    spinner = Spinner("dots", text=Text(message, style="subtitle"))
    with Live(
        spinner,
        console=context.console,
        transient=False,
        refresh_per_second=12,
    ) as live:
        live.refresh()
        try:
            yield live
        finally:
            live.update(Text(f"✓ {message}", style="success"), refresh=True)


def build_kv_table(rows: Sequence[tuple[str, str]], *, title: str | None = None) -> Table:
    table = Table(title=title, show_header=False, box=box.SIMPLE, show_lines=False)
    table.add_column("Field", style="bold", no_wrap=True)
    table.add_column("Value")
    for key, value in rows:
        table.add_row(str(key), str(value))
    return table


def build_pages_table(rows: Sequence[tuple[int, int, int, int, str]]) -> Table:
    """Table of (page number, top, bottom, height, complete sections)."""
    table = Table(box=box.SIMPLE_HEAD, show_lines=False)
    table.add_column("Page", justify="right", style="bold", no_wrap=True)
    table.add_column("Top", justify="right")
    table.add_column("Bottom", justify="right")
    table.add_column("Height", justify="right")
    table.add_column("Sections", style="muted")
    for number, top, bottom, height, sections in rows:
        table.add_row(str(number), str(top), str(bottom), str(height), sections or "-")
    return table


__all__ = [
    "THEME",
    "build_kv_table",
    "build_pages_table",
    "configure_ui",
    "console",
    "console_err",
    "progress",
    "status",
]
