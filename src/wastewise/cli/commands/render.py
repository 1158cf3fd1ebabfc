#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

from pathlib import Path

import typer

from ...render.service import ReportService
from ...report import load_report, report_filename, select_sections
from ..core.common import _ctx_quiet, _ctx_value, _load_ctx_config, _run_cli
from ..core.log import _warn_section_cut
from ..startup import ensure_playwright_browsers
from ..ui import console, status

_RENDER_HELP = (
    "Render a report to a paginated PDF.\n\n"
    "Examples:\n"
    "  wastewise render report.json\n"
    "  wastewise render report.json -o weekly.pdf --section summary --section incidents\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_RENDER_HELP)(render)


def render(
    ctx: typer.Context,
    report_path: Path = typer.Argument(
        ...,
        metavar="REPORT",
        help="Report payload (JSON).",
        exists=True,
        dir_okay=False,
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output PDF path (defaults to comprehensive_report_<period>_<date>.pdf).",
        rich_help_panel="Outputs",
    ),
    sections: list[str] | None = typer.Option(
        None,
        "--section",
        "-s",
        help="Only include this section (repeatable).",
        rich_help_panel="Inputs",
    ),
    cover: bool = typer.Option(
        False,
        "--cover",
        help="Add a cover page section.",
        rich_help_panel="Inputs",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_ctx_config(ctx)
        quiet_value = _ctx_quiet(ctx, config)
        report = select_sections(load_report(report_path), sections)
        output_path = output or Path.cwd() / report_filename(report)
        ensure_playwright_browsers(quiet=quiet_value)
        with status("Rendering report...", quiet=quiet_value):
            result = ReportService(config).generate(report, output_path, cover=cover)
        for cut in result.cuts:
            _warn_section_cut(cut, quiet=quiet_value)
        if not quiet_value:
            console.print(f"[success]{len(result.pages)} page(s)[/success] {result.output_path}")

    _run_cli(_run, debug=debug_value)
