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

from ...render.measurement import write_measurements
from ...render.service import ReportService
from ...report import load_report, select_sections
from ..core.common import _ctx_quiet, _ctx_value, _load_ctx_config, _run_cli
from ..startup import ensure_playwright_browsers
from ..ui import build_kv_table, console, status

_MEASURE_HELP = (
    "Compose and rasterize a report, then write its section measurements.\n\n"
    "Examples:\n"
    "  wastewise measure report.json -o measurements.json\n"
    "  wastewise measure report.json -o measurements.json --image report.png --cover\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_MEASURE_HELP)(measure)


def measure(
    ctx: typer.Context,
    report_path: Path = typer.Argument(
        ...,
        metavar="REPORT",
        help="Report payload (JSON).",
        exists=True,
        dir_okay=False,
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        help="Where to write the measurements JSON.",
        rich_help_panel="Outputs",
    ),
    image: Path | None = typer.Option(
        None,
        "--image",
        help="Also save the rasterized report as PNG.",
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
        ensure_playwright_browsers(quiet=quiet_value)
        with status("Rasterizing report...", quiet=quiet_value):
            rasterized = ReportService(config).measure(report, cover=cover)
        written = write_measurements(rasterized.document, output)
        if image is not None:
            image.parent.mkdir(parents=True, exist_ok=True)
            rasterized.image.save(image, format="PNG")
        if quiet_value:
            return
        document = rasterized.document
        rows = [
            ("Measurements", str(written)),
            ("Size", f"{document.width} x {document.total_height} px"),
            ("Sections", str(len(document.sections))),
        ]
        if image is not None:
            rows.append(("Image", str(image)))
        console.print(build_kv_table(rows))

    _run_cli(_run, debug=debug_value)
