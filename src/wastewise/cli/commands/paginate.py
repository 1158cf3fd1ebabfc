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

import json
from dataclasses import replace
from pathlib import Path

import typer

from ...render.geometry import page_geometry
from ...render.measurement import load_measurements, slices_to_dicts
from ...render.pagination import paginate_document, sections_on_page
from ...render.types import MeasuredDocument, PageSlice, SectionCut
from ..core.common import _ctx_quiet, _ctx_value, _load_ctx_config, _run_cli
from ..core.log import _warn_section_cut
from ..ui import build_pages_table, console

_PAGINATE_HELP = (
    "Paginate a measurement file without rendering anything.\n\n"
    "Examples:\n"
    "  wastewise paginate measurements.json\n"
    "  wastewise paginate measurements.json --page-height-px 1123 --json\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_PAGINATE_HELP)(paginate)


def paginate(
    ctx: typer.Context,
    measurements: Path = typer.Argument(
        ...,
        help="JSON file with totalHeight, width and sections.",
        exists=True,
        dir_okay=False,
    ),
    page_height_px: int | None = typer.Option(
        None,
        "--page-height-px",
        min=1,
        help="Page height in image pixels (defaults to the paper size at the measured width).",
        rich_help_panel="Pagination",
    ),
    min_fraction: float | None = typer.Option(
        None,
        "--min-fraction",
        help="Shortest acceptable page as a fraction of the page height.",
        rich_help_panel="Pagination",
    ),
    max_pages: int | None = typer.Option(
        None,
        "--max-pages",
        min=1,
        help="Fail when the report needs more pages than this.",
        rich_help_panel="Pagination",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the page slices as JSON.",
        rich_help_panel="Outputs",
    ),
) -> None:
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        config = _load_ctx_config(ctx)
        quiet_value = _ctx_quiet(ctx, config)
        document = load_measurements(measurements)
        defaults = config.pagination
        options = replace(
            config.pagination_options(),
            page_height_px=page_height_px or defaults.page_height_px,
            min_page_height_fraction=(
                min_fraction if min_fraction is not None else defaults.min_page_height_fraction
            ),
            max_pages=max_pages or defaults.max_pages,
        )
        geometry = page_geometry(
            config.paper_size,
            document.width,
            min_page_height_fraction=options.min_page_height_fraction,
            page_height_px=options.page_height_px,
        )
        cuts: list[SectionCut] = []
        pages = paginate_document(document, geometry, options, on_section_cut=cuts.append)
        for cut in cuts:
            _warn_section_cut(cut, quiet=quiet_value)
        if as_json:
            payload = {
                "pageHeightPx": geometry.page_height_px,
                "pages": slices_to_dicts(pages),
                "cuts": [
                    {
                        "section": cut.section.label,
                        "pageIndex": cut.page_index,
                        "boundary": cut.boundary,
                        "reason": cut.reason,
                    }
                    for cut in cuts
                ],
            }
            console.print(
                json.dumps(payload, indent=2),
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            return
        if quiet_value:
            return
        console.print(build_pages_table(_page_rows(document, pages)))
        console.print(
            f"[success]{len(pages)} page(s)[/success] "
            f"[muted]at {geometry.page_height_px} px per page[/muted]"
        )

    _run_cli(_run, debug=debug_value)


def _page_rows(
    document: MeasuredDocument,
    pages: list[PageSlice],
) -> list[tuple[int, int, int, int, str]]:
    rows = []
    for page in pages:
        labels = ", ".join(section.label for section in sections_on_page(document.sections, page))
        rows.append((page.index + 1, page.source_top, page.source_bottom, page.height, labels))
    return rows
