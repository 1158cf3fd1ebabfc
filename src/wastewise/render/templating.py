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

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..config.installer import DEFAULT_REPORT_TEMPLATE_PATH
from ..report.model import ReportData
from .geometry import paper_size_mm

# Body padding of the packaged report template.
REPORT_MARGIN_MM = 5.0


@lru_cache(maxsize=16)
def _get_env(template_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(("html", "j2")),
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
        auto_reload=True,
    )


def cover_box_mm(paper_size: str) -> tuple[float, float]:
    """Top offset and border-box height of the cover block, in mm.

    The cover fills one page inside the body padding, so it always ends above the
    first page boundary.
    """
    _page_width_mm, page_height_mm = paper_size_mm(paper_size)
    return REPORT_MARGIN_MM, page_height_mm - 2 * REPORT_MARGIN_MM


def render_template(path: str | Path, context: dict[str, object]) -> str:
    template_path = Path(path)
    env = _get_env(template_path.parent.resolve())
    template = env.get_template(template_path.name)
    return template.render(**context)


def compose_report_html(
    report: ReportData,
    *,
    paper_size: str,
    cover: bool = False,
    template_path: str | Path | None = None,
) -> str:
    """Render the report payload into one tall HTML document.

    Every content block is emitted as ``<section class="section" data-section=key>``
    so the rasterizer can measure it.
    """
    page_width_mm, page_height_mm = paper_size_mm(paper_size)
    _cover_top_mm, cover_height_mm = cover_box_mm(paper_size)
    context: dict[str, object] = {
        "report": report,
        "sections": report.sections,
        "cover": cover,
        "period_label": report.period.capitalize(),
        "generated_on": report.generated_on.isoformat(),
        "page_width_mm": page_width_mm,
        "page_height_mm": page_height_mm,
        "margin_mm": REPORT_MARGIN_MM,
        "cover_height_mm": cover_height_mm,
    }
    return render_template(template_path or DEFAULT_REPORT_TEMPLATE_PATH, context)
