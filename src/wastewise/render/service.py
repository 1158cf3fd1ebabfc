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

from dataclasses import dataclass
from pathlib import Path

from ..config import AppConfig
from ..report.model import ReportData
from .emitter import emit_pdf
from .geometry import PageGeometry, page_geometry, paper_size_mm, viewport_width_px
from .pagination import SectionCutCallback, paginate_document
from .rasterize import rasterize_html
from .templating import compose_report_html
from .types import MeasuredDocument, PageSlice, RasterizedDocument, SectionCut


@dataclass(frozen=True)
class ReportResult:
    output_path: Path
    document: MeasuredDocument
    pages: tuple[PageSlice, ...]
    cuts: tuple[SectionCut, ...]


@dataclass(frozen=True)
class ReportService:
    config: AppConfig

    def compose(self, report: ReportData, *, cover: bool = False) -> str:
        return compose_report_html(
            report,
            paper_size=self.config.paper_size,
            cover=cover,
            template_path=self.config.render.template_path,
        )

    def measure(self, report: ReportData, *, cover: bool = False) -> RasterizedDocument:
        """Compose and rasterize ``report``; nothing is paginated yet."""
        page_width_mm, _page_height_mm = paper_size_mm(self.config.paper_size)
        render_cfg = self.config.render
        return rasterize_html(
            self.compose(report, cover=cover),
            viewport_width_px=viewport_width_px(page_width_mm),
            scale=render_cfg.scale,
            settle_ms=render_cfg.settle_ms,
            selector=render_cfg.section_selector,
        )

    def geometry(self, document: MeasuredDocument) -> PageGeometry:
        pagination_cfg = self.config.pagination
        return page_geometry(
            self.config.paper_size,
            document.width,
            min_page_height_fraction=pagination_cfg.min_page_height_fraction,
            page_height_px=pagination_cfg.page_height_px,
        )

    def paginate(
        self,
        document: MeasuredDocument,
        *,
        on_section_cut: SectionCutCallback | None = None,
    ) -> list[PageSlice]:
        return paginate_document(
            document,
            self.geometry(document),
            self.config.pagination_options(),
            on_section_cut=on_section_cut,
        )

    def generate(
        self,
        report: ReportData,
        output_path: str | Path,
        *,
        cover: bool = False,
        on_section_cut: SectionCutCallback | None = None,
    ) -> ReportResult:
        """Run the whole pipeline and write the paginated PDF."""
        rasterized = self.measure(report, cover=cover)
        geometry = self.geometry(rasterized.document)
        if geometry.page_height_px > geometry.physical_page_height_px:
            raise ValueError(
                f"pagination.page_height_px ({geometry.page_height_px} px) is taller than the "
                f"{self.config.paper_size} page at this width "
                f"({geometry.physical_page_height_px} px)"
            )
        cuts: list[SectionCut] = []

        def _record_cut(cut: SectionCut) -> None:
            cuts.append(cut)
            if on_section_cut is not None:
                on_section_cut(cut)

        pages = self.paginate(rasterized.document, on_section_cut=_record_cut)
        written = emit_pdf(rasterized.image, pages, geometry, output_path)
        return ReportResult(
            output_path=written,
            document=rasterized.document,
            pages=tuple(pages),
            cuts=tuple(cuts),
        )
