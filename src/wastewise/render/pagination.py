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

"""Section-aware pagination of a tall rasterized report.

The paginator walks the document top to bottom and picks each page boundary
greedily: as far down as the page height allows, pulled back to the top of any
section the boundary would cut. Sections stay in document order, so the only
decision per page is where to cut.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ..core.bounds import DEFAULT_MAX_PAGES
from ..core.errors import InvalidInputError, PageBudgetExceededError
from ..core.validation import require_non_negative_int, require_positive_int
from .geometry import PageGeometry
from .types import (
    CutReason,
    MeasuredDocument,
    PageSlice,
    PaginationOptions,
    Section,
    SectionCut,
)

SectionCutCallback = Callable[[SectionCut], None]

__all__ = [
    "SectionCutCallback",
    "paginate",
    "paginate_document",
    "sections_on_page",
    "straddling_sections",
    "validate_pagination_inputs",
]


def validate_pagination_inputs(
    total_height: int,
    sections: Sequence[Section],
    page_height_px: int,
    min_page_height_px: float,
    max_pages: int,
    *,
    allow_overlap: bool = False,
) -> None:
    require_positive_int(total_height, label="total_height")
    require_positive_int(page_height_px, label="page_height_px")
    require_positive_int(max_pages, label="max_pages")
    if isinstance(min_page_height_px, bool) or not isinstance(min_page_height_px, (int, float)):
        raise InvalidInputError("min_page_height_px must be a number")
    if not 0 < min_page_height_px < page_height_px:
        raise InvalidInputError(
            f"min_page_height_px must be between 0 and page_height_px ({page_height_px}), "
            f"got {min_page_height_px}"
        )

    previous: Section | None = None
    for idx, section in enumerate(sections):
        if not isinstance(section, Section):
            raise InvalidInputError(f"sections[{idx}] must be a Section")
        label = f"section {section.label!r}"
        require_non_negative_int(section.top, label=f"{label} top")
        require_positive_int(section.height, label=f"{label} height")
        if section.bottom > total_height:
            raise InvalidInputError(
                f"{label} ends at {section.bottom} px, past the document end ({total_height} px)"
            )
        if previous is not None:
            if section.top < previous.top:
                raise InvalidInputError(
                    f"{label} (top {section.top}) is out of order: "
                    f"it follows {previous.label!r} (top {previous.top})"
                )
            if not allow_overlap and section.top < previous.bottom:
                raise InvalidInputError(
                    f"{label} (top {section.top}) overlaps {previous.label!r} "
                    f"(bottom {previous.bottom})"
                )
        previous = section


def straddling_sections(sections: Sequence[Section], boundary: int) -> list[Section]:
    """Return the sections a boundary at ``boundary`` would cut."""
    return [section for section in sections if section.top < boundary < section.bottom]


def sections_on_page(sections: Sequence[Section], page: PageSlice) -> list[Section]:
    """Return the sections lying entirely inside ``page``."""
    return [
        section
        for section in sections
        if section.top >= page.source_top and section.bottom <= page.source_bottom
    ]


def _pull_back(sections: Sequence[Section], source_y: int, candidate_end: int) -> int:
    # Each adjustment lands on a distinct section top strictly below the previous
    # boundary, so at most len(sections) adjustments happen.
    for _ in range(len(sections)):
        adjusted = candidate_end
        for section in sections:
            if section.top >= source_y and section.top < adjusted < section.bottom:
                adjusted = section.top
        if adjusted == candidate_end:
            break
        candidate_end = adjusted
    return candidate_end


def _report_cuts(
    sections: Sequence[Section],
    *,
    page_index: int,
    boundary: int,
    page_height_px: int,
    on_section_cut: SectionCutCallback,
) -> None:
    for section in straddling_sections(sections, boundary):
        reason: CutReason
        if section.height > page_height_px:
            reason = "taller_than_page"
        else:
            reason = "insufficient_space"
        on_section_cut(
            SectionCut(section=section, page_index=page_index, boundary=boundary, reason=reason)
        )


def paginate(
    total_height: int,
    sections: Sequence[Section],
    page_height_px: int,
    min_page_height_px: float,
    max_pages: int = DEFAULT_MAX_PAGES,
    *,
    on_section_cut: SectionCutCallback | None = None,
    allow_overlap: bool = False,
) -> list[PageSlice]:
    """Split ``[0, total_height)`` into page slices that avoid cutting sections.

    A boundary that falls strictly inside a section is pulled back to that
    section's top, repeatedly, until no section straddles it. If the pull-back
    leaves a page shorter than ``min_page_height_px`` the boundary reverts to a
    full page and the straddling section is cut; every such cut is reported
    through ``on_section_cut``.

    Raises:
        InvalidInputError: geometry is non-positive or sections are unordered,
            overlapping (unless ``allow_overlap``) or outside the document.
        PageBudgetExceededError: ``max_pages`` slices do not cover the document.
    """
    sections = tuple(sections)
    validate_pagination_inputs(
        total_height,
        sections,
        page_height_px,
        min_page_height_px,
        max_pages,
        allow_overlap=allow_overlap,
    )

    slices: list[PageSlice] = []
    source_y = 0
    page_index = 0
    while source_y < total_height and page_index < max_pages:
        full_end = min(source_y + page_height_px, total_height)
        candidate_end = _pull_back(sections, source_y, full_end)
        if candidate_end <= source_y or (candidate_end - source_y) < min_page_height_px:
            candidate_end = full_end

        slices.append(
            PageSlice(index=page_index, source_top=source_y, source_bottom=candidate_end)
        )
        if on_section_cut is not None and candidate_end < total_height:
            _report_cuts(
                sections,
                page_index=page_index,
                boundary=candidate_end,
                page_height_px=page_height_px,
                on_section_cut=on_section_cut,
            )
        source_y = candidate_end
        page_index += 1

    if source_y < total_height:
        raise PageBudgetExceededError(
            max_pages=max_pages,
            covered_height=source_y,
            total_height=total_height,
        )
    return slices


def paginate_document(
    document: MeasuredDocument,
    geometry: PageGeometry,
    options: PaginationOptions | None = None,
    *,
    on_section_cut: SectionCutCallback | None = None,
) -> list[PageSlice]:
    options = options or PaginationOptions()
    if document.width != geometry.image_width_px:
        raise InvalidInputError(
            f"document width ({document.width} px) does not match the page geometry "
            f"({geometry.image_width_px} px)"
        )
    return paginate(
        document.total_height,
        document.sections,
        geometry.page_height_px,
        geometry.min_page_height_px,
        options.max_pages,
        on_section_cut=on_section_cut,
        allow_overlap=options.allow_overlap,
    )
