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

from ..core.bounds import CSS_PX_PER_MM, DEFAULT_MIN_PAGE_HEIGHT_FRACTION
from ..core.validation import require_fraction, require_positive_int, require_positive_number

# Portrait (width, height) in millimetres.
PAPER_SIZES_MM: dict[str, tuple[float, float]] = {
    "A4": (210.0, 297.0),
    "LETTER": (215.9, 279.4),
}
DEFAULT_PAPER_SIZE = "A4"


@dataclass(frozen=True)
class PageGeometry:
    page_width_mm: float
    page_height_mm: float
    image_width_px: int
    min_page_height_fraction: float = DEFAULT_MIN_PAGE_HEIGHT_FRACTION
    page_height_override_px: int | None = None

    @property
    def px_per_mm(self) -> float:
        return self.image_width_px / self.page_width_mm

    @property
    def physical_page_height_px(self) -> int:
        return round(self.page_height_mm * self.px_per_mm)

    @property
    def page_height_px(self) -> int:
        if self.page_height_override_px is not None:
            return self.page_height_override_px
        return self.physical_page_height_px

    @property
    def min_page_height_px(self) -> float:
        return self.page_height_px * self.min_page_height_fraction

    def px_to_mm(self, value_px: float) -> float:
        return value_px / self.px_per_mm


def paper_size_mm(paper_size: str) -> tuple[float, float]:
    key = paper_size.strip().upper()
    try:
        return PAPER_SIZES_MM[key]
    except KeyError:
        raise ValueError(f"unknown paper size: {paper_size}") from None


def page_geometry(
    paper_size: str,
    image_width_px: int,
    *,
    min_page_height_fraction: float = DEFAULT_MIN_PAGE_HEIGHT_FRACTION,
    page_height_px: int | None = None,
) -> PageGeometry:
    width_mm, height_mm = paper_size_mm(paper_size)
    require_positive_int(image_width_px, label="image width")
    require_fraction(min_page_height_fraction, label="min_page_height_fraction")
    if page_height_px is not None:
        require_positive_int(page_height_px, label="page_height_px")
    return PageGeometry(
        page_width_mm=width_mm,
        page_height_mm=height_mm,
        image_width_px=image_width_px,
        min_page_height_fraction=float(min_page_height_fraction),
        page_height_override_px=page_height_px,
    )


def viewport_width_px(page_width_mm: float) -> int:
    """CSS viewport width that lays the report out at the physical page width."""
    require_positive_number(page_width_mm, label="page width")
    return round(page_width_mm * CSS_PX_PER_MM)
