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
from typing import TYPE_CHECKING, Literal

from ..core.bounds import DEFAULT_MAX_PAGES, DEFAULT_MIN_PAGE_HEIGHT_FRACTION

if TYPE_CHECKING:
    from PIL import Image

CutReason = Literal["taller_than_page", "insufficient_space"]


@dataclass(frozen=True)
class Section:
    label: str
    top: int
    height: int

    @property
    def bottom(self) -> int:
        return self.top + self.height


@dataclass(frozen=True)
class MeasuredDocument:
    total_height: int
    width: int
    sections: tuple[Section, ...] = ()


@dataclass(frozen=True)
class PageSlice:
    index: int
    source_top: int
    source_bottom: int

    @property
    def height(self) -> int:
        return self.source_bottom - self.source_top


@dataclass(frozen=True)
class SectionCut:
    """A section the paginator had to split across two pages."""

    section: Section
    page_index: int
    boundary: int
    reason: CutReason


@dataclass(frozen=True)
class PaginationOptions:
    page_height_px: int | None = None
    min_page_height_fraction: float = DEFAULT_MIN_PAGE_HEIGHT_FRACTION
    max_pages: int = DEFAULT_MAX_PAGES
    allow_overlap: bool = False


@dataclass(frozen=True)
class RasterizedDocument:
    image: "Image.Image"
    document: MeasuredDocument
