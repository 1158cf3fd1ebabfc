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

# Hard cap on emitted pages per report.
DEFAULT_MAX_PAGES = 100

# Pages shorter than this share of the page height are degenerate.
DEFAULT_MIN_PAGE_HEIGHT_FRACTION = 0.10

# Device pixel ratio used when rasterizing the report.
DEFAULT_RENDER_SCALE = 2

# Delay after fonts settle before measuring sections (milliseconds).
DEFAULT_SETTLE_MS = 800

# CSS selector of the blocks that must not be split.
DEFAULT_SECTION_SELECTOR = ".section"

# CSS pixels per millimetre at 96 dpi.
CSS_PX_PER_MM = 96 / 25.4


__all__ = [
    "CSS_PX_PER_MM",
    "DEFAULT_MAX_PAGES",
    "DEFAULT_MIN_PAGE_HEIGHT_FRACTION",
    "DEFAULT_RENDER_SCALE",
    "DEFAULT_SECTION_SELECTOR",
    "DEFAULT_SETTLE_MS",
]
