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

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any, cast

from fpdf import FPDF
from PIL import Image

from .geometry import PageGeometry
from .types import PageSlice


def crop_slices(image: Image.Image, slices: Sequence[PageSlice]) -> Iterator[Image.Image]:
    """Yield each slice of ``image`` as its own full-width image."""
    for page in slices:
        if page.source_top < 0 or page.source_bottom > image.height or page.height <= 0:
            raise ValueError(
                f"page {page.index + 1} range {page.source_top}-{page.source_bottom} "
                f"is outside the image (height {image.height})"
            )
        yield image.crop((0, page.source_top, image.width, page.source_bottom))


def emit_pdf(
    image: Image.Image,
    slices: Sequence[PageSlice],
    geometry: PageGeometry,
    output_path: str | Path,
) -> Path:
    """Write one PDF page per slice, scaled to the physical page width."""
    output_path = Path(output_path)
    if not slices:
        raise ValueError("slices cannot be empty")
    if image.width != geometry.image_width_px:
        raise ValueError(
            f"image width ({image.width} px) does not match the page geometry "
            f"({geometry.image_width_px} px)"
        )
    # An explicit page height may exceed the paper; the PDF page cannot.
    page_height_px = min(geometry.page_height_px, geometry.physical_page_height_px)
    for page in slices:
        if page.height > page_height_px:
            raise ValueError(
                f"page {page.index + 1} is {page.height} px tall, "
                f"more than the page height ({page_height_px} px)"
            )

    pdf = FPDF(
        orientation="portrait",
        unit="mm",
        format=cast(Any, (geometry.page_width_mm, geometry.page_height_mm)),
    )
    pdf.set_auto_page_break(False)
    pdf.set_margins(0, 0, 0)
    for page, crop in zip(slices, crop_slices(image, slices)):
        pdf.add_page()
        pdf.image(
            crop.convert("RGB"),
            x=0,
            y=0,
            w=geometry.page_width_mm,
            h=geometry.px_to_mm(page.height),
        )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    pdf.output(str(output_path))
    return output_path
