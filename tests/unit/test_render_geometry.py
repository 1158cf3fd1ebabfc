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

import unittest

from wastewise.core.errors import InvalidInputError
from wastewise.render.geometry import (
    PAPER_SIZES_MM,
    page_geometry,
    paper_size_mm,
    viewport_width_px,
)


class TestPageGeometry(unittest.TestCase):
    def test_page_height_follows_paper_aspect_ratio(self) -> None:
        cases = (
            ("A4", 1588, 2246),
            ("A4", 1000, 1414),
            ("LETTER", 1632, 2112),
        )
        for paper, width, expected in cases:
            with self.subTest(paper=paper, width=width):
                geometry = page_geometry(paper, width)
                self.assertEqual(geometry.page_height_px, expected)

    def test_min_page_height_uses_fraction(self) -> None:
        geometry = page_geometry("A4", 1000, min_page_height_fraction=0.25)
        self.assertAlmostEqual(geometry.min_page_height_px, 1414 * 0.25)

    def test_explicit_page_height_overrides_paper(self) -> None:
        geometry = page_geometry("a4", 1000, page_height_px=400)
        self.assertEqual(geometry.page_height_px, 400)
        self.assertEqual(geometry.physical_page_height_px, 1414)
        self.assertAlmostEqual(geometry.min_page_height_px, 40.0)

    def test_px_to_mm_maps_width_onto_page(self) -> None:
        geometry = page_geometry("A4", 1000)
        self.assertAlmostEqual(geometry.px_to_mm(1000), 210.0)
        self.assertAlmostEqual(geometry.px_to_mm(500), 105.0)

    def test_invalid_geometry_rejected(self) -> None:
        with self.assertRaises(ValueError):
            page_geometry("A3", 1000)
        for kwargs in (
            {"image_width_px": 0},
            {"image_width_px": 1000, "min_page_height_fraction": 1.0},
            {"image_width_px": 1000, "min_page_height_fraction": 0},
            {"image_width_px": 1000, "page_height_px": 0},
        ):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(InvalidInputError):
                    page_geometry("A4", **kwargs)  # type: ignore[arg-type]

    def test_paper_sizes(self) -> None:
        self.assertEqual(paper_size_mm(" letter "), PAPER_SIZES_MM["LETTER"])
        self.assertEqual(paper_size_mm("A4"), (210.0, 297.0))

    def test_viewport_width_is_css_pixels(self) -> None:
        self.assertEqual(viewport_width_px(210.0), 794)
        with self.assertRaises(InvalidInputError):
            viewport_width_px(0)


if __name__ == "__main__":
    unittest.main()
