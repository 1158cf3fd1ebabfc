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

import math
import random
import unittest

from tests.test_support import make_document, make_sections
from wastewise.core.errors import InvalidInputError, PageBudgetExceededError
from wastewise.render.geometry import page_geometry
from wastewise.render.pagination import (
    paginate,
    paginate_document,
    sections_on_page,
    straddling_sections,
    validate_pagination_inputs,
)
from wastewise.render.types import PageSlice, PaginationOptions, Section, SectionCut


def _spans(slices: list[PageSlice]) -> list[tuple[int, int]]:
    return [(page.source_top, page.source_bottom) for page in slices]


class TestPaginateScenarios(unittest.TestCase):
    def test_no_sections_slices_at_fixed_height(self) -> None:
        for sections in ((), []):
            with self.subTest(sections=sections):
                slices = paginate(1000, sections, 400, 40)
                self.assertEqual(_spans(slices), [(0, 400), (400, 800), (800, 1000)])
                self.assertEqual([page.index for page in slices], [0, 1, 2])

    def test_boundary_pulled_back_to_section_top(self) -> None:
        sections = make_sections((350, 100))
        slices = paginate(1000, sections, 400, 40)
        self.assertEqual(slices[0], PageSlice(index=0, source_top=0, source_bottom=350))
        self.assertEqual(slices[1].source_top, 350)
        self.assertEqual(_spans(slices), [(0, 350), (350, 750), (750, 1000)])

    def test_section_taller_than_page_is_cut_and_reported(self) -> None:
        cuts: list[SectionCut] = []
        sections = make_sections((0, 900))
        slices = paginate(1000, sections, 400, 40, on_section_cut=cuts.append)
        self.assertEqual(_spans(slices), [(0, 400), (400, 800), (800, 1000)])
        self.assertEqual([cut.boundary for cut in cuts], [400, 800])
        self.assertEqual([cut.page_index for cut in cuts], [0, 1])
        self.assertTrue(all(cut.section == sections[0] for cut in cuts))
        self.assertTrue(all(cut.reason == "taller_than_page" for cut in cuts))

    def test_overlapping_sections_pull_back_to_first_top(self) -> None:
        sections = make_sections((380, 50), (420, 50))
        slices = paginate(1000, sections, 400, 40, allow_overlap=True)
        self.assertEqual(slices[0].source_bottom, 380)
        self.assertEqual(_spans(slices), [(0, 380), (380, 780), (780, 1000)])

    def test_pull_back_cascades_until_stable(self) -> None:
        # B pulls the boundary to 380, which then lands inside A.
        sections = (
            Section(label="A", top=350, height=40),
            Section(label="B", top=380, height=50),
        )
        cuts: list[SectionCut] = []
        slices = paginate(
            1000, sections, 400, 40, on_section_cut=cuts.append, allow_overlap=True
        )
        self.assertEqual(slices[0].source_bottom, 350)
        self.assertEqual(cuts, [])

    def test_short_page_reverts_to_full_page_with_insufficient_space(self) -> None:
        cuts: list[SectionCut] = []
        sections = make_sections((0, 50), (60, 380))
        slices = paginate(1000, sections, 400, 100, on_section_cut=cuts.append)
        self.assertEqual(slices[0].source_bottom, 400)
        self.assertEqual(len(cuts), 1)
        self.assertEqual(cuts[0].section.label, "s1")
        self.assertEqual(cuts[0].reason, "insufficient_space")

    def test_section_ending_on_boundary_is_not_pulled_back(self) -> None:
        sections = make_sections((300, 100), (400, 100))
        slices = paginate(1000, sections, 400, 40)
        self.assertEqual(slices[0].source_bottom, 400)

    def test_document_shorter_than_page_is_one_slice(self) -> None:
        slices = paginate(250, make_sections((10, 200)), 400, 40)
        self.assertEqual(_spans(slices), [(0, 250)])

    def test_no_cut_reported_at_document_end(self) -> None:
        cuts: list[SectionCut] = []
        paginate(300, make_sections((0, 300)), 400, 40, on_section_cut=cuts.append)
        self.assertEqual(cuts, [])

    def test_cuts_reported_only_when_callback_given(self) -> None:
        slices = paginate(1000, make_sections((0, 900)), 400, 40)
        self.assertEqual(len(slices), 3)


class TestPaginateBudget(unittest.TestCase):
    def test_page_budget_exceeded_raises(self) -> None:
        with self.assertRaises(PageBudgetExceededError) as ctx:
            paginate(1000, (), 400, 40, max_pages=2)
        self.assertEqual(ctx.exception.max_pages, 2)
        self.assertEqual(ctx.exception.covered_height, 800)
        self.assertEqual(ctx.exception.total_height, 1000)
        self.assertIn("more than 2 pages", str(ctx.exception))

    def test_exact_budget_is_enough(self) -> None:
        slices = paginate(800, (), 400, 40, max_pages=2)
        self.assertEqual(_spans(slices), [(0, 400), (400, 800)])

    def test_budget_error_is_runtime_error(self) -> None:
        with self.assertRaises(RuntimeError):
            paginate(10_000, (), 100, 10, max_pages=1)


class TestPaginateProperties(unittest.TestCase):
    def _random_sections(self, seed: int) -> tuple[int, tuple[Section, ...]]:
        rng = random.Random(seed)
        spans = []
        y = rng.randint(0, 50)
        for _ in range(rng.randint(0, 40)):
            height = rng.randint(10, 520)
            spans.append((y, height))
            y += height + rng.randint(0, 30)
        total_height = y + rng.randint(1, 200)
        return total_height, make_sections(*spans)

    def test_slices_cover_document_and_only_reported_cuts_split_sections(self) -> None:
        page_height = 400
        for seed in range(25):
            total_height, sections = self._random_sections(seed)
            with self.subTest(seed=seed):
                cuts: list[SectionCut] = []
                slices = paginate(
                    total_height, sections, page_height, 40, on_section_cut=cuts.append
                )
                self.assertEqual(slices[0].source_top, 0)
                self.assertEqual(slices[-1].source_bottom, total_height)
                for prev, page in zip(slices, slices[1:]):
                    self.assertEqual(prev.source_bottom, page.source_top)
                for idx, page in enumerate(slices):
                    self.assertEqual(page.index, idx)
                    self.assertGreater(page.height, 0)
                    self.assertLessEqual(page.height, page_height)

                expected = [
                    (section.label, page.source_bottom)
                    for page in slices[:-1]
                    for section in straddling_sections(sections, page.source_bottom)
                ]
                self.assertEqual(
                    [(cut.section.label, cut.boundary) for cut in cuts],
                    expected,
                )
                for cut in cuts:
                    page = slices[cut.page_index]
                    if cut.reason == "insufficient_space":
                        self.assertLessEqual(cut.section.height, page_height)
                    else:
                        self.assertGreater(cut.section.height, page_height)
                    self.assertEqual(
                        cut.boundary, min(page.source_top + page_height, total_height)
                    )
                    self.assertLess(cut.section.top - page.source_top, 40)

    def test_page_count_bounded_by_min_page_height(self) -> None:
        page_height = 400
        for min_height in (10, 40, 150):
            for seed in range(25):
                total_height, sections = self._random_sections(seed)
                max_pages = math.ceil(total_height / min_height)
                with self.subTest(seed=seed, min_height=min_height):
                    slices = paginate(total_height, sections, page_height, min_height, max_pages)
                    self.assertEqual(slices[-1].source_bottom, total_height)
                    for page in slices[:-1]:
                        self.assertGreaterEqual(page.height, min_height)

    def test_deterministic(self) -> None:
        total_height, sections = self._random_sections(7)
        first = paginate(total_height, sections, 400, 40)
        second = paginate(total_height, list(sections), 400, 40)
        self.assertEqual(first, second)


class TestValidatePaginationInputs(unittest.TestCase):
    def test_rejects_invalid_geometry(self) -> None:
        cases = (
            (0, 400, 40, 10),
            (-5, 400, 40, 10),
            (1000, 0, 40, 10),
            (1000, 400, 0, 10),
            (1000, 400, 400, 10),
            (1000, 400, 40, 0),
            (1000, 400, 40, True),
            (1000.0, 400, 40, 10),
        )
        for total_height, page_height, min_height, max_pages in cases:
            with self.subTest(
                total_height=total_height,
                page_height=page_height,
                min_height=min_height,
                max_pages=max_pages,
            ):
                with self.assertRaises(InvalidInputError):
                    validate_pagination_inputs(
                        total_height,  # type: ignore[arg-type]
                        (),
                        page_height,
                        min_height,
                        max_pages,  # type: ignore[arg-type]
                    )

    def test_rejects_malformed_sections(self) -> None:
        cases = {
            "negative top": (Section("a", -1, 10),),
            "zero height": (Section("a", 0, 0),),
            "past end": (Section("a", 950, 100),),
            "unordered": (Section("a", 500, 10), Section("b", 100, 10)),
            "overlapping": (Section("a", 100, 50), Section("b", 120, 50)),
            "not a section": ((100, 50),),
        }
        for name, sections in cases.items():
            with self.subTest(case=name):
                with self.assertRaises(InvalidInputError):
                    paginate(1000, sections, 400, 40)  # type: ignore[arg-type]

    def test_error_names_offending_section(self) -> None:
        sections = (Section("kpis", 100, 50), Section("trend", 120, 50))
        with self.assertRaisesRegex(InvalidInputError, "'trend'.*overlaps 'kpis'"):
            paginate(1000, sections, 400, 40)

    def test_allow_overlap_still_requires_order_and_bounds(self) -> None:
        with self.assertRaises(InvalidInputError):
            paginate(
                1000,
                (Section("a", 500, 10), Section("b", 100, 10)),
                400,
                40,
                allow_overlap=True,
            )
        with self.assertRaises(InvalidInputError):
            paginate(1000, (Section("a", 950, 100),), 400, 40, allow_overlap=True)

    def test_touching_sections_are_not_overlapping(self) -> None:
        validate_pagination_inputs(1000, make_sections((0, 100), (100, 100)), 400, 40, 10)
        validate_pagination_inputs(1000, make_sections((0, 1000)), 400, 40, 10)


class TestSectionQueries(unittest.TestCase):
    def test_straddling_sections_excludes_touching_edges(self) -> None:
        sections = make_sections((0, 100), (100, 100), (250, 100))
        self.assertEqual(straddling_sections(sections, 100), [])
        self.assertEqual([s.label for s in straddling_sections(sections, 300)], ["s2"])

    def test_sections_on_page(self) -> None:
        sections = make_sections((0, 100), (150, 100), (300, 200))
        page = PageSlice(index=0, source_top=0, source_bottom=400)
        self.assertEqual([s.label for s in sections_on_page(sections, page)], ["s0", "s1"])


class TestPaginateDocument(unittest.TestCase):
    def test_uses_geometry_page_height(self) -> None:
        document = make_document(3000, (1300, 200), width=1000)
        geometry = page_geometry("A4", 1000)
        self.assertEqual(geometry.page_height_px, 1414)
        slices = paginate_document(document, geometry)
        self.assertEqual(_spans(slices), [(0, 1300), (1300, 2714), (2714, 3000)])

    def test_options_are_applied(self) -> None:
        document = make_document(1000, (380, 50), (420, 50), width=100)
        geometry = page_geometry("A4", 100, page_height_px=400)
        with self.assertRaises(InvalidInputError):
            paginate_document(document, geometry)
        slices = paginate_document(
            document,
            geometry,
            PaginationOptions(allow_overlap=True),
        )
        self.assertEqual(slices[0].source_bottom, 380)
        with self.assertRaises(PageBudgetExceededError):
            paginate_document(
                document,
                geometry,
                PaginationOptions(max_pages=2, allow_overlap=True),
            )

    def test_rejects_width_mismatch(self) -> None:
        document = make_document(1000, width=800)
        with self.assertRaisesRegex(InvalidInputError, "does not match"):
            paginate_document(document, page_geometry("A4", 1000))


if __name__ == "__main__":
    unittest.main()
