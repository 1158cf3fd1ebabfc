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


class InvalidInputError(ValueError):
    """Raised when section geometry or page geometry is malformed."""


class PageBudgetExceededError(RuntimeError):
    """Raised when pagination hits the page cap before covering the document."""

    def __init__(self, *, max_pages: int, covered_height: int, total_height: int) -> None:
        self.max_pages = max_pages
        self.covered_height = covered_height
        self.total_height = total_height
        super().__init__(
            f"report needs more than {max_pages} pages "
            f"(covered {covered_height} of {total_height} px)"
        )


__all__ = ["InvalidInputError", "PageBudgetExceededError"]
