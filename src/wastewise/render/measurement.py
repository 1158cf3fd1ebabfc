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

import json
from collections.abc import Sequence
from pathlib import Path

from ..core.errors import InvalidInputError
from ..core.validation import (
    require_dict,
    require_keys,
    require_list,
    require_non_negative_int,
    require_positive_int,
    require_str,
)
from .types import MeasuredDocument, PageSlice, Section


def measurements_from_dict(data: object) -> MeasuredDocument:
    """Parse the rasterizer's ``{totalHeight, width, sections}`` payload."""
    mapping = require_dict(data, label="measurements")
    require_keys(mapping, ("totalHeight", "width"), label="measurements")
    total_height = require_positive_int(mapping["totalHeight"], label="totalHeight")
    width = require_positive_int(mapping["width"], label="width")
    raw_sections = require_list(mapping.get("sections", []), label="sections")
    sections = tuple(
        _section_from_dict(entry, index=idx) for idx, entry in enumerate(raw_sections)
    )
    return MeasuredDocument(total_height=total_height, width=width, sections=sections)


def _section_from_dict(entry: object, *, index: int) -> Section:
    label = f"sections[{index}]"
    mapping = require_dict(entry, label=label)
    if "id" in mapping:
        name = require_str(mapping["id"], label=f"{label}.id")
    elif "label" in mapping:
        name = require_str(mapping["label"], label=f"{label}.label")
    else:
        raise InvalidInputError(f"{label} id is required")
    require_keys(mapping, ("top", "height"), label=label)
    return Section(
        label=name,
        top=require_non_negative_int(mapping["top"], label=f"{label}.top"),
        height=require_positive_int(mapping["height"], label=f"{label}.height"),
    )


def measurements_to_dict(document: MeasuredDocument) -> dict[str, object]:
    return {
        "totalHeight": document.total_height,
        "width": document.width,
        "sections": [
            {"id": section.label, "top": section.top, "height": section.height}
            for section in document.sections
        ],
    }


def slices_to_dicts(slices: Sequence[PageSlice]) -> list[dict[str, int]]:
    return [
        {"index": page.index, "sourceTop": page.source_top, "sourceBottom": page.source_bottom}
        for page in slices
    ]


def load_measurements(path: str | Path) -> MeasuredDocument:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"{path}: invalid JSON ({exc.msg})") from exc
    return measurements_from_dict(data)


def write_measurements(document: MeasuredDocument, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(measurements_to_dict(document), indent=2) + "\n", encoding="utf-8")
    return path
