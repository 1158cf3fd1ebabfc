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

"""Report payload consumed by the document composer.

The payload mirrors what the dashboard's report screen gathers: stat cards,
lists standing in for charts, detail tables, narrative text and
recommendations, each as one named section.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Literal, cast

from ..core.errors import InvalidInputError
from ..core.validation import require_dict, require_keys, require_list, require_str

SectionKind = Literal["text", "stats", "list", "table", "recommendations"]
ReportPeriod = Literal["week", "month", "quarter", "year"]

SECTION_KINDS: tuple[str, ...] = ("text", "stats", "list", "table", "recommendations")
REPORT_PERIODS: tuple[str, ...] = ("week", "month", "quarter", "year")

DEFAULT_REPORT_TITLE = "Waste Reduction Report"
DEFAULT_FACILITY_NAME = "Main Branch"


@dataclass(frozen=True)
class ReportItem:
    label: str
    value: str


@dataclass(frozen=True)
class ReportSection:
    key: str
    title: str
    kind: SectionKind
    text: str | None = None
    findings: tuple[str, ...] = ()
    items: tuple[ReportItem, ...] = ()
    columns: tuple[str, ...] = ()
    rows: tuple[tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class ReportData:
    title: str
    facility_name: str
    period: ReportPeriod
    generated_on: date
    sections: tuple[ReportSection, ...] = ()

    def section_keys(self) -> tuple[str, ...]:
        return tuple(section.key for section in self.sections)


def report_from_dict(data: object) -> ReportData:
    mapping = require_dict(data, label="report")
    require_keys(mapping, ("period", "sections"), label="report")
    period = require_str(mapping["period"], label="report.period").lower()
    if period not in REPORT_PERIODS:
        raise InvalidInputError(f"report.period must be one of {', '.join(REPORT_PERIODS)}")
    generated_on = _parse_date(mapping.get("generatedOn"), label="report.generatedOn")
    raw_sections = require_list(mapping["sections"], label="report.sections")
    sections = tuple(
        _section_from_dict(entry, index=idx) for idx, entry in enumerate(raw_sections)
    )
    seen: set[str] = set()
    for section in sections:
        if section.key in seen:
            raise InvalidInputError(f"duplicate section key: {section.key}")
        seen.add(section.key)
    title = _optional_str(mapping.get("title"), label="report.title")
    facility_name = _optional_str(mapping.get("facilityName"), label="report.facilityName")
    return ReportData(
        title=title or DEFAULT_REPORT_TITLE,
        facility_name=facility_name or DEFAULT_FACILITY_NAME,
        period=cast(ReportPeriod, period),
        generated_on=generated_on,
        sections=sections,
    )


def load_report(path: str | Path) -> ReportData:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidInputError(f"{path}: invalid JSON ({exc.msg})") from exc
    return report_from_dict(data)


def select_sections(report: ReportData, keys: Iterable[str] | None) -> ReportData:
    """Keep only the sections named in ``keys``, in document order."""
    if keys is None:
        return report
    wanted = {key.strip() for key in keys if key.strip()}
    if not wanted:
        return report
    unknown = wanted.difference(report.section_keys())
    if unknown:
        raise ValueError(f"unknown report section(s): {', '.join(sorted(unknown))}")
    return replace(
        report,
        sections=tuple(section for section in report.sections if section.key in wanted),
    )


def report_filename(report: ReportData, today: date | None = None) -> str:
    day = today or date.today()
    return f"comprehensive_report_{report.period}_{day.isoformat()}.pdf"


def _section_from_dict(entry: object, *, index: int) -> ReportSection:
    label = f"report.sections[{index}]"
    mapping = require_dict(entry, label=label)
    require_keys(mapping, ("key", "kind"), label=label)
    key = require_str(mapping["key"], label=f"{label}.key")
    kind = require_str(mapping["kind"], label=f"{label}.kind").lower()
    if kind not in SECTION_KINDS:
        raise InvalidInputError(f"{label}.kind must be one of {', '.join(SECTION_KINDS)}")
    title = _optional_str(mapping.get("title"), label=f"{label}.title")
    title = title or key.replace("_", " ").title()

    if kind == "text":
        text = _optional_str(mapping.get("text"), label=f"{label}.text")
        if text is None:
            raise InvalidInputError(f"{label}.text is required for text sections")
        findings = tuple(
            _cell(value)
            for value in require_list(mapping.get("findings", []), label=f"{label}.findings")
        )
        return ReportSection(key=key, title=title, kind="text", text=text, findings=findings)

    if kind == "table":
        columns = tuple(
            _cell(value)
            for value in require_list(mapping.get("columns"), label=f"{label}.columns")
        )
        if not columns:
            raise InvalidInputError(f"{label}.columns must not be empty")
        rows: list[tuple[str, ...]] = []
        for row_idx, raw_row in enumerate(
            require_list(mapping.get("rows", []), label=f"{label}.rows")
        ):
            row = require_list(raw_row, label=f"{label}.rows[{row_idx}]")
            if len(row) != len(columns):
                raise InvalidInputError(
                    f"{label}.rows[{row_idx}] has {len(row)} cells, expected {len(columns)}"
                )
            rows.append(tuple(_cell(value) for value in row))
        return ReportSection(
            key=key,
            title=title,
            kind="table",
            columns=columns,
            rows=tuple(rows),
        )

    items = tuple(
        _item_from_dict(item, label=f"{label}.items[{item_idx}]")
        for item_idx, item in enumerate(
            require_list(mapping.get("items", []), label=f"{label}.items")
        )
    )
    return ReportSection(key=key, title=title, kind=cast(SectionKind, kind), items=items)


def _item_from_dict(entry: object, *, label: str) -> ReportItem:
    mapping = require_dict(entry, label=label)
    require_keys(mapping, ("label",), label=label)
    return ReportItem(
        label=require_str(mapping["label"], label=f"{label}.label"),
        value=_cell(mapping.get("value", "")),
    )


def _cell(value: object) -> str:
    if value is None:
        return "N/A"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:,.2f}".rstrip("0").rstrip(".")
    return str(value)


def _optional_str(value: object, *, label: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInputError(f"{label} must be a string")
    return value.strip() or None


def _parse_date(value: object, *, label: str) -> date:
    if value is None:
        return date.today()
    if not isinstance(value, str):
        raise InvalidInputError(f"{label} must be an ISO date string")
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError as exc:
        raise InvalidInputError(f"{label} must be an ISO date string") from exc
