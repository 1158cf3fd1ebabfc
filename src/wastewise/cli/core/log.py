#!/usr/bin/env python3
from __future__ import annotations

from ...render.types import SectionCut
from ..ui import console_err

_CUT_REASONS = {
    "taller_than_page": "taller than a page",
    "insufficient_space": "no room to move it to the next page",
}


def _warn(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console_err.print(f"[yellow]Warning:[/yellow] {message}")


def format_section_cut(cut: SectionCut) -> str:
    section = cut.section
    return (
        f"section {section.label!r} ({section.top}-{section.bottom} px) is split "
        f"at {cut.boundary} px after page {cut.page_index + 1}: {_CUT_REASONS[cut.reason]}"
    )


def _warn_section_cut(cut: SectionCut, *, quiet: bool) -> None:
    _warn(format_section_cut(cut), quiet=quiet)
