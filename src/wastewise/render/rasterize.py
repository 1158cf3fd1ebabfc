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

import atexit
import io
from collections.abc import Sequence

from PIL import Image
from playwright.sync_api import Browser, Playwright, sync_playwright

from ..core.bounds import DEFAULT_RENDER_SCALE, DEFAULT_SECTION_SELECTOR, DEFAULT_SETTLE_MS
from ..core.validation import require_non_negative_int, require_positive_int
from .types import MeasuredDocument, RasterizedDocument, Section

_PLAYWRIGHT: Playwright | None = None
_BROWSER: Browser | None = None

# Boxes are reported in document coordinates so they line up with a full-page screenshot.
_MEASURE_SCRIPT = """
(selector) => {
  const blocks = Array.from(document.querySelectorAll(selector)).map((el, idx) => {
    const rect = el.getBoundingClientRect();
    return {
      id: el.dataset.section || el.id || `section-${idx + 1}`,
      top: rect.top + window.scrollY,
      height: rect.height,
    };
  });
  return { scrollWidth: document.documentElement.scrollWidth, blocks };
}
"""

_FONTS_READY_SCRIPT = "() => document.fonts ? document.fonts.ready.then(() => true) : true"


def _shutdown_playwright() -> None:
    global _BROWSER, _PLAYWRIGHT
    browser = _BROWSER
    playwright = _PLAYWRIGHT
    _BROWSER = None
    _PLAYWRIGHT = None
    if browser is not None:
        browser.close()
    if playwright is not None:
        playwright.stop()


def _get_browser() -> Browser:
    global _BROWSER, _PLAYWRIGHT
    if _BROWSER is not None:
        return _BROWSER
    _PLAYWRIGHT = sync_playwright().start()
    _BROWSER = _PLAYWRIGHT.chromium.launch()
    atexit.register(_shutdown_playwright)
    return _BROWSER


def sections_from_boxes(
    boxes: Sequence[dict[str, object]],
    *,
    scale: float,
    image_height: int,
) -> tuple[Section, ...]:
    """Convert CSS-pixel boxes to image-pixel sections in document order.

    Top and bottom are rounded independently so that touching blocks stay
    touching after scaling. Zero-height blocks are dropped.
    """
    sections: list[Section] = []
    for idx, box in enumerate(boxes):
        top_css = float(box.get("top", 0.0))  # type: ignore[arg-type]
        height_css = float(box.get("height", 0.0))  # type: ignore[arg-type]
        top = max(0, round(top_css * scale))
        bottom = min(image_height, round((top_css + height_css) * scale))
        if bottom <= top:
            continue
        label = str(box.get("id") or "").strip() or f"section-{idx + 1}"
        sections.append(Section(label=label, top=top, height=bottom - top))
    sections.sort(key=lambda section: section.top)
    return tuple(sections)


def rasterize_html(
    html: str,
    *,
    viewport_width_px: int,
    scale: int = DEFAULT_RENDER_SCALE,
    settle_ms: int = DEFAULT_SETTLE_MS,
    selector: str = DEFAULT_SECTION_SELECTOR,
) -> RasterizedDocument:
    """Render ``html`` to one tall image and measure its sections."""
    require_positive_int(viewport_width_px, label="viewport width")
    require_positive_int(scale, label="render scale")
    require_non_negative_int(settle_ms, label="settle_ms")
    browser = _get_browser()
    page = browser.new_page(
        viewport={"width": viewport_width_px, "height": viewport_width_px},
        device_scale_factor=scale,
    )
    try:
        page.set_content(html, wait_until="networkidle")
        page.emulate_media(media="screen")
        page.evaluate(_FONTS_READY_SCRIPT)
        if settle_ms:
            page.wait_for_timeout(settle_ms)
        measured = page.evaluate(_MEASURE_SCRIPT, selector)
        png = page.screenshot(full_page=True, type="png")
    finally:
        page.close()

    image = Image.open(io.BytesIO(png))
    image.load()
    scroll_width = float(measured.get("scrollWidth") or viewport_width_px)
    actual_scale = image.width / scroll_width
    sections = sections_from_boxes(
        measured.get("blocks") or [],
        scale=actual_scale,
        image_height=image.height,
    )
    return RasterizedDocument(
        image=image,
        document=MeasuredDocument(
            total_height=image.height,
            width=image.width,
            sections=sections,
        ),
    )
