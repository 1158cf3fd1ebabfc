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

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from ..core.bounds import (
    DEFAULT_MAX_PAGES,
    DEFAULT_MIN_PAGE_HEIGHT_FRACTION,
    DEFAULT_RENDER_SCALE,
    DEFAULT_SECTION_SELECTOR,
    DEFAULT_SETTLE_MS,
)
from ..render.geometry import DEFAULT_PAPER_SIZE, PAPER_SIZES_MM
from ..render.types import PaginationOptions
from .installer import DEFAULT_REPORT_TEMPLATE_PATH, env_paper_size, resolve_config_path


@dataclass(frozen=True)
class PaginationDefaults:
    page_height_px: int | None = None
    min_page_height_fraction: float = DEFAULT_MIN_PAGE_HEIGHT_FRACTION
    max_pages: int = DEFAULT_MAX_PAGES
    allow_overlap: bool = False


@dataclass(frozen=True)
class RenderDefaults:
    scale: int = DEFAULT_RENDER_SCALE
    settle_ms: int = DEFAULT_SETTLE_MS
    section_selector: str = DEFAULT_SECTION_SELECTOR
    template_path: Path = DEFAULT_REPORT_TEMPLATE_PATH


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False
    no_color: bool = False


@dataclass(frozen=True)
class AppConfig:
    paper_size: str = DEFAULT_PAPER_SIZE
    pagination: PaginationDefaults = field(default_factory=PaginationDefaults)
    render: RenderDefaults = field(default_factory=RenderDefaults)
    ui: UiDefaults = field(default_factory=UiDefaults)

    def pagination_options(self) -> PaginationOptions:
        return PaginationOptions(
            page_height_px=self.pagination.page_height_px,
            min_page_height_fraction=self.pagination.min_page_height_fraction,
            max_pages=self.pagination.max_pages,
            allow_overlap=self.pagination.allow_overlap,
        )


def load_app_config(path: str | Path | None = None, *, paper_size: str | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    page_cfg = _get_dict(data, "page")
    resolved_paper_size = _parse_paper_size(
        paper_size or env_paper_size() or page_cfg.get("size") or DEFAULT_PAPER_SIZE,
        field="page.size",
    )
    return AppConfig(
        paper_size=resolved_paper_size,
        pagination=_parse_pagination_defaults(_get_dict(data, "pagination")),
        render=_parse_render_defaults(_get_dict(data, "render"), config_path=config_path),
        ui=_parse_ui_defaults(_get_dict(data, "ui")),
    )


def _parse_pagination_defaults(cfg: dict[str, object]) -> PaginationDefaults:
    page_height_px = _parse_optional_positive_int_or_unset_zero(
        cfg.get("page_height_px"),
        field="pagination.page_height_px",
    )
    fraction = _parse_float(
        cfg.get("min_page_height_fraction"),
        field="pagination.min_page_height_fraction",
        default=DEFAULT_MIN_PAGE_HEIGHT_FRACTION,
    )
    if not 0 < fraction < 1:
        raise ValueError("pagination.min_page_height_fraction must be between 0 and 1")
    max_pages = _parse_positive_int(
        cfg.get("max_pages"),
        field="pagination.max_pages",
        default=DEFAULT_MAX_PAGES,
    )
    return PaginationDefaults(
        page_height_px=page_height_px,
        min_page_height_fraction=fraction,
        max_pages=max_pages,
        allow_overlap=_parse_bool(
            cfg.get("allow_overlap"), field="pagination.allow_overlap", default=False
        ),
    )


def _parse_render_defaults(cfg: dict[str, object], *, config_path: Path) -> RenderDefaults:
    settle_ms = _parse_int_strict(
        cfg.get("settle_ms", DEFAULT_SETTLE_MS),
        field="render.settle_ms",
    )
    if settle_ms < 0:
        raise ValueError("render.settle_ms must be a non-negative integer")
    selector = cfg.get("section_selector", DEFAULT_SECTION_SELECTOR)
    if not isinstance(selector, str) or not selector.strip():
        raise ValueError("render.section_selector must be a non-empty string")
    return RenderDefaults(
        scale=_parse_positive_int(
            cfg.get("scale"),
            field="render.scale",
            default=DEFAULT_RENDER_SCALE,
        ),
        settle_ms=settle_ms,
        section_selector=selector.strip(),
        template_path=_parse_template_path(cfg.get("template"), config_path=config_path),
    )


def _parse_ui_defaults(cfg: dict[str, object]) -> UiDefaults:
    return UiDefaults(
        quiet=_parse_bool(cfg.get("quiet"), field="ui.quiet", default=False),
        no_color=_parse_bool(cfg.get("no_color"), field="ui.no_color", default=False),
    )


def _parse_template_path(value: object, *, config_path: Path) -> Path:
    if value is None:
        return DEFAULT_REPORT_TEMPLATE_PATH
    if not isinstance(value, str):
        raise ValueError("render.template must be a string")
    text = value.strip()
    if not text:
        return DEFAULT_REPORT_TEMPLATE_PATH
    candidate = Path(text).expanduser()
    if not candidate.is_absolute():
        candidate = config_path.parent / candidate
    return candidate


def _parse_paper_size(value: object, *, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field} must be a non-empty string")
    key = value.strip().upper()
    if key not in PAPER_SIZES_MM:
        raise ValueError(f"{field} must be one of {', '.join(PAPER_SIZES_MM)}")
    return key


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")


def _parse_optional_positive_int_or_unset_zero(value: object, *, field: str) -> int | None:
    if value is None:
        return None
    parsed = _parse_int_strict(value, field=field)
    if parsed == 0:
        return None
    if parsed < 0:
        raise ValueError(f"{field} must be a positive integer or 0")
    return parsed


def _parse_positive_int(value: object, *, field: str, default: int) -> int:
    if value is None:
        return default
    parsed = _parse_int_strict(value, field=field)
    if parsed <= 0:
        raise ValueError(f"{field} must be a positive integer")
    return parsed


def _parse_float(value: object, *, field: str, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as exc:
            raise ValueError(f"{field} must be a number") from exc
    raise ValueError(f"{field} must be a number")


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"{field} must be an integer")
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")
