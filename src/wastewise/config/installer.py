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

import os
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config/default.toml"
DEFAULT_REPORT_TEMPLATE_PATH = PACKAGE_ROOT / "templates/report/report.html.j2"
PAPER_SIZE_ENV = "WASTEWISE_PAPER_SIZE"
XDG_CONFIG_ENV = "XDG_CONFIG_HOME"


@dataclass(frozen=True)
class ConfigPaths:
    user_config_dir: Path
    user_config_path: Path
    user_template_path: Path


def _user_config_dir() -> Path:
    xdg_override = os.environ.get(XDG_CONFIG_ENV)
    if xdg_override:
        return Path(xdg_override) / "wastewise"
    if sys.platform == "darwin":
        return Path.home() / ".config" / "wastewise"
    return Path(user_config_dir("wastewise", appauthor=False))


def _build_paths() -> ConfigPaths:
    config_dir = _user_config_dir()
    return ConfigPaths(
        user_config_dir=config_dir,
        user_config_path=config_dir / DEFAULT_CONFIG_PATH.name,
        user_template_path=config_dir / "templates" / DEFAULT_REPORT_TEMPLATE_PATH.name,
    )


def init_user_config() -> Path:
    paths = _build_paths()
    try:
        paths.user_config_dir.mkdir(parents=True, exist_ok=True)
        _copy_if_missing(DEFAULT_CONFIG_PATH, paths.user_config_path)
        _copy_if_missing(DEFAULT_REPORT_TEMPLATE_PATH, paths.user_template_path)
    except OSError as exc:
        raise OSError(f"unable to create config dir at {paths.user_config_dir}") from exc
    return paths.user_config_dir


def user_config_needs_init() -> bool:
    paths = _build_paths()
    return not paths.user_config_path.exists()


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path:
        return Path(path)
    user_config = _build_paths().user_config_path
    if user_config.exists():
        return user_config
    return DEFAULT_CONFIG_PATH


def env_paper_size() -> str | None:
    value = os.environ.get(PAPER_SIZE_ENV)
    if value and value.strip():
        return value.strip().upper()
    return None


def _copy_if_missing(source: Path, dest: Path) -> None:
    if dest.exists():
        return
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, dest)
