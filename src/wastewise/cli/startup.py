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
import subprocess
import sys
from pathlib import Path

from platformdirs import user_cache_dir
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright
from rich.traceback import install as install_rich_traceback

from ..config import init_user_config, user_config_needs_init
from .ui import configure_ui, console, progress

_PLAYWRIGHT_SKIP_ENV = "WASTEWISE_SKIP_PLAYWRIGHT_INSTALL"
_PLAYWRIGHT_BROWSERS_ENV = "PLAYWRIGHT_BROWSERS_PATH"


def run_startup(*, quiet: bool, no_color: bool, debug: bool, init_config: bool) -> bool:
    """Prepare the console and user config; return True when the CLI should exit."""
    configure_ui(no_color=no_color)
    if debug:
        install_rich_traceback(show_locals=True)
    if init_config:
        config_dir = init_user_config()
        console.print(f"User config ready at {config_dir}")
        return True
    if user_config_needs_init():
        config_dir = init_user_config()
        if not quiet:
            console.print(f"[dim]Initialized user config at {config_dir}[/dim]")
    return False


def ensure_playwright_browsers(*, quiet: bool = True) -> None:
    """Install Chromium for Playwright unless it is already present.

    Only the commands that rasterize need a browser, so this runs per command
    rather than at startup. Set ``WASTEWISE_SKIP_PLAYWRIGHT_INSTALL`` to skip it.
    """
    if os.environ.get(_PLAYWRIGHT_SKIP_ENV):
        return
    if _playwright_precheck():
        return
    with progress(quiet=quiet) as progress_bar:
        if progress_bar is not None:
            progress_bar.add_task("Installing Chromium for Playwright...", total=None)
        _playwright_install()


def _configure_playwright_env() -> None:
    if os.environ.get(_PLAYWRIGHT_BROWSERS_ENV):
        return
    os.environ[_PLAYWRIGHT_BROWSERS_ENV] = user_cache_dir("ms-playwright", appauthor=False)


def _playwright_precheck() -> bool:
    _configure_playwright_env()
    return _playwright_chromium_installed()


def _playwright_chromium_installed() -> bool:
    try:
        with sync_playwright() as playwright_instance:
            executable = Path(playwright_instance.chromium.executable_path)
    except (OSError, RuntimeError, PlaywrightError):
        return False
    return executable.exists()


def _playwright_install() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "playwright", "install", "chromium"],
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        detail = result.stderr.strip() or result.stdout.strip() or "unknown error"
        raise RuntimeError(f"Playwright install failed: {detail}")
