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

import os
import unittest
from pathlib import Path
from unittest import mock

from tests.test_support import temp_directory, temp_env
from wastewise.config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_REPORT_TEMPLATE_PATH,
    load_app_config,
)
from wastewise.config import installer
from wastewise.render.types import PaginationOptions


def _write_config(root: Path, text: str) -> Path:
    path = root / "config.toml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadAppConfig(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch.dict(os.environ, {}, clear=False)
        patcher.start()
        self.addCleanup(patcher.stop)
        os.environ.pop(installer.PAPER_SIZE_ENV, None)

    def test_packaged_defaults(self) -> None:
        config = load_app_config(DEFAULT_CONFIG_PATH)
        self.assertEqual(config.paper_size, "A4")
        self.assertIsNone(config.pagination.page_height_px)
        self.assertAlmostEqual(config.pagination.min_page_height_fraction, 0.10)
        self.assertEqual(config.pagination.max_pages, 100)
        self.assertFalse(config.pagination.allow_overlap)
        self.assertEqual(config.render.scale, 2)
        self.assertEqual(config.render.settle_ms, 800)
        self.assertEqual(config.render.section_selector, ".section")
        self.assertEqual(config.render.template_path, DEFAULT_REPORT_TEMPLATE_PATH)
        self.assertFalse(config.ui.quiet)
        self.assertEqual(config.pagination_options(), PaginationOptions())

    def test_paper_size_precedence(self) -> None:
        with temp_directory() as tmp:
            path = _write_config(tmp, '[page]\nsize = "letter"\n')
            self.assertEqual(load_app_config(path).paper_size, "LETTER")
            with temp_env({installer.PAPER_SIZE_ENV: "a4"}):
                self.assertEqual(load_app_config(path).paper_size, "A4")
                self.assertEqual(load_app_config(path, paper_size="Letter").paper_size, "LETTER")

    def test_values_are_parsed(self) -> None:
        with temp_directory() as tmp:
            path = _write_config(
                tmp,
                "[pagination]\n"
                "page_height_px = 1200\n"
                "min_page_height_fraction = 0.25\n"
                'max_pages = "12"\n'
                'allow_overlap = "yes"\n'
                "[render]\n"
                "scale = 3\n"
                "settle_ms = 0\n"
                'section_selector = " .block "\n'
                'template = "custom/report.html.j2"\n'
                "[ui]\n"
                "quiet = true\n",
            )
            config = load_app_config(path)
        options = config.pagination_options()
        self.assertEqual(options.page_height_px, 1200)
        self.assertAlmostEqual(options.min_page_height_fraction, 0.25)
        self.assertEqual(options.max_pages, 12)
        self.assertTrue(options.allow_overlap)
        self.assertEqual(config.render.scale, 3)
        self.assertEqual(config.render.settle_ms, 0)
        self.assertEqual(config.render.section_selector, ".block")
        self.assertEqual(config.render.template_path, tmp / "custom" / "report.html.j2")
        self.assertTrue(config.ui.quiet)

    def test_invalid_values_name_the_field(self) -> None:
        cases = {
            '[page]\nsize = "A3"\n': "page.size",
            "[pagination]\npage_height_px = -1\n": "pagination.page_height_px",
            "[pagination]\nmin_page_height_fraction = 1.5\n": "min_page_height_fraction",
            "[pagination]\nmax_pages = 0\n": "pagination.max_pages",
            "[pagination]\nallow_overlap = 3\n": "pagination.allow_overlap",
            "[render]\nscale = 1.5\n": "render.scale",
            "[render]\nsettle_ms = -5\n": "render.settle_ms",
            '[render]\nsection_selector = ""\n': "render.section_selector",
            "[render]\ntemplate = 7\n": "render.template",
        }
        for text, field in cases.items():
            with self.subTest(field=field):
                with temp_directory() as tmp:
                    path = _write_config(tmp, text)
                    with self.assertRaisesRegex(ValueError, field):
                        load_app_config(path)


class TestConfigInstaller(unittest.TestCase):
    def test_user_config_dir_precedence(self) -> None:
        with mock.patch.dict(os.environ, {installer.XDG_CONFIG_ENV: "/tmp/xdg"}, clear=False):
            with mock.patch.object(installer.sys, "platform", "linux"):
                self.assertEqual(installer._user_config_dir(), Path("/tmp/xdg/wastewise"))

        with mock.patch.dict(os.environ, {}, clear=False):
            os.environ.pop(installer.XDG_CONFIG_ENV, None)
            with mock.patch.object(installer.sys, "platform", "linux"):
                with mock.patch.object(
                    installer, "user_config_dir", return_value="/opt/config/wastewise"
                ):
                    self.assertEqual(installer._user_config_dir(), Path("/opt/config/wastewise"))

    def test_init_user_config_copies_defaults_once(self) -> None:
        with temp_directory() as tmp:
            with mock.patch.object(installer, "_user_config_dir", return_value=tmp / "cfg"):
                self.assertTrue(installer.user_config_needs_init())
                config_dir = installer.init_user_config()
                paths = installer._build_paths()
                self.assertEqual(config_dir, tmp / "cfg")
                self.assertFalse(installer.user_config_needs_init())
                self.assertEqual(
                    paths.user_config_path.read_text(encoding="utf-8"),
                    DEFAULT_CONFIG_PATH.read_text(encoding="utf-8"),
                )
                self.assertTrue(paths.user_template_path.exists())

                paths.user_config_path.write_text("[page]\n", encoding="utf-8")
                installer.init_user_config()
                self.assertEqual(paths.user_config_path.read_text(encoding="utf-8"), "[page]\n")
                self.assertEqual(installer.resolve_config_path(), paths.user_config_path)

    def test_resolve_config_path(self) -> None:
        with temp_directory() as tmp:
            with mock.patch.object(installer, "_user_config_dir", return_value=tmp / "none"):
                self.assertEqual(installer.resolve_config_path(), DEFAULT_CONFIG_PATH)
                self.assertEqual(installer.resolve_config_path("x.toml"), Path("x.toml"))

    def test_init_user_config_wraps_os_error(self) -> None:
        with temp_directory() as tmp:
            blocker = tmp / "file"
            blocker.write_text("", encoding="utf-8")
            with mock.patch.object(installer, "_user_config_dir", return_value=blocker / "cfg"):
                with self.assertRaisesRegex(OSError, "unable to create config dir"):
                    installer.init_user_config()

    def test_env_paper_size(self) -> None:
        with temp_env({installer.PAPER_SIZE_ENV: " letter "}):
            self.assertEqual(installer.env_paper_size(), "LETTER")
        with temp_env({installer.PAPER_SIZE_ENV: "  "}):
            self.assertIsNone(installer.env_paper_size())


if __name__ == "__main__":
    unittest.main()
