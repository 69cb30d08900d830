# SPDX-License-Identifier: Apache-2.0
"""Tests for the site build command-line entry point."""

import importlib.util
import logging
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[2]


def _load_script():
    spec = importlib.util.spec_from_file_location(
        "build_site_script", ROOT_DIR / "scripts" / "build_site.py"
    )
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def build_site():
    yield _load_script()
    app_logger = logging.getLogger("helloshell")
    for handler in list(app_logger.handlers):
        handler.close()
        app_logger.removeHandler(handler)


def test_build_succeeds(build_site, site_dir, tmp_path, capsys):
    dist = tmp_path / "dist"

    code = build_site.main(
        [
            "--source",
            str(site_dir),
            "--dist",
            str(dist),
            "--log-dir",
            str(tmp_path / "logs"),
            "--log-level",
            "WARNING",
        ]
    )

    assert code == 0
    assert (dist / "index.html").is_file()
    assert (tmp_path / "logs").is_dir()
    out = capsys.readouterr().out
    assert "Build completed successfully!" in out
    assert str(dist / "build.log") in out


def test_build_fails_for_missing_source(build_site, tmp_path, capsys):
    code = build_site.main(
        [
            "--source",
            str(tmp_path / "missing"),
            "--dist",
            str(tmp_path / "dist"),
            "--log-dir",
            str(tmp_path / "logs"),
        ]
    )

    assert code == 1
    assert "Build completed successfully!" not in capsys.readouterr().out
    assert "BUILD FAILED" in (tmp_path / "dist" / "build.log").read_text(encoding="utf-8")


def test_parse_args_rejects_unknown_level(build_site):
    with pytest.raises(SystemExit):
        build_site.parse_args(["--log-level", "LOUD"])
