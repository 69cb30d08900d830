# SPDX-License-Identifier: Apache-2.0
#
# Copyright (c) 2024-2025 HelloShell Contributors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
Site build pipeline.

Packages the ``site/`` source tree into a distribution directory ready for
static serving: validates the sources, copies the shared styles and the
fixed file set of each page, synthesizes the health and not-found pages and
writes ``build-info.txt``. Progress is mirrored into ``build.log`` inside the
distribution directory and into the application logger.
"""

import getpass
import logging
import platform
import shutil
import socket
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Union

from config.__version__ import __version__
from config.constants import (
    APP_NAME,
    BUILD_INFO_FILENAME,
    BUILD_LOG_FILENAME,
    BYTES_PER_KB,
    BYTES_PER_MB,
    DIST_DIRECTORIES,
    HEALTH_PAGE_FILENAME,
    NOT_FOUND_PAGE_FILENAME,
    PAGE_COMPONENTS,
    REQUIRED_SOURCE_DIRS,
    ROOT_INDEX_SOURCE,
    SHARED_FILES,
)
from utils.error_handler import BuildError

logger = logging.getLogger("helloshell.build")

STEP_SUCCESS = "SUCCESS"
STEP_FAILED = "FAILED"

HEALTH_PAGE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Health Check</title>
</head>
<body>
    <h1>OK</h1>
    <p>Application is running</p>
</body>
</html>
"""

NOT_FOUND_PAGE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>404 - Page Not Found</title>
    <style>
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            display: flex;
            justify-content: center;
            align-items: center;
            min-height: 100vh;
            margin: 0;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            color: white;
            text-align: center;
        }
        h1 { font-size: 6rem; margin: 0; }
        p { font-size: 1.5rem; margin: 20px 0; }
        a { color: white; }
    </style>
</head>
<body>
    <div class="container">
        <h1>404</h1>
        <p>Page Not Found</p>
        <p><a href="/shell/">Return to Home</a></p>
    </div>
</body>
</html>
"""


def format_size(size: int) -> str:
    """Format a byte count as ``B``, ``KB`` or ``MB`` with one decimal."""
    if size < BYTES_PER_KB:
        return f"{size}B"
    if size < BYTES_PER_MB:
        return f"{size / BYTES_PER_KB:.1f}KB"
    return f"{size / BYTES_PER_MB:.1f}MB"


@dataclass
class BuildStep:
    """Outcome of one build step."""

    number: int
    name: str
    status: str = ""
    duration: float = 0.0
    detail: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == STEP_SUCCESS


@dataclass
class BuildReport:
    """Result and statistics of a site build."""

    build_id: str
    started_at: datetime
    source_dir: Path
    dist_dir: Path
    total_steps: int
    steps: List[BuildStep] = field(default_factory=list)
    files_copied: int = 0
    directories_created: int = 0
    total_size: int = 0
    finished_at: Optional[datetime] = None

    @property
    def successful_steps(self) -> int:
        return sum(1 for step in self.steps if step.succeeded)

    @property
    def failed_steps(self) -> int:
        return sum(1 for step in self.steps if not step.succeeded)

    @property
    def succeeded(self) -> bool:
        return len(self.steps) == self.total_steps and self.failed_steps == 0

    @property
    def log_path(self) -> Path:
        return self.dist_dir / BUILD_LOG_FILENAME


class BuildLog:
    """Writes ``build.log`` and mirrors every line to the application logger."""

    def __init__(self, path: Path):
        self.path = path

    def write(self, line: str = "") -> None:
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    def start(self, header: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(header)

    def event(self, tag: str, message: str, level: int = logging.INFO) -> None:
        self.write(f"[{time.strftime('%H:%M:%S')}] [{tag}] {message}")
        logger.log(level, message)

    def step(self, number: int, title: str) -> None:
        self.event(f"STEP {number}", title)

    def info(self, message: str) -> None:
        self.event("INFO", f"  -> {message}", logging.DEBUG)

    def success(self, message: str) -> None:
        self.event("SUCCESS", f"  OK {message}", logging.DEBUG)

    def error(self, message: str) -> None:
        self.event("ERROR", message, logging.ERROR)


class SiteBuilder:
    """Builds the distribution tree from the site source tree."""

    def __init__(
        self,
        source_dir: Union[str, Path],
        dist_dir: Union[str, Path],
        version: str = __version__,
    ):
        self.source_dir = Path(source_dir).resolve()
        self.dist_dir = Path(dist_dir).resolve()
        self.version = version
        self.log = BuildLog(self.dist_dir / BUILD_LOG_FILENAME)

        page_steps = [
            (
                f"Build {display_name}",
                f"Building {display_name}...",
                self._page_builder(component, files),
            )
            for component, display_name, files in PAGE_COMPONENTS
        ]
        self._steps: List[tuple] = [
            (
                "Validate source directory",
                "Validating source directory...",
                self._validate_source,
            ),
            (
                "Clean distribution directory",
                "Cleaning distribution directory...",
                self._clean_dist,
            ),
            (
                "Create distribution structure",
                "Creating distribution structure...",
                self._create_structure,
            ),
            ("Copy shared files", "Copying shared resources...", self._copy_shared_files),
            *page_steps,
            (
                "Create health check endpoint",
                "Creating health check endpoint...",
                self._create_health_page,
            ),
            (
                "Create 404 error page",
                "Creating 404 error page...",
                self._create_not_found_page,
            ),
            (
                "Generate build information",
                "Generating build information...",
                self._write_build_info,
            ),
        ]
        self.report: Optional[BuildReport] = None

    @property
    def step_names(self) -> List[str]:
        return [name for name, _, _ in self._steps]

    def build(self) -> BuildReport:
        """
        Run every build step in order.

        Returns:
            The build report

        Raises:
            BuildError: If any step fails; ``build.log`` records the failure
        """
        started_at = datetime.now()
        report = BuildReport(
            build_id=started_at.strftime("%Y%m%d-%H%M%S"),
            started_at=started_at,
            source_dir=self.source_dir,
            dist_dir=self.dist_dir,
            total_steps=len(self._steps),
        )
        self.report = report

        try:
            self.log.start(self._header(report))
        except OSError as e:
            raise BuildError(f"Cannot write build log in {self.dist_dir}: {e}") from e
        logger.info(f"Building site {self.source_dir} -> {self.dist_dir} (build {report.build_id})")

        for number, (name, title, action) in enumerate(self._steps, start=1):
            try:
                self._run_step(number, name, title, action)
            except BuildError as e:
                report.finished_at = datetime.now()
                self._write_failure(e)
                raise

        report.finished_at = datetime.now()
        self._write_execution_summary()
        self._write_build_summary()
        logger.info(
            f"Build {report.build_id} completed: {report.files_copied} files, "
            f"{format_size(report.total_size)}"
        )
        return report

    def _run_step(self, number: int, name: str, title: str, action: Callable[[], str]) -> None:
        step = BuildStep(number=number, name=name)
        self.log.step(number, title)
        started = time.monotonic()
        try:
            step.detail = action() or ""
            step.status = STEP_SUCCESS
        except BuildError as e:
            step.status = STEP_FAILED
            step.detail = str(e)
            if e.step is None:
                e.step = name
            self.log.error(str(e))
            raise
        except OSError as e:
            step.status = STEP_FAILED
            step.detail = str(e)
            self.log.error(str(e))
            raise BuildError(str(e), step=name) from e
        finally:
            step.duration = time.monotonic() - started
            self.report.steps.append(step)
            self._end_step(step)

    def _end_step(self, step: BuildStep) -> None:
        verb = "completed" if step.succeeded else "failed"
        line = f"Step {step.number} {verb} ({step.duration:.2f}s)"
        if step.detail:
            line += f" - {step.detail}"
        self.log.event(step.status, line, logging.INFO if step.succeeded else logging.ERROR)
        self.log.write()

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _validate_source(self) -> str:
        self.log.info("Checking source directory exists")
        if not self.source_dir.is_dir():
            raise BuildError(f"Source directory not found: {self.source_dir}")
        self.log.success("Source directory found")

        for name in REQUIRED_SOURCE_DIRS:
            self.log.info(f"Validating {name} directory")
            if not (self.source_dir / name).is_dir():
                raise BuildError(f"Required directory not found: {self.source_dir / name}")
            self.log.success(f"{name} directory validated")
        return "All source directories validated"

    def _clean_dist(self) -> str:
        removed = 0
        for child in self.dist_dir.iterdir():
            if child.name == BUILD_LOG_FILENAME:
                continue
            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
            removed += 1
        if removed:
            self.log.success(f"Removed {removed} existing entr{'y' if removed == 1 else 'ies'}")
        else:
            self.log.info("Distribution directory already empty")
        return ""

    def _create_structure(self) -> str:
        for name in DIST_DIRECTORIES:
            self.log.info(f"Creating {name}")
            (self.dist_dir / name).mkdir(parents=True, exist_ok=True)
            self.report.directories_created += 1
            self.log.success(f"{name} created")
        return f"{len(DIST_DIRECTORIES)} directories created"

    def _copy_shared_files(self) -> str:
        size = 0
        for relative in SHARED_FILES:
            copied = self._copy(relative, relative)
            self.log.success(f"{Path(relative).name} ({format_size(copied)})")
            size += copied
        return f"{len(SHARED_FILES)} files copied, {format_size(size)}"

    def _page_builder(self, component: str, files) -> Callable[[], str]:
        def build_page() -> str:
            count = 0
            for filename in files:
                relative = f"{component}/{filename}"
                self._copy(relative, relative)
                self.log.success(filename)
                count += 1
            if f"{component}/index.html" == ROOT_INDEX_SOURCE:
                self._copy(ROOT_INDEX_SOURCE, "index.html")
                self.log.success("Root index.html created")
                count += 1
            return f"{count} files copied"

        return build_page

    def _create_health_page(self) -> str:
        self._write_generated(HEALTH_PAGE_FILENAME, HEALTH_PAGE_HTML)
        return ""

    def _create_not_found_page(self) -> str:
        self._write_generated(NOT_FOUND_PAGE_FILENAME, NOT_FOUND_PAGE_HTML)
        return ""

    def _write_build_info(self) -> str:
        report = self.report
        components = "\n".join(
            f"- {component}: {display_name}" for component, display_name, _ in PAGE_COMPONENTS
        )
        content = (
            f"{APP_NAME} - Build Information\n"
            f"===================================\n\n"
            f"Build ID: {report.build_id}\n"
            f"Build Date: {report.started_at:%Y-%m-%d %H:%M:%S}\n"
            f"Version: {self.version}\n"
            f"Source Directory: {self.source_dir}\n"
            f"Distribution Directory: {self.dist_dir}\n\n"
            f"Components:\n{components}\n- shared: Styles\n\n"
            f"Build Statistics:\n"
            f"- Files Copied: {report.files_copied}\n"
            f"- Directories Created: {report.directories_created}\n"
            f"- Total Size: {format_size(report.total_size)}\n"
        )
        (self.dist_dir / BUILD_INFO_FILENAME).write_text(content, encoding="utf-8")
        self.log.success("Build info generated")
        return ""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _copy(self, source_relative: str, dest_relative: str) -> int:
        source = self.source_dir / source_relative
        if not source.is_file():
            raise BuildError(f"Required file not found: {source}")
        destination = self.dist_dir / dest_relative
        self.log.info(f"Copying {source_relative}")
        shutil.copy2(source, destination)
        size = destination.stat().st_size
        self.report.files_copied += 1
        self.report.total_size += size
        return size

    def _write_generated(self, filename: str, content: str) -> None:
        self.log.info(f"Generating {filename}")
        path = self.dist_dir / filename
        path.write_text(content, encoding="utf-8")
        self.report.files_copied += 1
        self.report.total_size += path.stat().st_size
        self.log.success(f"{filename} created")

    def _header(self, report: BuildReport) -> str:
        components = ", ".join(REQUIRED_SOURCE_DIRS)
        return (
            "=====================================\n"
            f"{APP_NAME.upper()} - BUILD LOG\n"
            "=====================================\n"
            f"Build ID: {report.build_id}\n"
            f"Version: {self.version}\n"
            f"Started: {report.started_at:%Y-%m-%d %H:%M:%S}\n\n"
            "-------------------------------------\n"
            "CONFIGURATION\n"
            "-------------------------------------\n"
            f"Source Directory: {self.source_dir}\n"
            f"Distribution Directory: {self.dist_dir}\n"
            f"Components: {components}\n"
            f"Host: {socket.gethostname()}\n"
            f"User: {_current_user()}\n"
            f"OS: {platform.system()}\n\n"
            "-------------------------------------\n"
            "EXECUTION LOG\n"
            "-------------------------------------\n"
        )

    def _write_execution_summary(self) -> None:
        self.log.write()
        self.log.write("-------------------------------------")
        self.log.write("EXECUTION SUMMARY")
        self.log.write("-------------------------------------")
        for step in self.report.steps:
            mark = "+" if step.succeeded else "x"
            line = (
                f"[STEP {step.number:2d}] {mark} {step.name:<45} "
                f"({step.duration:.2f}s) {step.status}"
            )
            if step.detail:
                line += f" - {step.detail}"
            self.log.write(line)

    def _write_build_summary(self) -> None:
        report = self.report
        status = STEP_SUCCESS if report.succeeded else STEP_FAILED
        duration = (report.finished_at - report.started_at).total_seconds()
        for line in (
            "",
            "-------------------------------------",
            "BUILD SUMMARY",
            "-------------------------------------",
            f"Total Duration: {duration:.2f}s",
            f"Steps Completed: {len(report.steps)}/{report.total_steps}",
            f"Steps Successful: {report.successful_steps}",
            f"Steps Failed: {report.failed_steps}",
            f"Status: {status}",
            "",
            f"Files Copied: {report.files_copied}",
            f"Directories Created: {report.directories_created}",
            f"Total Size: {format_size(report.total_size)}",
            "",
            f"Distribution created in: {self.dist_dir}",
            "",
            "=====================================",
            f"BUILD COMPLETED {status}",
            "=====================================",
            f"Finished: {report.finished_at:%Y-%m-%d %H:%M:%S}",
        ):
            self.log.write(line)

    def _write_failure(self, error: BuildError) -> None:
        try:
            self.log.write()
            self.log.write("=====================================")
            self.log.write("BUILD FAILED")
            self.log.write("=====================================")
            self.log.write(f"Failed at: {datetime.now():%Y-%m-%d %H:%M:%S}")
            self.log.write(f"Failed step: {error.step}")
            self.log.write(f"Reason: {error}")
        except OSError as e:
            logger.error(f"Could not record build failure in {self.log.path}: {e}")


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"
