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
HelloShell - Hello World pages in a desktop application shell

Main entry point for the application.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from config.app_config import ConfigManager
from config.constants import LOG_SEPARATOR_LENGTH, PAGE_IDS, PAGE_SHELL
from utils.error_handler import InitializationError
from utils.exception_handler import install_exception_hook
from utils.logger import set_log_level, setup_logging

logger = logging.getLogger("helloshell")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="HelloShell desktop application")
    parser.add_argument(
        "--page",
        choices=PAGE_IDS,
        default=PAGE_SHELL,
        help="Page to open (default: the application shell)",
    )
    parser.add_argument(
        "--initial-page",
        help="Page the shell navigates to first, overriding the last visited page",
    )
    parser.add_argument("--site-dir", help="Site source directory (default: site.source_dir)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: logging.level, or DEBUG when HELLOSHELL_ENV=development)",
    )
    return parser.parse_args(argv)


def create_window(page_id, store, scheduler, preferences, config, initial_page=None) -> Tuple:
    """
    Build the top-level window for ``page_id``.

    Returns:
        (window, start) where ``start`` runs once the window is shown
    """
    from core.shell.router import ShellRouter
    from ui.fallback_view import FallbackView
    from ui.page_loader import PageFrameLoader, default_page_factories
    from ui.page_window import PageWindow
    from ui.shell_window import ShellWindow

    factories = default_page_factories(scheduler, preferences)
    start: Callable[[], None] = lambda: None

    try:
        document = store.load_content(page_id)

        if page_id == PAGE_SHELL:
            loader = PageFrameLoader(
                store,
                document.route_table(),
                factories,
                store.root_dir / PAGE_SHELL,
                store.root_dir,
            )
            router = ShellRouter(
                document,
                scheduler,
                loader,
                preferences,
                default_page=config.get("shell.default_page"),
                resize_debounce_ms=config.get("shell.resize_debounce_ms", 250),
            )
            window = ShellWindow(
                router,
                loader,
                default_size=(
                    config.get("shell.window_width", 1024),
                    config.get("shell.window_height", 720),
                ),
            )
            loader.setParent(window)
            start = lambda: router.start(initial_page)
        elif page_id in factories:
            widget = factories[page_id](document)
            window = PageWindow(widget)
            start = widget.initialize
        else:
            raise InitializationError(page_id, f"Unknown page: {page_id}")

    except InitializationError as e:
        logger.error(f"Page '{page_id}' failed to initialize: {e}")
        window = PageWindow(FallbackView(e))
        start = lambda: None

    return window, start


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point."""
    args = parse_args(argv)

    logger = setup_logging(level=args.log_level)
    install_exception_hook(logger)
    logger.info("Global exception handler installed")

    logger.info("=" * LOG_SEPARATOR_LENGTH)
    logger.info("HelloShell Application Starting")
    logger.info("=" * LOG_SEPARATOR_LENGTH)

    try:
        config = ConfigManager()
    except Exception as e:
        logger.critical(f"Could not load configuration: {e}", exc_info=True)
        return 1

    if args.log_level is None and "HELLOSHELL_ENV" not in os.environ:
        set_log_level(config.get("logging.level", "INFO"))

    from PySide6.QtWidgets import QApplication

    from core.content.store import ContentStore
    from core.preferences.store import PreferenceStore
    from core.timers import QtTimerScheduler

    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("HelloShell")
    app.setOrganizationName("HelloShell")

    site_dir = Path(args.site_dir) if args.site_dir else config.resolve_path("site.source_dir")
    logger.info(f"Site directory: {site_dir}")

    scheduler = QtTimerScheduler(app)
    preferences = PreferenceStore(config.get_preferences_path())
    store = ContentStore(site_dir)

    window, start = create_window(
        args.page, store, scheduler, preferences, config, initial_page=args.initial_page
    )
    window.show()
    start()

    logger.info(f"Opened page: {args.page}")
    exit_code = app.exec()

    scheduler.cancel_all()
    logger.info(f"HelloShell exited with code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
