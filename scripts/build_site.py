#!/usr/bin/env python3
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
Build the static site distribution.

Usage:
  python scripts/build_site.py
  python scripts/build_site.py --source site --dist _dist
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.app_config import ConfigManager  # noqa: E402
from core.build.site_builder import SiteBuilder, format_size  # noqa: E402
from utils.error_handler import BuildError  # noqa: E402
from utils.logger import setup_logging  # noqa: E402

logger = logging.getLogger("helloshell.build.cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Package the site tree for static serving.")
    parser.add_argument("--source", help="Site source directory (default: site.source_dir)")
    parser.add_argument("--dist", help="Distribution directory (default: site.dist_dir)")
    parser.add_argument("--log-dir", help="Directory for the application log file")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console and file log level",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(log_dir=args.log_dir, level=args.log_level)

    try:
        if args.source and args.dist:
            source_dir, dist_dir = Path(args.source), Path(args.dist)
        else:
            config = ConfigManager()
            source_dir = (
                Path(args.source) if args.source else config.resolve_path("site.source_dir")
            )
            dist_dir = Path(args.dist) if args.dist else config.resolve_path("site.dist_dir")
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        report = SiteBuilder(source_dir, dist_dir).build()
    except BuildError as e:
        step = f" during '{e.step}'" if e.step else ""
        logger.error(f"Build failed{step}: {e}")
        return 1

    print("")
    print("========================================")
    print("Build completed successfully!")
    print("========================================")
    print(f"Distribution created in: {report.dist_dir}")
    print(f"Build log saved to: {report.log_path}")
    print("")
    print("Statistics:")
    print(f"  - Files copied: {report.files_copied}")
    print(f"  - Directories created: {report.directories_created}")
    print(f"  - Total size: {format_size(report.total_size)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
