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
日志系统配置

提供集中式日志设置，支持文件轮转和控制台输出。
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from config.app_config import get_app_dir
from config.constants import APP_LOGGER_NAME

# 日志级别映射
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_FILE_NAME = "helloshell.log"


def setup_logging(
    log_dir: Optional[str] = None, level: Optional[str] = None, console_output: bool = True
) -> logging.Logger:
    """
    设置应用日志系统

    配置文件轮转处理器和控制台处理器。

    Args:
        log_dir: 日志文件目录，默认为 ~/.helloshell/logs
        level: 日志级别，默认根据环境变量 HELLOSHELL_ENV 决定
               (development: DEBUG, production: INFO)
        console_output: 是否输出到控制台，默认 True

    Returns:
        配置好的应用根日志器
    """
    # 确定日志目录
    if log_dir is None:
        log_path = get_app_dir() / "logs"
    else:
        log_path = Path(log_dir)

    log_path.mkdir(parents=True, exist_ok=True)

    # 确定日志级别
    if level is None:
        env = os.environ.get("HELLOSHELL_ENV", "production").lower()
        level = "DEBUG" if env == "development" else "INFO"

    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)

    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # 由处理器控制实际级别

    # 清除现有处理器，避免重复
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    # 文件处理器 - 详细日志，带轮转
    from config.constants import LOG_FILE_BACKUP_COUNT, LOG_FILE_MAX_BYTES

    log_file = log_path / LOG_FILE_NAME
    file_handler = RotatingFileHandler(
        log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUP_COUNT, encoding="utf-8"
    )
    file_handler.setLevel(log_level)
    file_formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )
    file_handler.setFormatter(file_formatter)
    logger.addHandler(file_handler)

    # 控制台处理器 - 简化日志
    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(max(log_level, logging.INFO))
        console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        logger.addHandler(console_handler)

    logger.info("Logging initialized")
    logger.debug(f"Log file: {log_file}")
    logger.debug(f"Log level: {level}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    获取特定模块的日志器实例

    Args:
        name: 模块名称（通常使用 __name__）

    Returns:
        日志器实例

    Example:
        logger = get_logger("shell.router")
        logger.info("This is an info message")
    """
    if name == APP_LOGGER_NAME or name.startswith(f"{APP_LOGGER_NAME}."):
        return logging.getLogger(name)

    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")


def set_log_level(level: str) -> None:
    """
    动态设置日志级别

    Args:
        level: 日志级别 (DEBUG/INFO/WARNING/ERROR/CRITICAL)
    """
    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)
    logger = logging.getLogger(APP_LOGGER_NAME)

    # 只更新文件处理器的级别
    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler):
            handler.setLevel(log_level)

    logger.info(f"Log level changed to: {level}")


def get_log_file_path() -> Path:
    """
    获取当前日志文件路径

    Returns:
        日志文件路径
    """
    logger = logging.getLogger(APP_LOGGER_NAME)

    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler):
            return Path(handler.baseFilename)

    return get_app_dir() / "logs" / LOG_FILE_NAME


def get_recent_logs(lines: Optional[int] = None) -> List[str]:
    """
    获取最近的日志行

    Args:
        lines: 要读取的行数，默认使用 DEFAULT_LOG_LINES_TO_READ

    Returns:
        日志行列表
    """
    if lines is None:
        from config.constants import DEFAULT_LOG_LINES_TO_READ

        lines = DEFAULT_LOG_LINES_TO_READ
    log_file = get_log_file_path()

    if not log_file.exists():
        return []

    try:
        with open(log_file, "r", encoding="utf-8") as f:
            all_lines = f.readlines()
            return all_lines[-lines:]
    except OSError as e:
        return [f"Error reading log file: {e}"]
