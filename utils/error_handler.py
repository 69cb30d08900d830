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
统一错误处理器

定义外壳路由、内容加载和站点构建的错误类型，并将异常转换为用户友好的错误信息。
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger("helloshell.errors")


class ErrorCategory(Enum):
    """错误类别"""

    ROUTING = "routing"
    TIMEOUT = "timeout"
    LOAD = "load"
    NOT_FOUND = "not_found"
    INITIALIZATION = "initialization"
    BUILD = "build"
    UNKNOWN = "unknown"

    def get_display_name(self) -> str:
        """Return the English display name for the category."""
        display_names = {
            ErrorCategory.ROUTING: "Routing",
            ErrorCategory.TIMEOUT: "Timeout",
            ErrorCategory.LOAD: "Load",
            ErrorCategory.NOT_FOUND: "Not Found",
            ErrorCategory.INITIALIZATION: "Initialization",
            ErrorCategory.BUILD: "Build",
            ErrorCategory.UNKNOWN: "Unknown",
        }
        return display_names.get(self, "Unknown")


# 自定义异常类
class HelloShellError(Exception):
    """HelloShell 基础异常类"""

    retryable = False

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN):
        super().__init__(message)
        self.category = category


class UnknownRouteError(HelloShellError):
    """请求的页面不在路由表中"""

    retryable = True

    def __init__(self, page_id: str, message: Optional[str] = None):
        self.page_id = page_id
        if message is None:
            message = f"Unknown application: {page_id}"
        super().__init__(message, ErrorCategory.ROUTING)


class LoadTimeoutError(HelloShellError):
    """内容框架在超时时间内未完成加载"""

    retryable = True

    def __init__(self, page_id: str, timeout_ms: int, message: Optional[str] = None):
        self.page_id = page_id
        self.timeout_ms = timeout_ms
        if message is None:
            message = f"Loading timed out after {timeout_ms} ms"
        super().__init__(message, ErrorCategory.TIMEOUT)


class LoadFailedError(HelloShellError):
    """资源加载器报告加载失败"""

    retryable = True

    def __init__(self, page_id: str, reason: str = "", message: Optional[str] = None):
        self.page_id = page_id
        self.reason = reason
        if message is None:
            message = "Failed to load the application"
        super().__init__(message, ErrorCategory.LOAD)


class ContentNotFoundError(HelloShellError):
    """已加载的内容本身是一个错误页面"""

    retryable = True

    def __init__(self, page_id: str, message: Optional[str] = None):
        self.page_id = page_id
        if message is None:
            message = "The requested application was not found"
        super().__init__(message, ErrorCategory.NOT_FOUND)


class InitializationError(HelloShellError):
    """页面内容文档无法加载，页面初始化失败"""

    def __init__(self, page_id: str, message: Optional[str] = None):
        self.page_id = page_id
        if message is None:
            message = f"Unable to load content for page '{page_id}'"
        super().__init__(message, ErrorCategory.INITIALIZATION)


class BuildError(HelloShellError):
    """站点构建失败"""

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message, ErrorCategory.BUILD)
        self.step = step


class ErrorHandler:
    """统一错误处理器"""

    @staticmethod
    def handle_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        统一错误处理

        Args:
            error: 异常对象
            context: 错误上下文信息（可选）

        Returns:
            包含错误信息的字典:
            {
                "user_message": "用户友好的错误消息",
                "technical_details": "技术细节（用于日志）",
                "retry_possible": True/False,
                "category": "错误类别"
            }
        """
        context = context or {}

        if isinstance(error, HelloShellError):
            logger.warning(
                f"{type(error).__name__}: {error}",
                extra={"context": context},
            )
            return {
                "user_message": str(error),
                "technical_details": ErrorHandler._technical_details(error),
                "retry_possible": error.retryable,
                "category": error.category.value,
            }

        # 未预期的异常记录完整堆栈
        logger.error(
            f"Error occurred: {type(error).__name__}: {error}",
            exc_info=error,
            extra={"context": context},
        )

        if isinstance(error, FileNotFoundError):
            return {
                "user_message": "File not found",
                "technical_details": str(error),
                "retry_possible": False,
                "category": ErrorCategory.LOAD.value,
            }

        if isinstance(error, TimeoutError):
            return {
                "user_message": "The operation timed out",
                "technical_details": str(error),
                "retry_possible": True,
                "category": ErrorCategory.TIMEOUT.value,
            }

        return {
            "user_message": "An unexpected error occurred",
            "technical_details": f"{type(error).__name__}: {error}",
            "retry_possible": False,
            "category": ErrorCategory.UNKNOWN.value,
        }

    @staticmethod
    def _technical_details(error: HelloShellError) -> str:
        page_id = getattr(error, "page_id", None)
        reason = getattr(error, "reason", "")
        details = f"{type(error).__name__}: {error}"
        if page_id:
            details += f" (page={page_id})"
        if reason:
            details += f" reason={reason}"
        return details

    @staticmethod
    def is_retryable(error_info: Dict[str, Any]) -> bool:
        """
        判断错误是否可重试

        Args:
            error_info: handle_error 返回的错误信息字典

        Returns:
            是否可重试
        """
        return error_info.get("retry_possible", False)
