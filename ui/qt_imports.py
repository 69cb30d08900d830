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
Centralized PySide6 imports for the UI layer.

Widgets import Qt classes from here so the set of Qt modules the desktop
shell depends on stays in one place.
"""

from PySide6.QtCore import (
    QEasingCurve,
    QObject,
    QSettings,
    Qt,
    QTimer,
    QUrl,
    QVariantAnimation,
    Signal,
)
from PySide6.QtGui import (
    QCloseEvent,
    QFont,
    QKeyEvent,
    QKeySequence,
    QResizeEvent,
    QShortcut,
    QShowEvent,
)
from PySide6.QtWidgets import (
    QApplication,
    QComboBox,
    QDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSizePolicy,
    QSlider,
    QStackedWidget,
    QTextBrowser,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

__all__ = [
    "QApplication",
    "QCloseEvent",
    "QComboBox",
    "QDialog",
    "QEasingCurve",
    "QFont",
    "QHBoxLayout",
    "QKeyEvent",
    "QKeySequence",
    "QLabel",
    "QMainWindow",
    "QObject",
    "QPushButton",
    "QResizeEvent",
    "QSettings",
    "QShortcut",
    "QShowEvent",
    "QSizePolicy",
    "QSlider",
    "QStackedWidget",
    "QTextBrowser",
    "QTextEdit",
    "QTimer",
    "QUrl",
    "QVBoxLayout",
    "QVariantAnimation",
    "QWidget",
    "Qt",
    "Signal",
]
