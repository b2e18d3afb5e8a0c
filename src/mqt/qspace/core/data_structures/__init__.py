# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Hilbert-space objects and subsystem-aware views."""

from .spaces import Factor, QObject, Space
from .view import QView, subview, unview

__all__ = ["Factor", "QObject", "QView", "Space", "subview", "unview"]
