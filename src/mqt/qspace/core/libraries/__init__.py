# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Libraries of ready-made factors."""

from .factor_library import osc, qubit

__all__ = ["osc", "qubit"]
