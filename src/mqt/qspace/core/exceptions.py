# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Exceptions raised by the tensor-product space core.

Every error derives from :class:`QSpaceError` and, in addition, from the builtin exception that
matches its meaning, so callers may catch either the specific class or the builtin one.
"""

from __future__ import annotations


class QSpaceError(Exception):
    """Base class of all errors raised by mqt.qspace."""


class InvalidDimensionError(QSpaceError, ValueError):
    """A factor was requested with a non-positive dimension."""


class UnsupportedRankError(QSpaceError, ValueError):
    """A view was requested on data that is neither a vector nor a matrix."""


class InvalidSubsystemError(QSpaceError, IndexError):
    """A subsystem position does not exist in the space."""


class UnknownOperatorNameError(QSpaceError, KeyError):
    """An operator name is missing from the operator catalogue of a factor or space."""

    def __str__(self) -> str:
        """Plain message, without the quoting KeyError applies."""
        return str(self.args[0]) if self.args else ""


class MalformedIndexingError(QSpaceError, IndexError):
    """An index tuple does not have one entry per subsystem (or two per subsystem for operators)."""
