# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""MQT QSpace.

Sparse operators on explicit tensor products of labelled Hilbert-space factors, with subsystem-aware
indexing, operator lifting and partial traces that never densify the joint space.
"""

from .core.data_structures.spaces import Factor, Space
from .core.data_structures.view import QView, subview, unview
from .core.exceptions import (
    InvalidDimensionError,
    InvalidSubsystemError,
    MalformedIndexingError,
    QSpaceError,
    UnknownOperatorNameError,
    UnsupportedRankError,
)
from .core.libraries.factor_library import osc, qubit
from .core.methods.lift import lift
from .core.methods.partial_trace import ptrace
from .core.methods.states import bra, ground, groundvec, inner, projector, transition
from .core.methods.tensor_product import kron_all, tensor

__all__ = [
    "Factor",
    "InvalidDimensionError",
    "InvalidSubsystemError",
    "MalformedIndexingError",
    "QSpaceError",
    "QView",
    "Space",
    "UnknownOperatorNameError",
    "UnsupportedRankError",
    "bra",
    "ground",
    "groundvec",
    "inner",
    "kron_all",
    "lift",
    "osc",
    "projector",
    "ptrace",
    "qubit",
    "subview",
    "tensor",
    "transition",
    "unview",
]
