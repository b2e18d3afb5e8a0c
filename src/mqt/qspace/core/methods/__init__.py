# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Algorithms on tensor-product spaces: composition, lifting and partial trace."""

from .lift import lift
from .partial_trace import ptrace
from .states import bra, ground, groundvec, inner, projector, transition
from .tensor_product import kron_all, tensor

__all__ = ["bra", "ground", "groundvec", "inner", "kron_all", "lift", "projector", "ptrace", "tensor", "transition"]
