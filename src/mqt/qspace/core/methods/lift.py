# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Embedding of single-factor operators into a joint space."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..data_structures.spaces import IDENTITY
from ..exceptions import InvalidSubsystemError
from .tensor_product import kron_all

if TYPE_CHECKING:
    from ..data_structures.spaces import QObject


def lift(obj: QObject, position: int, op: Any, fmt: str | None = None) -> Any:  # noqa: ANN401
    """Lift an operator on one factor into the joint space.

    Constructs ``I (x) ... (x) op (x) ... (x) I`` with ``op`` at ``position`` and the identity of every
    other factor elsewhere, without touching the operator catalogue of the space.

    Args:
        obj: The joint space (a factor counts as a one-factor space).
        position: Index of the factor ``op`` acts on.
        op: Square operator on that factor, dense or sparse.
        fmt: Sparse format of the result.

    Returns:
        The lifted operator.

    Raises:
        InvalidSubsystemError: If ``position`` is not a factor index.
        ValueError: If ``op`` does not match the dimension of the factor.
    """
    factors = obj.factors
    if not 0 <= position < len(factors):
        msg = f"Position {position} outside [0, {len(factors) - 1}] for {obj.name}."
        raise InvalidSubsystemError(msg)
    dim = factors[position].dim
    if tuple(op.shape) != (dim, dim):
        msg = f"Operator of shape {tuple(op.shape)} cannot act on factor {position} of dimension {dim}."
        raise ValueError(msg)

    ops = [f(IDENTITY) for f in factors]
    ops[position] = op
    return kron_all(ops, fmt)
