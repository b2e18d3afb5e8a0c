# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Tensor Product.

This module implements the tensor product for both plain arrays and quantum objects. For arrays it is the
Kronecker product. For factors and spaces it concatenates the factor lists and fills the operator catalogue of
the new space with the Kronecker product of every combination of named operators, keyed by the concatenated
names, e.g. ``qubit() * qubit()`` holds ``"xz" = kron(x, z)``.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Any, cast

import numpy as np
import scipy.sparse
from scipy.sparse import issparse

from ..data_structures.spaces import QObject, Space

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray

logger = logging.getLogger(__name__)

SPARSE_FORMAT = "csr"


def _kron_all_dense(
    ops: list[NDArray[np.complex128]],
) -> NDArray[np.complex128]:
    """Compute the Kronecker product of a list of dense matrices.

    Args:
        ops: A list of dense numpy arrays to tensor product together.

    Returns:
        The resulting dense matrix as a numpy array.
    """
    res = ops[0]
    for op in ops[1:]:
        res = np.kron(res, op)
    return np.asarray(res, dtype=complex)


def _as_sparse(op: Any) -> scipy.sparse.spmatrix:  # noqa: ANN401
    if issparse(op):
        return op
    arr = np.asarray(op)
    # 1D arrays are kets, i.e. columns
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    return scipy.sparse.csr_matrix(arr)


def _kron_all_sparse(
    ops: list[Any],
    fmt: str,
) -> scipy.sparse.spmatrix:
    """Compute the Kronecker product of a list of matrices (sparse or dense) returning sparse.

    Args:
        ops: A list of matrices (dense or sparse) to tensor product together.
        fmt: Sparse format of the result.

    Returns:
        The resulting sparse matrix.
    """
    res = _as_sparse(ops[0])
    for op in ops[1:]:
        res = scipy.sparse.kron(res, _as_sparse(op), format=fmt)
    return cast("scipy.sparse.spmatrix", res.asformat(fmt))


def kron_all(ops: Sequence[Any], fmt: str | None = None) -> Any:  # noqa: ANN401
    """Kronecker product of a sequence of arrays, in order.

    Args:
        ops: Operators or kets, dense or sparse.
        fmt: Sparse format of the result. Defaults to :data:`SPARSE_FORMAT`.

    Returns:
        A dense array if every input is dense, otherwise a sparse matrix.

    Raises:
        ValueError: If ``ops`` is empty.
    """
    ops = list(ops)
    if not ops:
        msg = "Kronecker product of an empty sequence."
        raise ValueError(msg)
    if any(issparse(op) for op in ops):
        return _kron_all_sparse(ops, fmt or SPARSE_FORMAT)
    return _kron_all_dense(ops)


def tensor(*operands: Any) -> Any:  # noqa: ANN401
    """Tensor product of factors/spaces or of plain arrays.

    For quantum objects the result is a new :class:`Space` whose factors are the operands' factors in
    operand order. For every combination of one named operator per operand, its catalogue holds the
    Kronecker product under the concatenated names. The product is associative: ``(a * b) * c`` and
    ``a * (b * c)`` have the same factors, names and operators.

    Args:
        *operands: Only factors and spaces, or only arrays.

    Returns:
        The composed :class:`Space`, or the Kronecker product of the arrays.

    Raises:
        ValueError: If no operand is given.
        TypeError: If quantum objects and arrays are mixed.
    """
    if not operands:
        msg = "tensor() needs at least one operand."
        raise ValueError(msg)
    is_quantum = [isinstance(operand, QObject) for operand in operands]
    if not any(is_quantum):
        return kron_all(operands)
    if not all(is_quantum):
        msg = "Cannot take the tensor product of quantum objects and plain arrays."
        raise TypeError(msg)

    spaces = [operand if isinstance(operand, Space) else Space(operand) for operand in operands]
    factors = [f for space in spaces for f in space.factors]
    ops: dict[str, Any] = {}
    for combination in itertools.product(*(space.ops.items() for space in spaces)):
        key = "".join(name for name, _ in combination)
        if key in ops:
            logger.warning("Operator name %r produced by more than one combination; keeping the last.", key)
        ops[key] = kron_all([op for _, op in combination])

    logger.debug("Composed %d operands into %d factors with %d operators.", len(spaces), len(factors), len(ops))
    return Space(factors, ops)
