# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Partial Trace.

This module traces a single factor out of an operator on a tensor-product space while staying sparse. Only
the stored entries of the operator are visited: each is converted into its row/column multi-index, entries
that are off-diagonal in the traced factor are dropped, and the rest are summed per remaining multi-index.
Multi-indices without a surviving entry are never materialized.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import numpy as np
import scipy.sparse
from scipy.sparse import issparse

from ..data_structures.spaces import DTYPE
from ..data_structures.view import QView, ravel_index, storage_layout, subview, unravel_index, unview
from ..exceptions import InvalidSubsystemError, UnsupportedRankError
from .tensor_product import SPARSE_FORMAT, tensor

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from ..data_structures.spaces import QObject, Space

logger = logging.getLogger(__name__)


def _distinct_entries(flat: Any) -> tuple[NDArray[np.intp], NDArray[np.intp], NDArray[Any]]:  # noqa: ANN401
    """Rows, columns and values of the stored entries, each coordinate once.

    Duplicate coordinates of a sparse matrix are summed, which is the value the matrix represents there.
    """
    if issparse(flat):
        coo = flat.tocoo(copy=True)
        coo.sum_duplicates()
        return coo.row.astype(np.intp), coo.col.astype(np.intp), coo.data
    arr = np.asarray(flat)
    rows, cols = np.nonzero(arr)
    return rows.astype(np.intp), cols.astype(np.intp), arr[rows, cols]


def _trace(flat: Any) -> np.complex128:  # noqa: ANN401
    return np.complex128(flat.diagonal().sum())


def ptrace(
    obj: QObject, position: int, op: QView | Any, fmt: str | None = None
) -> tuple[Space, scipy.sparse.spmatrix] | np.complex128:
    """Partial trace over the factor at ``position``.

    Args:
        obj: The space ``op`` lives on.
        position: Index of the factor to trace out.
        op: Operator on ``obj``, either as a :class:`QView` or as a flat (sparse or dense) matrix.
        fmt: Sparse format of the reduced operator. Defaults to the composer's format.

    Returns:
        ``(reduced_space, reduced_operator)``. If ``obj`` has a single factor, nothing remains and the full
        trace is returned as a scalar instead.

    Raises:
        UnsupportedRankError: If ``op`` is a ket.
        InvalidSubsystemError: If ``position`` is not a factor index.
        ValueError: If the view does not match the dimensions of ``obj``.
    """
    view = op if isinstance(op, QView) else subview(obj, op)
    if view.rank != 2:
        msg = "Partial trace requires an operator, got a ket."
        raise UnsupportedRankError(msg)
    if view.dims != obj.dims:
        msg = f"View with dimensions {view.dims} does not belong to {obj.name} with dimensions {obj.dims}."
        raise ValueError(msg)
    num_factors = obj.num_factors
    if not 0 <= position < num_factors:
        msg = f"Partial trace over nonexistent subsystem {position}; valid positions are 0 to {num_factors - 1}."
        raise InvalidSubsystemError(msg)

    flat = unview(view)
    if num_factors == 1:
        return _trace(flat)

    reduced_space = tensor(*(f for k, f in enumerate(obj.factors) if k != position))
    length = len(reduced_space)

    rows, cols, values = _distinct_entries(flat)
    multi_index = unravel_index(rows + view.length * cols, view.storage_shape, view.perm)

    # traced factor must sit on its diagonal
    column = position + num_factors
    diagonal = multi_index[position] == multi_index[column]
    truncated = [idx[diagonal] for k, idx in enumerate(multi_index) if k not in {position, column}]

    reduced_shape, reduced_perm = storage_layout(reduced_space.dims, 2)
    reduced_cols, reduced_rows = np.divmod(ravel_index(truncated, reduced_shape, reduced_perm), length)

    # COO keeps one entry per survivor; summing duplicates accumulates each truncated index
    accumulator = scipy.sparse.coo_matrix(
        (values[diagonal].astype(DTYPE), (reduced_rows, reduced_cols)), shape=(length, length)
    )
    accumulator.sum_duplicates()
    reduced = accumulator.asformat(fmt or SPARSE_FORMAT)

    logger.debug(
        "Traced out factor %d of %s: %d stored entries, %d on the diagonal, %d in the result.",
        position,
        obj.name,
        len(values),
        int(np.count_nonzero(diagonal)),
        reduced.nnz,
    )
    return reduced_space, reduced
