# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Subsystem-Aware Views.

This module implements the bijection between the flat index of an operator (or ket) on a tensor-product
space and the multi-index that labels each tensor factor separately. The flat index of a Kronecker product
has the first factor varying slowest. Reading the flat storage column-major with the factor dimensions in
reverse order therefore yields one storage axis per factor, and a fixed permutation brings those axes back
into factor order. All index arithmetic lives in :func:`storage_layout`, :func:`ravel_index` and
:func:`unravel_index`; the :class:`QView` wrapper, the basis-element constructors and the partial trace
all go through them.

Example: for ``T = kron(a, b)`` on a space with dimensions ``(2, 3)``::

    view = subview(space, T)
    view[i, k, j, l] == a[i, j] * b[k, l]
"""

from __future__ import annotations

from math import prod
from typing import TYPE_CHECKING, Any

import numpy as np

from ..exceptions import MalformedIndexingError, UnsupportedRankError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import NDArray

    from .spaces import QObject


def storage_layout(dims: Sequence[int], rank: int) -> tuple[tuple[int, ...], NDArray[np.intp]]:
    """Storage shape and index permutation of a flat array over the given factor dimensions.

    The storage multi-index of a caller multi-index ``m`` is ``m[perm]``. For dimensions ``(2, 3, 4)``
    a vector is stored as ``(4, 3, 2)`` with ``perm = [2, 1, 0]`` and a matrix as ``(4, 3, 2, 4, 3, 2)``
    with ``perm = [2, 1, 0, 5, 4, 3]``, i.e. row and column multi-indices are reversed independently.

    Args:
        dims: Dimensions of the tensor factors in factor order.
        rank: 1 for kets, 2 for operators.

    Returns:
        The storage shape (first axis fastest) and the permutation.

    Raises:
        UnsupportedRankError: If ``rank`` is neither 1 nor 2.
    """
    num_factors = len(dims)
    reversed_dims = tuple(int(d) for d in reversed(dims))
    rows = np.arange(num_factors, dtype=np.intp)[::-1]
    if rank == 1:
        return reversed_dims, rows
    if rank == 2:
        return reversed_dims * 2, np.concatenate((rows, rows + num_factors))
    msg = f"Views require a 1D or 2D array, got rank {rank}."
    raise UnsupportedRankError(msg)


def ravel_index(multi_index: Sequence[Any], storage_shape: Sequence[int], perm: NDArray[np.intp]) -> Any:  # noqa: ANN401
    """Convert a multi-index in factor order into a storage linear index.

    Works elementwise on integer arrays, so whole sets of coordinates can be converted at once.

    Args:
        multi_index: One index (or integer array) per axis, in factor order.
        storage_shape: Storage shape from :func:`storage_layout`.
        perm: Permutation from :func:`storage_layout`.

    Returns:
        The linear index (or array of indices) into the storage, first storage axis fastest.

    Raises:
        MalformedIndexingError: If the number of indices does not match the number of axes.
        IndexError: If an index lies outside its factor.
    """
    if len(multi_index) != len(perm):
        msg = f"Expected {len(perm)} indices, got {len(multi_index)}."
        raise MalformedIndexingError(msg)
    storage_index = tuple(multi_index[p] for p in perm)
    try:
        return np.ravel_multi_index(storage_index, tuple(storage_shape), order="F")
    except ValueError as err:
        msg = f"Index {tuple(multi_index)} out of bounds."
        raise IndexError(msg) from err


def unravel_index(linear: Any, storage_shape: Sequence[int], perm: NDArray[np.intp]) -> tuple[Any, ...]:  # noqa: ANN401
    """Convert a storage linear index into a multi-index in factor order.

    Inverse of :func:`ravel_index`; also works elementwise on integer arrays.

    Args:
        linear: Linear storage index (or integer array of them).
        storage_shape: Storage shape from :func:`storage_layout`.
        perm: Permutation from :func:`storage_layout`.

    Returns:
        One index (or integer array) per axis, in factor order.

    Raises:
        IndexError: If ``linear`` lies outside the storage.
    """
    try:
        storage_index = np.unravel_index(linear, tuple(storage_shape), order="F")
    except ValueError as err:
        msg = f"Linear index {linear} out of bounds for storage of size {prod(storage_shape)}."
        raise IndexError(msg) from err
    inverse = np.argsort(perm)
    return tuple(storage_index[q] for q in inverse)


def _detect_rank(data: Any, length: int) -> int:  # noqa: ANN401
    ndim = data.ndim if hasattr(data, "ndim") else np.ndim(data)
    if ndim == 1:
        return 1
    if ndim == 2:
        # sparse kets are stored as (N, 1) columns
        if data.shape[1] == 1 and data.shape[0] == length and length != 1:
            return 1
        return 2
    msg = f"Views require a 1D or 2D array, got rank {ndim}."
    raise UnsupportedRankError(msg)


class QView:
    """View on a flat operator or ket that makes the subsystem indices explicit.

    The view never copies: reads and writes go straight to the wrapped array. Use :func:`subview` to
    create a view and :func:`unview` to get the wrapped array back.

    Attributes:
        data: The wrapped flat array (sparse matrix, sparse column or numpy array).
        dims: Dimensions of the tensor factors, in factor order.
        rank: 1 for a ket, 2 for an operator.
        storage_shape: Reinterpreted storage shape, see :func:`storage_layout`.
        perm: Permutation from caller multi-index order to storage order.
        shape: Caller-facing multi-index shape, ``dims`` for kets and ``dims + dims`` for operators.
    """

    def __init__(self, data: Any, dims: Sequence[int], rank: int | None = None) -> None:  # noqa: ANN401
        """Initialize the view.

        Args:
            data: The flat array to wrap.
            dims: Dimensions of the tensor factors.
            rank: Force the rank instead of detecting it from the shape of ``data``.

        Raises:
            UnsupportedRankError: If the data is neither a vector nor a matrix.
            ValueError: If the shape of the data does not match ``dims``.
        """
        self.data = data
        self.dims = tuple(int(d) for d in dims)
        self.length = prod(self.dims)
        self.rank = _detect_rank(data, self.length) if rank is None else rank
        self.storage_shape, self.perm = storage_layout(self.dims, self.rank)
        self.shape = tuple(self.storage_shape[p] for p in self.perm)

        expected = (self.length, self.length) if self.rank == 2 else (self.length,)
        if tuple(data.shape[: len(expected)]) != expected:
            msg = f"Array of shape {data.shape} does not fit a space of dimensions {self.dims}."
            raise ValueError(msg)

    @property
    def ndim(self) -> int:
        """Number of multi-index axes."""
        return len(self.shape)

    def __len__(self) -> int:
        """Total number of addressable elements."""
        return prod(self.shape)

    def __repr__(self) -> str:
        """Short description; the apparent layout differs from the stored one."""
        return f"QView(shape={self.shape}, rank={self.rank})"

    def ravel(self, *multi_index: int) -> int:
        """Storage linear index of a multi-index."""
        return int(ravel_index(multi_index, self.storage_shape, self.perm))

    def unravel(self, linear: int) -> tuple[int, ...]:
        """Multi-index of a storage linear index."""
        return tuple(int(i) for i in unravel_index(linear, self.storage_shape, self.perm))

    def _position(self, linear: int) -> tuple[int, ...]:
        if not 0 <= linear < len(self):
            msg = f"Linear index {linear} out of bounds for view of size {len(self)}."
            raise IndexError(msg)
        if self.rank == 1:
            return (linear, 0) if self.data.ndim == 2 else (linear,)
        col, row = divmod(linear, self.length)
        return row, col

    def flat_position(self, *multi_index: int) -> tuple[int, ...]:
        """Coordinate in the wrapped flat array addressed by a multi-index.

        Returns:
            ``(row, col)`` for operators, ``(row,)`` for kets.
        """
        position = self._position(self.ravel(*multi_index))
        return position[:1] if self.rank == 1 else position

    def multi_index(self, row: int, col: int = 0) -> tuple[int, ...]:
        """Multi-index of a coordinate in the wrapped flat array."""
        linear = row if self.rank == 1 else row + self.length * col
        return self.unravel(linear)

    def _linear(self, index: Any) -> int:  # noqa: ANN401
        if isinstance(index, (int, np.integer)):
            return int(index)
        return self.ravel(*index)

    def __getitem__(self, index: Any) -> Any:  # noqa: ANN401
        """Read an element by multi-index or by storage linear index."""
        return self.data[self._position(self._linear(index))]

    def __setitem__(self, index: Any, value: Any) -> None:  # noqa: ANN401
        """Write an element of the wrapped array by multi-index or by storage linear index."""
        self.data[self._position(self._linear(index))] = value


def subview(obj: QObject, data: Any) -> QView:  # noqa: ANN401
    """Wrap a flat operator or ket on ``obj`` in a :class:`QView`.

    Example:
        For dimensions ``(2, 2, 3)`` and ``abc = kron(a, b, c)``,
        ``subview(space, abc)[1, 0, 2, 0, 1, 0] == a[1, 0] * b[0, 1] * c[2, 0]``.

    Args:
        obj: The factor or space the data lives on.
        data: Flat operator (``N x N``) or ket (``N``-vector or ``N x 1`` column).

    Returns:
        The view.
    """
    return QView(data, obj.dims)


def unview(view: QView) -> Any:  # noqa: ANN401
    """Return the flat array wrapped by ``view`` (the same object, not a copy)."""
    return view.data
