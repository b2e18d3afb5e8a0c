# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Tests for subsystem-aware views.

This module checks that multi-indices through a QView address exactly the element a manual Kronecker index
computation addresses, for kets and operators, sparse and dense, and that reads and writes pass through to
the wrapped array without copying.
"""

from __future__ import annotations

import itertools

import numpy as np
import pytest
import scipy.sparse

from mqt.qspace.core.data_structures.spaces import Factor
from mqt.qspace.core.data_structures.view import (
    QView,
    ravel_index,
    storage_layout,
    subview,
    unravel_index,
    unview,
)
from mqt.qspace.core.exceptions import MalformedIndexingError, UnsupportedRankError
from mqt.qspace.core.methods.tensor_product import tensor


def _random_matrix(rng: np.random.Generator, dim: int) -> np.ndarray:
    return rng.normal(size=(dim, dim)) + 1j * rng.normal(size=(dim, dim))


def test_storage_layout() -> None:
    """Dimensions are reversed in storage and row/column indices are permuted independently."""
    shape, perm = storage_layout((2, 3, 4), 1)
    assert shape == (4, 3, 2)
    assert list(perm) == [2, 1, 0]

    shape, perm = storage_layout((2, 3, 4), 2)
    assert shape == (4, 3, 2, 4, 3, 2)
    assert list(perm) == [2, 1, 0, 5, 4, 3]

    with pytest.raises(UnsupportedRankError):
        storage_layout((2, 3), 3)


def test_view_shape() -> None:
    """The caller-facing shape is in factor order."""
    space = tensor(Factor(2, "A"), Factor(3, "B"), Factor(4, "C"))
    view = subview(space, space("iii"))

    assert view.rank == 2
    assert view.shape == (2, 3, 4, 2, 3, 4)
    assert view.ndim == 6
    assert len(view) == 24 * 24
    assert repr(view) == "QView(shape=(2, 3, 4, 2, 3, 4), rank=2)"


def test_ket_round_trip() -> None:
    """A flat basis vector e_i has a single nonzero multi-index, the one belonging to i."""
    space = tensor(Factor(2, "A"), Factor(3, "B"))

    for i in range(6):
        view = subview(space, space[i])
        assert view.rank == 1
        expected = divmod(i, 3)
        for multi in itertools.product(range(2), range(3)):
            assert view[multi] == (1 if multi == expected else 0)
        assert view.unravel(view.ravel(*expected)) == expected


def test_dense_ket_view() -> None:
    """1D numpy arrays are viewed as kets."""
    space = tensor(Factor(2, "A"), Factor(3, "B"))
    vec = np.arange(6)
    view = subview(space, vec)

    assert view.rank == 1
    assert view[1, 1] == 4
    assert view.flat_position(1, 1) == (4,)
    assert view.multi_index(5) == (1, 2)


def test_kron_product_entries() -> None:
    """view[i1, i2, i3, j1, j2, j3] equals a[i1, j1] * b[i2, j2] * c[i3, j3]."""
    rng = np.random.default_rng(7)
    a, b, c = _random_matrix(rng, 2), _random_matrix(rng, 3), _random_matrix(rng, 3)
    abc = np.kron(np.kron(a, b), c)
    space = tensor(Factor(2, "A"), Factor(3, "B"), Factor(3, "C"))

    view = subview(space, abc)
    assert np.isclose(view[1, 0, 2, 0, 1, 0], a[1, 0] * b[0, 1] * c[2, 0])

    sparse_view = subview(space, scipy.sparse.csr_matrix(abc))
    for i1, i2, i3, j1, j2, j3 in itertools.product(range(2), range(3), range(3), range(2), range(3), range(3)):
        expected = a[i1, j1] * b[i2, j2] * c[i3, j3]
        assert np.isclose(view[i1, i2, i3, j1, j2, j3], expected)
        assert np.isclose(sparse_view[i1, i2, i3, j1, j2, j3], expected)


def test_flat_coordinates() -> None:
    """Multi-indices map to the expected (row, col) of the flat matrix and back."""
    space = tensor(Factor(2, "A"), Factor(3, "B"))
    view = subview(space, np.zeros((6, 6)))

    assert view.flat_position(1, 2, 0, 1) == (5, 1)
    assert view.multi_index(5, 1) == (1, 2, 0, 1)
    assert view.ravel(1, 2, 0, 1) == 5 + 6 * 1
    assert view.unravel(11) == (1, 2, 0, 1)


def test_linear_index() -> None:
    """A single integer addresses the storage linear index, i.e. row + N * col."""
    space = tensor(Factor(2, "A"), Factor(3, "B"))
    mat = np.arange(36).reshape(6, 6)
    view = subview(space, mat)

    assert view[7] == mat[1, 1]
    assert view[6 * 4 + 3] == mat[3, 4]
    with pytest.raises(IndexError):
        view[36]


def test_vectorized_index_mapping() -> None:
    """ravel_index and unravel_index accept integer arrays."""
    shape, perm = storage_layout((2, 3), 2)
    linear = np.arange(36)
    multi = unravel_index(linear, shape, perm)

    assert len(multi) == 4
    assert np.array_equal(ravel_index(multi, shape, perm), linear)
    rows = multi[0] * 3 + multi[1]
    cols = multi[2] * 3 + multi[3]
    assert np.array_equal(rows + 6 * cols, linear)


def test_writes_pass_through() -> None:
    """Assignments through the view modify the wrapped array in place."""
    space = tensor(Factor(2, "A"), Factor(3, "B"))
    mat = np.zeros((6, 6), dtype=complex)
    view = subview(space, mat)

    view[1, 2, 0, 1] = 5.0
    assert mat[5, 1] == 5.0

    lil = scipy.sparse.lil_matrix((6, 6), dtype=complex)
    sparse_view = subview(space, lil)
    sparse_view[0, 1, 1, 0] = 2.0j
    assert lil[1, 3] == 2.0j
    assert sparse_view[0, 1, 1, 0] == 2.0j


def test_unview_returns_same_object() -> None:
    """unview gives back the wrapped array itself."""
    space = tensor(Factor(2, "A"), Factor(2, "B"))
    op = space("ii")
    view = subview(space, op)

    assert unview(view) is op
    assert isinstance(view, QView)


def test_view_on_factor() -> None:
    """A factor is viewed as a one-factor space."""
    f = Factor(3, "A")
    mat = np.arange(9).reshape(3, 3)
    view = subview(f, mat)

    assert view.shape == (3, 3)
    assert view[2, 1] == mat[2, 1]


def test_unsupported_rank() -> None:
    """Only vectors and matrices can be viewed."""
    space = tensor(Factor(2, "A"), Factor(2, "B"))

    with pytest.raises(UnsupportedRankError):
        subview(space, np.zeros((4, 4, 4)))
    with pytest.raises(ValueError, match="rank"):
        subview(space, np.array(1.0))


def test_shape_mismatch() -> None:
    """The array must fit the space."""
    space = tensor(Factor(2, "A"), Factor(3, "B"))

    with pytest.raises(ValueError, match="does not fit"):
        subview(space, np.zeros((5, 5)))
    with pytest.raises(ValueError, match="does not fit"):
        subview(space, np.zeros(5))


def test_malformed_view_indexing() -> None:
    """Index tuples must have one entry per axis and stay within each factor."""
    space = tensor(Factor(2, "A"), Factor(3, "B"))
    view = subview(space, np.zeros((6, 6)))

    with pytest.raises(MalformedIndexingError):
        view[0, 0, 0]
    with pytest.raises(IndexError):
        view[2, 0, 0, 0]
