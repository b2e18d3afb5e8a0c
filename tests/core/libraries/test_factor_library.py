# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Tests for the library of ready-made factors.

This module verifies the operator catalogues of the oscillator and the qubit factors: the operator names and
their order, the ladder-operator matrix elements, hermiticity of the quadratures and the Pauli matrices.
"""

from __future__ import annotations

import numpy as np
import pytest
import scipy.sparse

from mqt.qspace.core.exceptions import InvalidDimensionError
from mqt.qspace.core.libraries.factor_library import osc, qubit


def test_osc_catalogue() -> None:
    """The oscillator carries identity, ladder, number and quadrature operators."""
    o = osc(4)

    assert o.dim == 4
    assert o.name == "Osc(4)"
    assert list(o.ops) == ["i", "d", "u", "n", "x", "y"]
    for op in o.ops.values():
        assert scipy.sparse.issparse(op)
        assert op.shape == (4, 4)


def test_osc_ladder_operators() -> None:
    """d|n> = sqrt(n)|n-1> and u is its adjoint."""
    o = osc(4)
    d = o("d").toarray()

    assert np.allclose(d, np.diag(np.sqrt([1, 2, 3]), k=1))
    assert np.allclose(o("u").toarray(), d.conj().T)
    assert np.allclose(o("n").toarray(), np.diag([0, 1, 2, 3]))
    assert np.allclose((o("u") @ o("d")).toarray(), o("n").toarray())

    # [d, u] = 1 below the truncation
    commutator = (o("d") @ o("u") - o("u") @ o("d")).toarray()
    assert np.allclose(np.diag(commutator)[:-1], 1)


def test_osc_quadratures_are_hermitian() -> None:
    """x = d + u and y = i (u - d) are hermitian."""
    o = osc(5)
    for key in ("x", "y"):
        op = o(key).toarray()
        assert np.allclose(op, op.conj().T)
    assert np.allclose(o("y").toarray(), 1j * (o("u") - o("d")).toarray())


def test_osc_name_and_minimal_size() -> None:
    """A custom name is kept and a single level is a valid, trivial oscillator."""
    assert osc(3, "cavity").name == "cavity"

    o = osc(1)
    assert o("d").nnz == 0
    assert np.allclose(o("i").toarray(), [[1]])


@pytest.mark.parametrize("levels", [0, -1])
def test_osc_invalid_levels(levels: int) -> None:
    """Oscillators need at least one level."""
    with pytest.raises(InvalidDimensionError):
        osc(levels)


def test_qubit_catalogue() -> None:
    """The qubit replaces the number operator by the Pauli Z."""
    q = qubit()

    assert q.dim == 2
    assert q.name == "Qubit"
    assert list(q.ops) == ["i", "d", "u", "x", "y", "z"]
    assert qubit("Q").name == "Q"


def test_qubit_pauli_matrices() -> None:
    """x, y and z are the Pauli matrices in the basis |0>, |1>."""
    q = qubit()

    assert np.allclose(q("x").toarray(), [[0, 1], [1, 0]])
    assert np.allclose(q("y").toarray(), [[0, -1j], [1j, 0]])
    assert np.allclose(q("z").toarray(), [[-1, 0], [0, 1]])
    assert np.allclose((q("d") @ q[1]).toarray(), q[0].toarray())
