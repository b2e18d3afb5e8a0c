# Copyright (c) 2025 - 2026 Chair for Design Automation, TUM
# All rights reserved.
#
# SPDX-License-Identifier: MIT
#
# Licensed under the MIT License

"""Basis states, projectors and the Hilbert-Schmidt inner product."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import numpy as np
import scipy.sparse
import scipy.sparse.linalg
from scipy.sparse import issparse

from ..data_structures.spaces import DTYPE

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..data_structures.spaces import QObject


def _as_column(ket: Any) -> scipy.sparse.csr_matrix:  # noqa: ANN401
    """Sparse ``(N, 1)`` column from a sparse column or a 1D/2D array."""
    if not issparse(ket):
        ket = np.asarray(ket)
        if ket.ndim == 1:
            ket = ket.reshape(-1, 1)
    if ket.ndim != 2 or ket.shape[1] != 1:
        msg = f"Expected a column vector, got shape {ket.shape}."
        raise ValueError(msg)
    return scipy.sparse.csr_matrix(ket, dtype=DTYPE)


def _is_ket(x: Any) -> bool:  # noqa: ANN401
    return np.ndim(x) == 1 or x.shape[1] == 1


def groundvec(obj: QObject) -> scipy.sparse.csr_matrix:
    """Ground-state ket ``|0>`` of ``obj``."""
    return obj[0]


def ground(obj: QObject) -> scipy.sparse.csr_matrix:
    """Ground-state density matrix ``|0><0|`` of ``obj``."""
    return obj[0, 0]


def projector(ket: Any) -> scipy.sparse.csr_matrix:  # noqa: ANN401
    """Normalized projector ``|psi><psi| / <psi|psi>``.

    Raises:
        ValueError: If ``ket`` is not a column vector or is zero.
    """
    psi = _as_column(ket)
    rho = psi @ psi.conj().T
    norm = rho.diagonal().sum()
    if norm == 0:
        msg = "Cannot build the projector of a zero vector."
        raise ValueError(msg)
    return scipy.sparse.csr_matrix(rho / norm)


def transition(ket_left: Any, ket_right: Any) -> scipy.sparse.csr_matrix:  # noqa: ANN401
    """Normalized transition operator ``|l><r| / (||l|| ||r||)``."""
    left, right = _as_column(ket_left), _as_column(ket_right)
    scale = scipy.sparse.linalg.norm(left) * scipy.sparse.linalg.norm(right)
    return scipy.sparse.csr_matrix((left @ right.conj().T) / scale)


def inner(a: Any, b: Any) -> np.complex128:  # noqa: ANN401
    """Hilbert-Schmidt inner product ``tr(a^dagger b)``; for kets this is ``<a|b>``.

    Raises:
        ValueError: If the shapes differ.
    """
    if issparse(a) or issparse(b):
        if _is_ket(a) and _is_ket(b):
            a, b = _as_column(a), _as_column(b)
        else:
            a, b = scipy.sparse.csr_matrix(a), scipy.sparse.csr_matrix(b)
        if a.shape != b.shape:
            msg = f"Shape mismatch: {a.shape} vs {b.shape}."
            raise ValueError(msg)
        return np.complex128(a.conj().multiply(b).sum())
    a, b = np.asarray(a), np.asarray(b)
    if a.shape != b.shape:
        msg = f"Shape mismatch: {a.shape} vs {b.shape}."
        raise ValueError(msg)
    return np.complex128(np.vdot(a, b))


def bra(ket: Any) -> Callable[[Any], np.complex128]:  # noqa: ANN401
    """Dual functional ``<ket|``, i.e. ``psi -> inner(ket, psi)``."""

    def apply(psi: Any) -> np.complex128:  # noqa: ANN401
        return inner(ket, psi)

    return apply
